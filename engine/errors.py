"""Error kinds returned to callers and the extraction failure classifier."""

from __future__ import annotations

from typing import Any

ERROR_PRIVATE = "content.video.private"
ERROR_UNAVAILABLE = "content.video.unavailable"
ERROR_AGE = "content.video.age"
ERROR_REGION = "content.video.region"
ERROR_LIVE = "content.video.live"
ERROR_TOO_LONG = "content.too_long"
ERROR_FETCH_FAIL = "fetch.fail"
ERROR_NO_MATCHING_FORMAT = "youtube.no_matching_format"

ERROR_KINDS = frozenset(
    {
        ERROR_PRIVATE,
        ERROR_UNAVAILABLE,
        ERROR_AGE,
        ERROR_REGION,
        ERROR_LIVE,
        ERROR_TOO_LONG,
        ERROR_FETCH_FAIL,
        ERROR_NO_MATCHING_FORMAT,
    }
)

# Ordered mapping of yt-dlp failure text to error kinds; first match wins.
# "Video unavailable. ... not available in your country" classifies as
# unavailable because that entry comes first.
_EXTRACTION_SIGNAL_MAP: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        ERROR_PRIVATE,
        (
            "private video",
            "this video is private",
        ),
    ),
    (
        ERROR_UNAVAILABLE,
        (
            "video unavailable",
            "this video is unavailable",
        ),
    ),
    (
        ERROR_AGE,
        (
            "confirm your age",
            "age-restricted",
            "age restricted",
            "age restriction",
            "inappropriate for some users",
        ),
    ),
    (
        ERROR_REGION,
        (
            "available in your country",
            "geo-restricted",
            "geoblocked",
            "geo blocked",
        ),
    ),
)


class SelectionError(Exception):
    """Raised inside the selector; converted to an error payload at the boundary."""

    def __init__(self, kind: str, *, critical: bool = False) -> None:
        if kind not in ERROR_KINDS:
            raise ValueError(f"unknown error kind: {kind}")
        super().__init__(kind)
        self.kind = kind
        self.critical = critical

    def to_payload(self) -> dict[str, Any]:
        return error_payload(self.kind, critical=self.critical)


class ExtractionError(RuntimeError):
    """Raised by an extraction invoker; the message is the extractor's own text."""


def error_payload(kind: str, *, critical: bool = False) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": kind}
    if critical:
        payload["critical"] = True
    return payload


def classify_extraction_error(message: str | None) -> str:
    """Map an extractor failure message to an error kind, defaulting to ``fetch.fail``."""
    if not message:
        return ERROR_FETCH_FAIL
    lower_msg = str(message).lower()
    for kind, markers in _EXTRACTION_SIGNAL_MAP:
        if any(marker in lower_msg for marker in markers):
            return kind
    return ERROR_FETCH_FAIL
