"""Format descriptors and stream predicates for yt-dlp format lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

VIDEO_QUALITIES: tuple[int, ...] = (144, 240, 360, 480, 720, 1080, 1440, 2160, 4320)

_HLS_MARKERS = (".m3u8", "/manifest/hls")
_ORIGINAL_AUDIO_MARKER = "acont%3Doriginal"


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _int_or_none(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _float_or_none(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def normalize_quality(height: int | None) -> int:
    """Bucket a pixel height into the smallest standard tier that holds it.

    Heights above the ladder map to its top tier; a missing height counts as 0.
    """
    value = height or 0
    for quality in VIDEO_QUALITIES:
        if quality >= value:
            return quality
    return VIDEO_QUALITIES[-1]


def is_hls_url(url: str | None) -> bool:
    if not url:
        return False
    return any(marker in url for marker in _HLS_MARKERS)


@dataclass(frozen=True)
class FormatDescriptor:
    """One entry of a yt-dlp ``formats`` list."""

    url: str | None = None
    vcodec: str | None = None
    acodec: str | None = None
    ext: str | None = None
    height: int | None = None
    width: int | None = None
    tbr: float | None = None
    abr: float | None = None
    language: str | None = None
    language_preference: int | None = None
    format_id: str | None = None
    protocol: str | None = None

    @classmethod
    def from_info(cls, entry: dict[str, Any]) -> "FormatDescriptor":
        return cls(
            url=_str_or_none(entry.get("url")),
            vcodec=_str_or_none(entry.get("vcodec")),
            acodec=_str_or_none(entry.get("acodec")),
            ext=_str_or_none(entry.get("ext")),
            height=_int_or_none(entry.get("height")),
            width=_int_or_none(entry.get("width")),
            tbr=_float_or_none(entry.get("tbr")),
            abr=_float_or_none(entry.get("abr")),
            language=_str_or_none(entry.get("language")),
            language_preference=_int_or_none(entry.get("language_preference")),
            format_id=_str_or_none(entry.get("format_id")),
            protocol=_str_or_none(entry.get("protocol")),
        )

    # yt-dlp reports an absent stream as the literal codec "none"; an unknown
    # codec (None) still counts as present.
    @property
    def has_video(self) -> bool:
        return self.vcodec != "none"

    @property
    def has_audio(self) -> bool:
        return self.acodec != "none"

    @property
    def is_pure_audio(self) -> bool:
        return self.has_audio and not self.has_video

    @property
    def is_usable(self) -> bool:
        """Direct progressive url, not a streaming manifest."""
        return bool(self.url) and not is_hls_url(self.url)

    @property
    def is_original_audio(self) -> bool:
        if self.language_preference is not None and self.language_preference > 0:
            return True
        return _ORIGINAL_AUDIO_MARKER in (self.url or "")

    def matches_language(self, prefix: str) -> bool:
        return bool(self.language) and self.language.startswith(prefix)


@dataclass(frozen=True)
class CaptionTrack:
    """One subtitle rendition for a language."""

    url: str | None = None
    ext: str | None = None
    name: str | None = None

    @classmethod
    def from_info(cls, entry: dict[str, Any]) -> "CaptionTrack":
        return cls(
            url=_str_or_none(entry.get("url")),
            ext=_str_or_none(entry.get("ext")),
            name=_str_or_none(entry.get("name")),
        )


def audio_candidates(formats: list[FormatDescriptor]) -> list[FormatDescriptor]:
    """Pure-audio usable formats, highest audio bitrate first."""
    candidates = [fmt for fmt in formats if fmt.is_pure_audio and fmt.is_usable]
    return sorted(candidates, key=lambda fmt: fmt.abr or 0, reverse=True)


def video_candidates(formats: list[FormatDescriptor], codec_marker: str) -> list[FormatDescriptor]:
    """Usable video formats whose codec contains ``codec_marker``.

    Sorted tallest first, higher total bitrate breaking ties.
    """
    candidates = [
        fmt
        for fmt in formats
        if fmt.has_video and fmt.is_usable and codec_marker in (fmt.vcodec or "")
    ]
    return sorted(candidates, key=lambda fmt: (fmt.height or 0, fmt.tbr or 0), reverse=True)


def pick_default_audio(candidates: list[FormatDescriptor]) -> FormatDescriptor | None:
    """First original-language track, else the first (highest bitrate) candidate."""
    for fmt in candidates:
        if fmt.is_original_audio:
            return fmt
    return candidates[0] if candidates else None


def find_dubbed_audio(formats: list[FormatDescriptor], dub_lang: str | None) -> FormatDescriptor | None:
    """Search the full, unsorted format list for a usable audio track in ``dub_lang``."""
    if not dub_lang:
        return None
    for fmt in formats:
        if fmt.is_pure_audio and fmt.is_usable and fmt.matches_language(dub_lang):
            return fmt
    return None


def audio_codec_label(fmt: FormatDescriptor) -> str:
    return "opus" if fmt.ext == "webm" else "m4a"
