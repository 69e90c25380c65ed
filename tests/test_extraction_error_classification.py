from __future__ import annotations

import pytest

from engine.errors import SelectionError, classify_extraction_error, error_payload


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("ERROR: [youtube] abc: Private video. Sign in if you've been granted access", "content.video.private"),
        ("ERROR: [youtube] abc: Video unavailable", "content.video.unavailable"),
        ("ERROR: [youtube] abc: Sign in to confirm your age. This video may be inappropriate", "content.video.age"),
        (
            "ERROR: [youtube] abc: The uploader has not made this video available in your country",
            "content.video.region",
        ),
        (
            "ERROR: [youtube] abc: Video unavailable. This video is not available in your country",
            "content.video.unavailable",
        ),
        ("ERROR: [youtube] abc: Unable to download webpage: timed out", "fetch.fail"),
        ("", "fetch.fail"),
        (None, "fetch.fail"),
    ],
)
def test_classify_extraction_error(message, expected) -> None:
    assert classify_extraction_error(message) == expected


def test_error_payload_only_marks_critical_when_set() -> None:
    assert error_payload("fetch.fail") == {"error": "fetch.fail"}
    assert error_payload("fetch.fail", critical=True) == {"error": "fetch.fail", "critical": True}


def test_selection_error_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        SelectionError("content.video.unknown")
