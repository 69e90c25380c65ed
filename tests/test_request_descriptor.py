from __future__ import annotations

import pytest

from metadata.types import MetadataRecord, RequestDescriptor


def test_from_payload_reads_wire_keys_and_defaults() -> None:
    request = RequestDescriptor.from_payload({"id": "abc", "isAudioOnly": True, "dubLang": "es"})
    assert request.quality == "max"
    assert request.codec == "h264"
    assert request.container == "auto"
    assert request.is_audio_only is True
    assert request.dub_lang == "es"
    assert request.subtitle_lang is None
    assert request.target_height is None


def test_from_payload_accepts_snake_case_keys() -> None:
    request = RequestDescriptor.from_payload({"id": "abc", "is_audio_only": True, "subtitle_lang": "en"})
    assert request.is_audio_only is True
    assert request.subtitle_lang == "en"


def test_payload_round_trip_keeps_extra_fields_and_clears_transport() -> None:
    payload = {
        "id": "abc",
        "quality": "1080",
        "codec": "vp9",
        "isAudioOnly": False,
        "dubLang": None,
        "subtitleLang": "en",
        "container": "webm",
        "dispatcher": object(),
        "filenameStyle": "basic",
    }
    echoed = RequestDescriptor.from_payload(payload).without_transport().to_payload()
    expected = dict(payload, dispatcher=None)
    assert echoed == expected


def test_wire_payload_is_echoed_as_sent() -> None:
    payload = {"id": 12345, "quality": "720", "dubLang": "", "is_audio_only": False}
    request = RequestDescriptor.from_payload(payload)
    assert request.id == "12345"
    assert request.dub_lang is None

    echoed = request.without_transport().to_payload()
    assert echoed == {"id": 12345, "quality": "720", "dubLang": "", "is_audio_only": False, "dispatcher": None}
    assert payload == {"id": 12345, "quality": "720", "dubLang": "", "is_audio_only": False}


def test_target_height_parses_numeric_quality() -> None:
    assert RequestDescriptor(id="abc", quality="720").target_height == 720
    assert RequestDescriptor(id="abc", quality=1440).target_height == 1440
    with pytest.raises(ValueError):
        RequestDescriptor(id="abc", quality="best").target_height


def test_from_payload_requires_id() -> None:
    with pytest.raises(ValueError):
        RequestDescriptor.from_payload({"quality": "max"})
    with pytest.raises(TypeError):
        RequestDescriptor.from_payload("abc")


def test_metadata_record_skips_malformed_entries() -> None:
    record = MetadataRecord.from_info(
        {
            "id": "abc",
            "duration": "long",
            "is_live": None,
            "formats": [{"url": "https://x.test/a", "vcodec": "none", "acodec": "opus"}, "junk", None],
            "subtitles": {"en": [{"ext": "vtt", "url": "https://x.test/en.vtt"}, "junk"], "de": "junk"},
            "automatic_captions": None,
        }
    )
    assert record.duration is None
    assert record.is_live is False
    assert len(record.formats) == 1
    assert [track.ext for track in record.subtitles["en"]] == ["vtt"]
    assert "de" not in record.subtitles
    assert record.automatic_captions == {}
