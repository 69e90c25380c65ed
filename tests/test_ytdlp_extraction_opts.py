from __future__ import annotations

import asyncio
import json

import pytest
from yt_dlp.utils import DownloadError

from config.settings import YTDLP_USER_AGENT
from engine.errors import ExtractionError
from engine.ytdlp_invoker import (
    YtDlpInvoker,
    argv_to_cli,
    build_extraction_opts,
    build_watch_url,
    render_extraction_argv,
)


def test_extraction_opts_are_metadata_only_single_video() -> None:
    opts = build_extraction_opts()
    assert opts["skip_download"] is True
    assert opts["noplaylist"] is True
    assert opts["no_warnings"] is True
    assert opts["nocheckcertificate"] is True
    assert opts["prefer_free_formats"] is True
    assert opts["http_headers"] == {"User-Agent": YTDLP_USER_AGENT}


def test_extraction_opts_attach_cookie_header() -> None:
    opts = build_extraction_opts("SID=abc")
    assert opts["http_headers"]["Cookie"] == "SID=abc"


def test_rendered_argv_matches_cli_flags_and_redacts_cookie() -> None:
    url = build_watch_url("abc123")
    argv = render_extraction_argv(url, build_extraction_opts("SID=secret"))
    assert argv[:2] == ["yt-dlp", "https://www.youtube.com/watch?v=abc123"]
    for flag in ("--dump-json", "--no-playlist", "--no-warnings", "--no-check-certificate", "--prefer-free-formats"):
        assert flag in argv
    assert f"User-Agent:{YTDLP_USER_AGENT}" in argv
    assert "Cookie:<redacted>" in argv
    assert "secret" not in argv_to_cli(argv)

    unredacted = render_extraction_argv(url, build_extraction_opts("SID=secret"), redact=False)
    assert "Cookie:SID=secret" in unredacted


class _FakeYoutubeDL:
    info = {"id": "abc123", "formats": []}
    error = None

    def __init__(self, opts):
        self.opts = opts

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def extract_info(self, url, download=True):
        assert download is False
        if self.error is not None:
            raise self.error
        return self.info

    def sanitize_info(self, info):
        return info


def test_invoker_returns_json_document(monkeypatch) -> None:
    monkeypatch.setattr("engine.ytdlp_invoker.YoutubeDL", _FakeYoutubeDL)
    output = asyncio.run(YtDlpInvoker().extract(build_watch_url("abc123"), build_extraction_opts()))
    assert json.loads(output) == {"id": "abc123", "formats": []}


def test_invoker_wraps_ytdlp_errors_with_message(monkeypatch) -> None:
    class _Failing(_FakeYoutubeDL):
        error = DownloadError("ERROR: [youtube] abc123: Private video")

    monkeypatch.setattr("engine.ytdlp_invoker.YoutubeDL", _Failing)
    with pytest.raises(ExtractionError, match="Private video"):
        asyncio.run(YtDlpInvoker().extract(build_watch_url("abc123"), build_extraction_opts()))


def test_invoker_returns_empty_document_when_nothing_extracted(monkeypatch) -> None:
    class _Empty(_FakeYoutubeDL):
        info = None

    monkeypatch.setattr("engine.ytdlp_invoker.YoutubeDL", _Empty)
    assert asyncio.run(YtDlpInvoker().extract(build_watch_url("abc123"), build_extraction_opts())) == ""


def test_runtime_info_reports_ytdlp_version() -> None:
    from engine.runtime import get_runtime_info

    info = get_runtime_info()
    assert info["yt_dlp_version"]
    assert info["duration_limit_seconds"] > 0
