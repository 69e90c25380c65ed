"""yt-dlp metadata extraction behind an injectable async invoker."""

from __future__ import annotations

import json
import logging
import shlex
from typing import Any, Protocol

import anyio
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError, ExtractorError

from config.settings import YTDLP_USER_AGENT
from engine.errors import ExtractionError

logger = logging.getLogger(__name__)

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

_REDACTED_HEADERS = {"cookie"}


class ExtractionInvoker(Protocol):
    async def extract(self, url: str, opts: dict[str, Any]) -> str:
        """Return the JSON metadata document for ``url`` or raise with the extractor's message."""


def build_watch_url(video_id: str) -> str:
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


def build_extraction_opts(cookie: str | None = None) -> dict[str, Any]:
    """Metadata-only yt-dlp options for a single video.

    Mirrors ``--dump-json --no-playlist --no-warnings --no-check-certificate
    --prefer-free-formats --add-header User-Agent:...`` plus an optional
    ``Cookie`` header.
    """
    headers = {"User-Agent": YTDLP_USER_AGENT}
    if cookie:
        headers["Cookie"] = cookie
    return {
        "quiet": True,
        "no_warnings": True,
        "noplaylist": True,
        "skip_download": True,
        "nocheckcertificate": True,
        "prefer_free_formats": True,
        "http_headers": headers,
    }


def render_extraction_argv(url: str, opts: dict[str, Any], *, redact: bool = True) -> list[str]:
    """Return the yt-dlp CLI argv equivalent to ``opts``, cookie values redacted by default."""
    argv = ["yt-dlp", str(url)]
    if opts.get("skip_download"):
        argv.append("--dump-json")
    if opts.get("noplaylist") is True:
        argv.append("--no-playlist")
    elif opts.get("noplaylist") is False:
        argv.append("--yes-playlist")
    if opts.get("no_warnings"):
        argv.append("--no-warnings")
    if opts.get("nocheckcertificate"):
        argv.append("--no-check-certificate")
    if opts.get("prefer_free_formats"):
        argv.append("--prefer-free-formats")
    headers = opts.get("http_headers")
    if isinstance(headers, dict):
        for name, value in headers.items():
            if redact and str(name).lower() in _REDACTED_HEADERS:
                value = "<redacted>"
            argv.extend(["--add-header", f"{name}:{value}"])
    return argv


def argv_to_cli(argv: list[str]) -> str:
    return shlex.join(argv)


class YtDlpInvoker:
    """Runs yt-dlp's Python API on a worker thread."""

    def _extract_sync(self, url: str, opts: dict[str, Any]) -> str:
        try:
            with YoutubeDL(opts) as ydl:
                info = ydl.extract_info(url, download=False)
                info = ydl.sanitize_info(info)
        except (DownloadError, ExtractorError) as exc:
            raise ExtractionError(str(exc)) from exc
        if not info:
            return ""
        return json.dumps(info)

    async def extract(self, url: str, opts: dict[str, Any]) -> str:
        logger.debug("yt-dlp extract %s", argv_to_cli(render_extraction_argv(url, opts)))
        return await anyio.to_thread.run_sync(self._extract_sync, url, opts)
