"""Application settings constants."""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Longest media (in seconds) a request may resolve to.
DURATION_LIMIT_SECONDS = _env_int("STREAMPICK_DURATION_LIMIT", 10800)

# Sent with every extraction request.
YTDLP_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# Cookie store file, resolved under the tokens directory.
COOKIE_FILE_NAME = os.environ.get("STREAMPICK_COOKIE_FILE", "").strip() or "cookies.json"
