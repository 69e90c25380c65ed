"""File-backed cookie store keyed by platform name."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from config.settings import COOKIE_FILE_NAME
from engine.json_utils import log_event
from engine.paths import TOKENS_DIR, resolve_dir

logger = logging.getLogger(__name__)


def resolve_cookie_store_path(path=None, base_dir=None):
    """Resolve the cookie file under the tokens directory, or ``None`` when invalid."""
    base = base_dir or TOKENS_DIR
    try:
        return resolve_dir(path or COOKIE_FILE_NAME, base)
    except ValueError as exc:
        logging.error("Invalid cookie store path: %s", exc)
        return None


def _first_cookie(value: Any) -> str | None:
    if isinstance(value, list):
        value = next((item for item in value if isinstance(item, str) and item.strip()), None)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class CookieStore:
    """Read-only view over a JSON cookie file.

    The file maps a platform name to either one cookie header string or a list
    of them, e.g. ``{"youtube": ["SID=...; HSID=..."]}``. The first entry of a
    list is used. The file is read on every lookup so edits apply without a
    restart.
    """

    def __init__(self, path=None, *, base_dir=None) -> None:
        self.path = resolve_cookie_store_path(path, base_dir)

    def _load(self) -> dict[str, Any]:
        if not self.path or not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning("cookie store unreadable path=%s error=%s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("cookie store must be a JSON object path=%s", self.path)
            return {}
        return data

    def get_cookie(self, platform: str) -> str | None:
        cookie = _first_cookie(self._load().get(platform))
        log_event(
            logging.INFO,
            "cookies_applied" if cookie else "cookies_missing",
            platform=platform,
            cookie_store=self.path,
        )
        return cookie
