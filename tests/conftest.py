import json
import sys
from pathlib import Path

import pytest


# Flat layout: make api/, engine/, media/, metadata/ and config/ importable however pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


@pytest.fixture
def write_cookie_file(tmp_path):
    """Write a cookie store JSON file under ``tmp_path`` and return its directory."""

    def _write(payload, name="cookies.json"):
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return tmp_path

    return _write
