from __future__ import annotations

from pathlib import Path

from engine.cookies import CookieStore


def test_cookie_store_returns_string_entry(write_cookie_file) -> None:
    base = write_cookie_file({"youtube": "SID=abc; HSID=def"})
    assert CookieStore(base_dir=base).get_cookie("youtube") == "SID=abc; HSID=def"


def test_cookie_store_uses_first_list_entry(write_cookie_file) -> None:
    base = write_cookie_file({"youtube": ["", "SID=first", "SID=second"]})
    assert CookieStore(base_dir=base).get_cookie("youtube") == "SID=first"


def test_cookie_store_missing_platform_or_file(tmp_path: Path, write_cookie_file) -> None:
    assert CookieStore(base_dir=tmp_path).get_cookie("youtube") is None
    base = write_cookie_file({"instagram": "a=b"})
    assert CookieStore(base_dir=base).get_cookie("youtube") is None


def test_cookie_store_tolerates_malformed_file(write_cookie_file) -> None:
    base = write_cookie_file("{not json")
    assert CookieStore(base_dir=base).get_cookie("youtube") is None
    write_cookie_file(["youtube"])
    assert CookieStore(base_dir=base).get_cookie("youtube") is None


def test_cookie_store_rejects_path_outside_base(tmp_path: Path) -> None:
    store = CookieStore("../elsewhere.json", base_dir=tmp_path / "tokens")
    assert store.path is None
    assert store.get_cookie("youtube") is None


def test_cookie_store_custom_file_name(write_cookie_file) -> None:
    base = write_cookie_file({"youtube": "SID=alt"}, name="alt.json")
    assert CookieStore("alt.json", base_dir=base).get_cookie("youtube") == "SID=alt"
