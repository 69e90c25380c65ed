"""JSON helpers for structured log events."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any


def safe_json(value: Any) -> Any:
    """Return a JSON-compatible copy of ``value``.

    Dataclasses become dicts, paths and unknown objects become strings, sets
    and tuples become lists. Mapping keys are coerced to strings.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if is_dataclass(value) and not isinstance(value, type):
        return safe_json(asdict(value))
    if isinstance(value, dict):
        return {str(key): safe_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [safe_json(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((safe_json(item) for item in value), key=str)
    if isinstance(value, Path):
        return str(value)
    return str(value)


def safe_json_dumps(value: Any, **kwargs: Any) -> str:
    return json.dumps(safe_json(value), **kwargs)


def log_event(level: int, message: str, **fields: Any) -> None:
    payload = {"message": message, **fields}
    try:
        logging.log(level, safe_json_dumps(payload, sort_keys=True))
    except Exception as exc:
        logging.log(level, f"log_event_serialization_failed: {exc} message={message}")
