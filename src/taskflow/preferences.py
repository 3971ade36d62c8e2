"""The dark-mode display preference stored beside the task list."""

from __future__ import annotations

import json

from taskflow import log
from taskflow.storage import KeyValueStorage


def load_dark_mode(storage: KeyValueStorage, key: str) -> bool:
    """Return the stored flag; absent or unreadable values mean ``False``."""
    try:
        raw = storage.get_item(key)
    except OSError as exc:
        log.debug(f"Could not read preference {key!r}: {exc}")
        return False
    if raw is None:
        return False
    try:
        value = json.loads(raw)
    except ValueError:
        log.debug(f"Ignoring malformed preference {key!r}")
        return False
    return value is True


def save_dark_mode(storage: KeyValueStorage, key: str, enabled: bool) -> None:
    try:
        storage.set_item(key, json.dumps(bool(enabled)))
    except OSError as exc:
        log.error(f"Could not save preference {key!r}: {exc}")
