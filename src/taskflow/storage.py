"""Durable key-value storage and the task snapshot persistence adapter."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from taskflow import log
from taskflow.io_utils import atomic_write_text, read_text
from taskflow.tasks.model import Task, task_from_record, task_to_record
from taskflow.tasks.seed import SEED_TASKS


class KeyValueStorage(Protocol):
    """String values under string keys (the browser ``localStorage`` shape)."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage; nothing survives the process."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage:
    """One UTF-8 file per key: ``<directory>/<key>.json``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return read_text(path)

    def set_item(self, key: str, value: str) -> None:
        atomic_write_text(self.path_for(key), value)

    def remove_item(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class PersistenceAdapter:
    """Translate between the task collection and one storage key.

    ``load`` never raises: absent, unreadable or malformed data yields the
    seed tasks. ``save`` never raises either; the last failure is kept on
    ``last_error``.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        seed: tuple[Task, ...] = SEED_TASKS,
    ) -> None:
        self.storage = storage
        self.key = key
        self.seed = seed
        self.last_error: Exception | None = None

    def load(self) -> tuple[Task, ...]:
        try:
            raw = self.storage.get_item(self.key)
        except (OSError, UnicodeDecodeError) as exc:
            log.warn(f"Could not read {self.key!r}: {exc}; using default tasks")
            return self.seed

        if raw is None:
            log.debug(f"No stored tasks under {self.key!r}; using default tasks")
            return self.seed

        try:
            return parse_tasks(raw)
        except (ValueError, KeyError, TypeError) as exc:
            log.warn(f"Discarding malformed tasks under {self.key!r}: {exc}")
            return self.seed

    def save(self, tasks: tuple[Task, ...]) -> bool:
        """Write *tasks*; returns ``False`` (and records the error) on failure."""
        try:
            self.storage.set_item(self.key, dump_tasks(tasks))
        except (OSError, TypeError, ValueError) as exc:
            self.last_error = exc
            log.error(f"Could not save tasks to {self.key!r}: {exc}")
            return False
        self.last_error = None
        log.debug(f"Saved {len(tasks)} task(s) to {self.key!r}")
        return True


def dump_tasks(tasks: tuple[Task, ...]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False, indent=2)


def parse_tasks(raw: str) -> tuple[Task, ...]:
    """Parse a stored task list.

    ``json.JSONDecodeError`` is a ``ValueError``; a non-list payload raises
    ``TypeError``. One bad record rejects the whole payload.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TypeError(f"expected a list of tasks, got {type(data).__name__}")
    return tuple(task_from_record(item) for item in data)
