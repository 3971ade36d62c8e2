"""Injectable time source and task id generator."""

from __future__ import annotations

import secrets
import string
from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def system_clock() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


def random_task_id(clock: Clock = system_clock) -> str:
    """Return ``task-<epoch-ms>-<9 base36 chars>``."""
    millis = int(clock().timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"task-{millis}-{suffix}"


def make_id_factory(clock: Clock = system_clock) -> IdFactory:
    def _factory() -> str:
        return random_task_id(clock)

    return _factory
