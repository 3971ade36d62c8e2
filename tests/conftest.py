"""Shared fixtures for taskflow tests.

Time and ids are injected: tests use a frozen clock and a sequential id
factory so timestamps and ids can be asserted exactly. Storage is in-memory
unless a test needs files, in which case it uses tmp_path.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from taskflow.api import TaskBoard
from taskflow.storage import MemoryStorage, PersistenceAdapter
from taskflow.store import Store
from taskflow.tasks.model import Priority, Snapshot, Task
from taskflow.tasks.seed import SEED_STAGES

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
STORAGE_KEY = "taskflow-tasks"


class FrozenClock:
    """Returns the same instant until advanced."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class SequentialIds:
    """Yields ``task-1``, ``task-2``, ... (or a scripted list first)."""

    def __init__(self, scripted: list[str] | None = None) -> None:
        self.scripted = list(scripted or [])
        self.counter = 0

    def __call__(self) -> str:
        if self.scripted:
            return self.scripted.pop(0)
        self.counter += 1
        return f"task-{self.counter}"


def _make_task(
    id: str,
    stage: str = "todo",
    title: str = "",
    priority: Priority = Priority.MEDIUM,
    description: str | None = None,
    due_date: date | None = None,
    created_at: datetime = T0,
    updated_at: datetime | None = None,
) -> Task:
    return Task(
        id=id,
        title=title or f"Task {id}",
        priority=priority,
        stage=stage,
        description=description,
        due_date=due_date,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


def _make_snapshot(tasks: list[Task]) -> Snapshot:
    return Snapshot(tasks=tuple(tasks), stages=SEED_STAGES)


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def make_snapshot():
    """Factory fixture that wraps tasks in a Snapshot with the seed stages."""
    return _make_snapshot


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def adapter(storage: MemoryStorage) -> PersistenceAdapter:
    return PersistenceAdapter(storage, STORAGE_KEY)


@pytest.fixture
def make_board(storage, clock, ids):
    """Build a TaskBoard over in-memory storage pre-loaded with *tasks*."""

    def _build(tasks: list[Task] | None = None) -> TaskBoard:
        adapter = PersistenceAdapter(storage, STORAGE_KEY, seed=tuple(tasks or ()))
        store = Store.open(adapter, clock=clock, id_factory=ids)
        return TaskBoard(store)

    return _build


@pytest.fixture
def abc_board(make_board, make_task) -> TaskBoard:
    """A (todo, first), B (todo, second), C (done, first)."""
    return make_board([
        make_task("A", "todo"),
        make_task("B", "todo"),
        make_task("C", "done"),
    ])
