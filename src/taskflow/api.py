"""Public entry points collaborators call to read and change tasks."""

from __future__ import annotations

from datetime import date
from typing import Any

from taskflow.clock import Clock, IdFactory, system_clock
from taskflow.config import Config
from taskflow.storage import FileStorage, KeyValueStorage, PersistenceAdapter
from taskflow.store import Store
from taskflow.tasks.actions import AddTask, DeleteTask, MoveTask, ReorderTasks, UpdateTask
from taskflow.tasks.model import Priority, Snapshot, Task, TaskDraft, normalize_changes


class TaskBoard:
    """Synchronous facade over a :class:`Store`.

    Each method builds one action, applies it, waits for the save attempt,
    and returns. Input validation happens here, before the store is touched.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    @classmethod
    def open(
        cls,
        storage: KeyValueStorage,
        key: str,
        *,
        clock: Clock = system_clock,
        id_factory: IdFactory | None = None,
    ) -> TaskBoard:
        adapter = PersistenceAdapter(storage, key)
        return cls(Store.open(adapter, clock=clock, id_factory=id_factory))

    @classmethod
    def from_config(cls, cfg: Config) -> TaskBoard:
        return cls.open(FileStorage(cfg.data_dir), cfg.storage_key)

    # ── reads ────────────────────────────────────────────────────

    @property
    def snapshot(self) -> Snapshot:
        return self.store.snapshot

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.store.snapshot.tasks

    def get_task(self, task_id: str) -> Task | None:
        return self.store.snapshot.get_task(task_id)

    # ── writes ───────────────────────────────────────────────────

    def add_task(
        self,
        draft: TaskDraft | None = None,
        *,
        title: str = "",
        priority: Priority | str = Priority.MEDIUM,
        stage: str = "todo",
        description: str | None = None,
        due_date: date | str | None = None,
    ) -> Task:
        """Create a task and return it (id and timestamps assigned by the store)."""
        if draft is None:
            draft = TaskDraft(
                title=title,
                priority=priority,
                stage=stage,
                description=description,
                due_date=due_date,
            )
        snapshot = self.store.dispatch(AddTask(draft))
        return snapshot.tasks[-1]

    def update_task(self, task_id: str, changes: dict[str, Any] | None = None, **fields: Any) -> Snapshot:
        """Merge *changes* into the task; unknown ids are ignored."""
        merged = dict(changes or {})
        merged.update(fields)
        return self.store.dispatch(UpdateTask(task_id, normalize_changes(merged)))

    def delete_task(self, task_id: str) -> Snapshot:
        return self.store.dispatch(DeleteTask(task_id))

    def move_task(self, task_id: str, new_stage: str) -> Snapshot:
        return self.store.dispatch(MoveTask(task_id, new_stage))

    def reorder_tasks(self, start_index: int, end_index: int, stage_id: str) -> Snapshot:
        return self.store.dispatch(ReorderTasks(stage_id, int(start_index), int(end_index)))
