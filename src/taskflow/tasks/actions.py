"""Transition requests.

``Action`` is a closed union: one frozen dataclass per transition. The
handler in :mod:`taskflow.tasks.transitions` matches on every case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from taskflow.tasks.model import Task, TaskDraft


@dataclass(frozen=True)
class SetAll:
    tasks: tuple[Task, ...]


@dataclass(frozen=True)
class AddTask:
    draft: TaskDraft


@dataclass(frozen=True)
class UpdateTask:
    task_id: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True)
class MoveTask:
    task_id: str
    new_stage: str


@dataclass(frozen=True)
class ReorderTasks:
    stage_id: str
    start_index: int
    end_index: int


Action = Union[SetAll, AddTask, UpdateTask, DeleteTask, MoveTask, ReorderTasks]
