"""Pure transition functions: ``(snapshot, payload) -> snapshot``.

No function here mutates its input. A transition that changes nothing
returns the very same snapshot object so callers can detect no-ops by
identity.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any

from taskflow import log
from taskflow.clock import IdFactory
from taskflow.tasks.actions import (
    Action,
    AddTask,
    DeleteTask,
    MoveTask,
    ReorderTasks,
    SetAll,
    UpdateTask,
)
from taskflow.tasks.model import Snapshot, Task, TaskDraft

# Upper bound on id regeneration attempts before giving up.
MAX_ID_ATTEMPTS = 32


def set_all(state: Snapshot, tasks: tuple[Task, ...]) -> Snapshot:
    """Replace the whole task collection (duplicates are the caller's problem)."""
    return replace(state, tasks=tuple(tasks))


def add_task(state: Snapshot, draft: TaskDraft, *, now: datetime, new_id: IdFactory) -> Snapshot:
    existing = state.task_ids()
    for _ in range(MAX_ID_ATTEMPTS):
        task_id = new_id()
        if task_id not in existing:
            break
    else:
        raise RuntimeError(f"Could not generate a unique task id after {MAX_ID_ATTEMPTS} attempts")

    task = Task(
        id=task_id,
        title=draft.title,
        description=draft.description,
        priority=draft.priority,
        stage=draft.stage,
        due_date=draft.due_date,
        created_at=now,
        updated_at=now,
    )
    return replace(state, tasks=state.tasks + (task,))


def update_task(state: Snapshot, task_id: str, changes: dict[str, Any], *, now: datetime) -> Snapshot:
    if state.get_task(task_id) is None:
        log.debug(f"update: no task {task_id}, ignoring")
        return state
    tasks = tuple(
        replace(t, **changes, updated_at=now) if t.id == task_id else t
        for t in state.tasks
    )
    return replace(state, tasks=tasks)


def delete_task(state: Snapshot, task_id: str) -> Snapshot:
    if state.get_task(task_id) is None:
        log.debug(f"delete: no task {task_id}, ignoring")
        return state
    return replace(state, tasks=tuple(t for t in state.tasks if t.id != task_id))


def move_task(state: Snapshot, task_id: str, new_stage: str, *, now: datetime) -> Snapshot:
    if state.get_task(task_id) is None:
        log.debug(f"move: no task {task_id}, ignoring")
        return state
    tasks = tuple(
        replace(t, stage=new_stage, updated_at=now) if t.id == task_id else t
        for t in state.tasks
    )
    return replace(state, tasks=tasks)


def reorder_tasks(
    state: Snapshot,
    stage_id: str,
    start_index: int,
    end_index: int,
    *,
    now: datetime,
) -> Snapshot:
    """Move one task from *start_index* to *end_index* inside *stage_id*.

    Indices address the stage projection: the tasks whose stage equals
    *stage_id*, in global order. The moved task is removed first, then
    reinserted at *end_index* of the shortened list.

    The result keeps every other task in its relative order and appends the
    reordered stage after them, so a stage's order must always be read by
    filtering on stage, never from raw positions.

    A *start_index* outside the projection is a no-op. *end_index* is clamped
    into the valid insertion range.
    """
    stage_tasks = [t for t in state.tasks if t.stage == stage_id]
    others = [t for t in state.tasks if t.stage != stage_id]

    if not 0 <= start_index < len(stage_tasks):
        log.debug(
            f"reorder: start index {start_index} outside stage {stage_id!r} "
            f"({len(stage_tasks)} tasks), ignoring"
        )
        return state

    moved = stage_tasks.pop(start_index)
    end = min(max(end_index, 0), len(stage_tasks))
    stage_tasks.insert(end, replace(moved, updated_at=now))

    return replace(state, tasks=tuple(others + stage_tasks))


def apply(state: Snapshot, action: Action, *, now: datetime, new_id: IdFactory) -> Snapshot:
    """Dispatch *action* to its transition."""
    match action:
        case SetAll(tasks=tasks):
            return set_all(state, tasks)
        case AddTask(draft=draft):
            return add_task(state, draft, now=now, new_id=new_id)
        case UpdateTask(task_id=task_id, changes=changes):
            return update_task(state, task_id, changes, now=now)
        case DeleteTask(task_id=task_id):
            return delete_task(state, task_id)
        case MoveTask(task_id=task_id, new_stage=new_stage):
            return move_task(state, task_id, new_stage, now=now)
        case ReorderTasks(stage_id=stage_id, start_index=start, end_index=end):
            return reorder_tasks(state, stage_id, start, end, now=now)
        case _:
            raise TypeError(f"Unknown action: {action!r}")
