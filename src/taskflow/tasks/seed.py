"""Fixed seed stages and the default task set used when nothing is stored."""

from __future__ import annotations

from datetime import date, datetime, timezone

from taskflow.tasks.model import Priority, Snapshot, Stage, Task

SEED_STAGES: tuple[Stage, ...] = (
    Stage(id="todo", title="To Do", color="slate", order=0),
    Stage(id="in-progress", title="In Progress", color="blue", order=1),
    Stage(id="review", title="Review", color="yellow", order=2),
    Stage(id="done", title="Done", color="green", order=3),
)


def _ts(hour: int) -> datetime:
    return datetime(2025, 1, 10, hour, 0, tzinfo=timezone.utc)


SEED_TASKS: tuple[Task, ...] = (
    Task(
        id="1",
        title="Design landing page mockups",
        description="Create wireframes and high-fidelity mockups for the new landing page",
        priority=Priority.HIGH,
        stage="todo",
        due_date=date(2025, 1, 15),
        created_at=_ts(10),
        updated_at=_ts(10),
    ),
    Task(
        id="2",
        title="Set up database schema",
        description="Design and implement the database structure for user management",
        priority=Priority.HIGH,
        stage="in-progress",
        due_date=date(2025, 1, 12),
        created_at=_ts(11),
        updated_at=_ts(11),
    ),
    Task(
        id="3",
        title="Write API documentation",
        description="Document all REST endpoints with examples and response formats",
        priority=Priority.MEDIUM,
        stage="todo",
        due_date=date(2025, 1, 20),
        created_at=_ts(12),
        updated_at=_ts(12),
    ),
    Task(
        id="4",
        title="Implement user authentication",
        description="Add login, signup, and password reset functionality",
        priority=Priority.HIGH,
        stage="review",
        due_date=date(2025, 1, 14),
        created_at=_ts(13),
        updated_at=_ts(13),
    ),
    Task(
        id="5",
        title="Update project dependencies",
        description="Review and update all npm packages to latest stable versions",
        priority=Priority.LOW,
        stage="done",
        created_at=_ts(14),
        updated_at=_ts(14),
    ),
)


def seed_snapshot() -> Snapshot:
    return Snapshot(tasks=SEED_TASKS, stages=SEED_STAGES)
