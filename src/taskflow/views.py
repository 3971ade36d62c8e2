"""Read-only projections of a snapshot for the board, table, calendar and dashboard."""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from taskflow.tasks.model import Priority, Snapshot, Stage, Task

DONE_STAGE = "done"
RECENT_LIMIT = 5


# ── board ────────────────────────────────────────────────────────────

def tasks_by_stage(tasks: Iterable[Task], stage_id: str) -> list[Task]:
    """Tasks in *stage_id*, in snapshot order. This is the display order."""
    return [t for t in tasks if t.stage == stage_id]


def board_columns(snapshot: Snapshot) -> list[tuple[Stage, list[Task]]]:
    """Stages sorted by ``order`` with their tasks; dangling stages are left out."""
    stages = sorted(snapshot.stages, key=lambda s: s.order)
    return [(s, tasks_by_stage(snapshot.tasks, s.id)) for s in stages]


# ── table ────────────────────────────────────────────────────────────

def filter_tasks(
    tasks: Iterable[Task],
    *,
    search: str = "",
    priority: Priority | None = None,
    stage: str | None = None,
) -> list[Task]:
    needle = search.lower()
    out: list[Task] = []
    for t in tasks:
        if needle and needle not in t.title.lower() and needle not in (t.description or "").lower():
            continue
        if priority is not None and t.priority != priority:
            continue
        if stage is not None and t.stage != stage:
            continue
        out.append(t)
    return out


def stage_title(snapshot: Snapshot, stage_id: str) -> str:
    stage = snapshot.get_stage(stage_id)
    return stage.title if stage else stage_id


# ── calendar ─────────────────────────────────────────────────────────

def calendar_days(year: int, month: int) -> list[date]:
    """Six weeks of dates, starting on the Sunday on or before the 1st."""
    first = date(year, month, 1)
    # date.weekday(): Monday=0 ... Sunday=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(42)]


def tasks_for_date(tasks: Iterable[Task], day: date) -> list[Task]:
    return [t for t in tasks if t.due_date == day]


def month_name(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


# ── dashboard ────────────────────────────────────────────────────────

@dataclass
class DashboardStats:
    total: int = 0
    completed: int = 0
    overdue: int = 0
    high_priority: int = 0
    completion_rate: int = 0
    per_stage: list[tuple[Stage, int]] = field(default_factory=list)
    priority_counts: list[tuple[Priority, int]] = field(default_factory=list)
    recent: list[Task] = field(default_factory=list)


def is_overdue(task: Task, today: date) -> bool:
    return task.due_date is not None and task.due_date < today and task.stage != DONE_STAGE


def dashboard_stats(snapshot: Snapshot, today: date) -> DashboardStats:
    tasks = snapshot.tasks
    total = len(tasks)
    completed = sum(1 for t in tasks if t.stage == DONE_STAGE)

    priority_counts = [
        (p, n)
        for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)
        if (n := sum(1 for t in tasks if t.priority == p)) > 0
    ]

    return DashboardStats(
        total=total,
        completed=completed,
        overdue=sum(1 for t in tasks if is_overdue(t, today)),
        high_priority=sum(1 for t in tasks if t.priority == Priority.HIGH),
        completion_rate=round(completed / total * 100) if total else 0,
        per_stage=[(s, len(ts)) for s, ts in board_columns(snapshot)],
        priority_counts=priority_counts,
        # sorted() is stable, so equal timestamps keep snapshot order
        recent=sorted(tasks, key=lambda t: t.updated_at, reverse=True)[:RECENT_LIMIT],
    )
