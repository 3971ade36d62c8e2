"""Task, Stage and Snapshot data models plus their storage record format."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, raw: str | Priority) -> Priority:
        """Coerce *raw* to a Priority; raises ``ValueError`` for unknown values."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown priority {raw!r} (expected one of: {allowed})") from None


@dataclass(frozen=True)
class Stage:
    id: str
    title: str
    color: str
    order: int = 0


@dataclass(frozen=True)
class Task:
    """A unit of work.

    ``stage`` is a weak reference to a :class:`Stage` id and is never
    validated. ``id`` and ``created_at`` never change after creation.
    """

    id: str
    title: str
    priority: Priority
    stage: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    due_date: date | None = None


@dataclass(frozen=True)
class TaskDraft:
    """Caller-supplied fields for a new task (no id, no timestamps)."""

    title: str
    priority: Priority = Priority.MEDIUM
    stage: str = "todo"
    description: str | None = None
    due_date: date | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", validate_title(self.title))
        object.__setattr__(self, "priority", Priority.parse(self.priority))
        object.__setattr__(self, "due_date", parse_due_date(self.due_date))


@dataclass(frozen=True)
class Snapshot:
    """The complete store state at one instant."""

    tasks: tuple[Task, ...] = ()
    stages: tuple[Stage, ...] = ()

    def get_task(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def get_stage(self, stage_id: str) -> Stage | None:
        for s in self.stages:
            if s.id == stage_id:
                return s
        return None

    def task_ids(self) -> set[str]:
        return {t.id for t in self.tasks}


# Fields an update may touch. ``id`` and the timestamps are owned by the store.
MUTABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "priority", "stage", "due_date"}
)


# ── validation helpers ───────────────────────────────────────────────

def validate_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValueError("title is required")
    return title


def parse_due_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip())
    except ValueError:
        raise ValueError(f"Invalid due date {raw!r} (expected YYYY-MM-DD)") from None


def normalize_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Validate an update partial and coerce its values.

    Raises ``ValueError`` for unknown or immutable field names.
    """
    unknown = sorted(set(changes) - MUTABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update field(s): {', '.join(unknown)}")

    out = dict(changes)
    if "title" in out:
        out["title"] = validate_title(out["title"])
    if "priority" in out:
        out["priority"] = Priority.parse(out["priority"])
    if "due_date" in out:
        out["due_date"] = parse_due_date(out["due_date"])
    if "stage" in out:
        out["stage"] = str(out["stage"])
    return out


# ── timestamps ───────────────────────────────────────────────────────

def format_timestamp(dt: datetime) -> str:
    """ISO 8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    text = dt.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    s = str(raw).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# ── storage records ──────────────────────────────────────────────────

def task_to_record(task: Task) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "priority": task.priority.value,
        "stage": task.stage,
    }
    if task.description is not None:
        record["description"] = task.description
    if task.due_date is not None:
        record["dueDate"] = task.due_date.isoformat()
    record["createdAt"] = format_timestamp(task.created_at)
    record["updatedAt"] = format_timestamp(task.updated_at)
    return record


def task_from_record(record: dict[str, Any]) -> Task:
    """Build a Task from a storage record.

    Raises ``ValueError``, ``KeyError`` or ``TypeError`` when the record does
    not have the expected shape.
    """
    if not isinstance(record, dict):
        raise TypeError(f"task record must be an object, got {type(record).__name__}")
    task_id = record["id"]
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("task record has no usable id")
    description = record.get("description")
    return Task(
        id=task_id,
        title=validate_title(record["title"]),
        priority=Priority.parse(record["priority"]),
        stage=str(record["stage"]),
        created_at=parse_timestamp(record["createdAt"]),
        updated_at=parse_timestamp(record["updatedAt"]),
        description=str(description) if description is not None else None,
        due_date=parse_due_date(record.get("dueDate")),
    )
