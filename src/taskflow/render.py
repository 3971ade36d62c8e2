"""Terminal rendering of the board, table, calendar and dashboard views."""

from __future__ import annotations

from datetime import date

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from taskflow.tasks.model import Priority, Snapshot, Task
from taskflow.views import (
    board_columns,
    calendar_days,
    dashboard_stats,
    month_name,
    stage_title,
    tasks_for_date,
)

LIGHT_THEME = Theme({
    "priority.high": "red",
    "priority.medium": "dark_orange",
    "priority.low": "green",
    "stage.header": "bold",
    "muted": "grey50",
    "task.id": "bold cyan",
    "overdue": "bold red",
})

DARK_THEME = Theme({
    "priority.high": "bright_red",
    "priority.medium": "orange1",
    "priority.low": "bright_green",
    "stage.header": "bold bright_white",
    "muted": "grey62",
    "task.id": "bold bright_cyan",
    "overdue": "bold bright_red",
})

STAGE_COLORS: dict[str, str] = {
    "slate": "grey70",
    "blue": "blue",
    "yellow": "yellow",
    "green": "green",
}

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
BAR_WIDTH = 30


def make_console(dark: bool = False, **kwargs) -> Console:
    return Console(theme=DARK_THEME if dark else LIGHT_THEME, highlight=False, **kwargs)


def _priority_text(priority: Priority) -> Text:
    return Text(priority.value, style=f"priority.{priority.value}")


def _task_line(task: Task) -> Text:
    line = Text()
    line.append(task.id, style="task.id")
    line.append(" ")
    line.append(task.title)
    line.append(" ")
    line.append_text(_priority_text(task.priority))
    if task.due_date:
        line.append(f" ({task.due_date.isoformat()})", style="muted")
    return line


# ── board ────────────────────────────────────────────────────────────

def render_board(console: Console, snapshot: Snapshot) -> None:
    table = Table(show_lines=False, expand=True)
    columns = board_columns(snapshot)
    for stage, tasks in columns:
        color = STAGE_COLORS.get(stage.color, "")
        table.add_column(Text(f"{stage.title} ({len(tasks)})"), header_style=f"bold {color}".strip())

    cells = []
    for _, tasks in columns:
        if tasks:
            cells.append(Group(*(_task_line(t) for t in tasks)))
        else:
            cells.append(Text("(empty)", style="muted"))
    table.add_row(*cells)
    console.print(table)


# ── table ────────────────────────────────────────────────────────────

def render_table(console: Console, snapshot: Snapshot, tasks: list[Task]) -> None:
    if not tasks:
        console.print(Text("No tasks match your filters", style="muted"))
        return

    table = Table(expand=True)
    table.add_column("ID", style="task.id", no_wrap=True)
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Stage")
    table.add_column("Due", no_wrap=True)
    for t in tasks:
        table.add_row(
            Text(t.id),
            Text(t.title),
            _priority_text(t.priority),
            Text(stage_title(snapshot, t.stage)),
            t.due_date.isoformat() if t.due_date else "-",
        )
    console.print(table)


# ── calendar ─────────────────────────────────────────────────────────

def render_calendar(console: Console, snapshot: Snapshot, year: int, month: int) -> None:
    table = Table(title=month_name(year, month), show_lines=True, expand=True)
    for name in WEEKDAYS:
        table.add_column(name, ratio=1)

    days = calendar_days(year, month)
    for week in range(6):
        row = []
        for day in days[week * 7:(week + 1) * 7]:
            style = "" if day.month == month else "muted"
            cell = Text(str(day.day), style=style)
            for t in tasks_for_date(snapshot.tasks, day):
                cell.append("\n")
                cell.append(t.title, style=f"priority.{t.priority.value}")
            row.append(cell)
        table.add_row(*row)
    console.print(table)


# ── dashboard ────────────────────────────────────────────────────────

def _bar(count: int, largest: int) -> str:
    if largest <= 0:
        return ""
    return "█" * round(count / largest * BAR_WIDTH)


def render_dashboard(console: Console, snapshot: Snapshot, today: date) -> None:
    stats = dashboard_stats(snapshot, today)

    summary = Table(show_header=True, expand=False)
    summary.add_column("Total Tasks")
    summary.add_column("Completed")
    summary.add_column("Overdue")
    summary.add_column("High Priority")
    summary.add_row(
        str(stats.total),
        f"{stats.completed} ({stats.completion_rate}%)",
        Text(str(stats.overdue), style="overdue" if stats.overdue else ""),
        str(stats.high_priority),
    )
    console.print(summary)

    console.print(Text("Tasks per stage", style="stage.header"))
    largest = max((n for _, n in stats.per_stage), default=0)
    for stage, n in stats.per_stage:
        color = STAGE_COLORS.get(stage.color, "")
        console.print(Text(f"  {stage.title:<12} {n:>3} ") + Text(_bar(n, largest), style=color))

    console.print(Text("Priority distribution", style="stage.header"))
    if not stats.priority_counts:
        console.print(Text("  No tasks to display", style="muted"))
    for priority, n in stats.priority_counts:
        pct = round(n / stats.total * 100)
        line = Text("  ")
        line.append(f"{priority.value.title()} Priority", style=f"priority.{priority.value}")
        line.append(f": {n} ({pct}%)")
        console.print(line)

    console.print(Text("Recent activity", style="stage.header"))
    for t in stats.recent:
        line = Text("  ")
        line.append_text(_task_line(t))
        line.append(f" · {stage_title(snapshot, t.stage)} · {t.updated_at.date().isoformat()}", style="muted")
        console.print(line)
