"""taskflow CLI — board, table, calendar and dashboard views over the task store.

Installed as the ``taskflow`` console_script.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from taskflow import __version__
from taskflow import log
from taskflow.api import TaskBoard
from taskflow.config import Config
from taskflow.preferences import load_dark_mode, save_dark_mode
from taskflow.render import (
    make_console,
    render_board,
    render_calendar,
    render_dashboard,
    render_table,
)
from taskflow.storage import FileStorage
from taskflow.tasks.model import Priority
from taskflow.views import filter_tasks


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

PRIORITY_CHOICE = click.Choice([p.value for p in Priority], case_sensitive=False)


@dataclass
class Session:
    """The opened board and a console themed from the stored preference."""

    board: TaskBoard
    console: Console


def _open_session(ctx: click.Context) -> Session:
    cfg: Config = ctx.obj
    board = TaskBoard.from_config(cfg)
    dark = load_dark_mode(FileStorage(cfg.data_dir), cfg.preference_key)
    return Session(board=board, console=make_console(dark=dark))


def _parse_month(raw: str) -> tuple[int, int]:
    if not raw:
        today = date.today()
        return today.year, today.month
    try:
        year_s, month_s = raw.split("-", 1)
        year, month = int(year_s), int(month_s)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM, got {raw!r}.", param_hint="--month") from None
    if not 1 <= month <= 12:
        raise click.BadParameter(f"Month must be 1-12, got {month}.", param_hint="--month")
    return year, month


def _warn_if_missing(session: Session, task_id: str) -> bool:
    if session.board.get_task(task_id) is None:
        log.warn(f"No task with id {task_id}; nothing changed.")
        return True
    return False


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the task store (default: $TASKFLOW_DATA_DIR or ~/.taskflow)",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, prog_name="taskflow")
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """taskflow — one task set, four views.

    \b
    EXAMPLES:
      taskflow board                              # Kanban columns
      taskflow add "Write release notes" -p high  # New task in To Do
      taskflow move task-1700000000000-abc review # Change stage
      taskflow reorder todo 0 2                   # Reorder within a stage
      taskflow table --search docs --priority high
      taskflow calendar --month 2025-01
      taskflow dashboard
    """
    log.set_verbose(verbose)
    ctx.obj = Config(data_dir=data_dir or "", verbose=verbose)


# ── Views ────────────────────────────────────────────────────────────


@main.command()
@click.pass_context
def board(ctx: click.Context) -> None:
    """Show tasks as columns, one per stage."""
    session = _open_session(ctx)
    render_board(session.console, session.board.snapshot)


@main.command()
@click.option("--search", "-s", default="", help="Match title or description (case-insensitive)")
@click.option("--priority", "-p", type=PRIORITY_CHOICE, default=None, help="Only this priority")
@click.option("--stage", default=None, help="Only this stage id")
@click.pass_context
def table(ctx: click.Context, search: str, priority: str | None, stage: str | None) -> None:
    """List tasks in a filterable table."""
    session = _open_session(ctx)
    snapshot = session.board.snapshot
    rows = filter_tasks(
        snapshot.tasks,
        search=search,
        priority=Priority.parse(priority) if priority else None,
        stage=stage,
    )
    render_table(session.console, snapshot, rows)


@main.command()
@click.option("--month", "-m", default="", help="Month to show as YYYY-MM (default: current)")
@click.pass_context
def calendar(ctx: click.Context, month: str) -> None:
    """Show tasks on a month grid by due date."""
    year, month_num = _parse_month(month)
    session = _open_session(ctx)
    render_calendar(session.console, session.board.snapshot, year, month_num)


@main.command()
@click.pass_context
def dashboard(ctx: click.Context) -> None:
    """Show totals, per-stage counts, priorities and recent activity."""
    session = _open_session(ctx)
    render_dashboard(session.console, session.board.snapshot, date.today())


@main.command()
@click.pass_context
def stages(ctx: click.Context) -> None:
    """List the available stage ids."""
    session = _open_session(ctx)
    for stage in sorted(session.board.snapshot.stages, key=lambda s: s.order):
        session.console.print(Text(f"{stage.id}\t{stage.title}"))


# ── Mutations ────────────────────────────────────────────────────────


@main.command()
@click.argument("title")
@click.option("--description", "-d", default=None, help="Longer description")
@click.option("--priority", "-p", type=PRIORITY_CHOICE, default="medium", show_default=True)
@click.option("--stage", default="todo", show_default=True, help="Stage id")
@click.option("--due", default=None, help="Due date YYYY-MM-DD")
@click.pass_context
def add(
    ctx: click.Context,
    title: str,
    description: str | None,
    priority: str,
    stage: str,
    due: str | None,
) -> None:
    """Create a task."""
    session = _open_session(ctx)
    try:
        task = session.board.add_task(
            title=title,
            description=description,
            priority=priority,
            stage=stage,
            due_date=due,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from None
    log.success(f"Added {task.id}")
    render_board(session.console, session.board.snapshot)


@main.command()
@click.argument("task_id")
@click.option("--title", "-t", default=None)
@click.option("--description", "-d", default=None)
@click.option("--priority", "-p", type=PRIORITY_CHOICE, default=None)
@click.option("--stage", default=None)
@click.option("--due", default=None, help="Due date YYYY-MM-DD (empty string clears it)")
@click.pass_context
def update(
    ctx: click.Context,
    task_id: str,
    title: str | None,
    description: str | None,
    priority: str | None,
    stage: str | None,
    due: str | None,
) -> None:
    """Change fields of an existing task."""
    changes = {
        name: value
        for name, value in (
            ("title", title),
            ("description", description),
            ("priority", priority),
            ("stage", stage),
            ("due_date", due),
        )
        if value is not None
    }
    if not changes:
        raise click.UsageError("Nothing to update; pass at least one option.")

    session = _open_session(ctx)
    missing = _warn_if_missing(session, task_id)
    try:
        session.board.update_task(task_id, changes)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from None
    if not missing:
        log.success(f"Updated {task_id}")
    render_board(session.console, session.board.snapshot)


@main.command()
@click.argument("task_id")
@click.pass_context
def delete(ctx: click.Context, task_id: str) -> None:
    """Remove a task."""
    session = _open_session(ctx)
    missing = _warn_if_missing(session, task_id)
    session.board.delete_task(task_id)
    if not missing:
        log.success(f"Deleted {task_id}")
    render_board(session.console, session.board.snapshot)


@main.command()
@click.argument("task_id")
@click.argument("stage")
@click.pass_context
def move(ctx: click.Context, task_id: str, stage: str) -> None:
    """Move a task to another stage."""
    session = _open_session(ctx)
    missing = _warn_if_missing(session, task_id)
    if session.board.snapshot.get_stage(stage) is None:
        log.warn(f"Stage {stage!r} is not on the board; the task will not show in any column.")
    session.board.move_task(task_id, stage)
    if not missing:
        log.success(f"Moved {task_id} to {stage}")
    render_board(session.console, session.board.snapshot)


@main.command()
@click.argument("stage")
@click.argument("start", type=int)
@click.argument("end", type=int)
@click.pass_context
def reorder(ctx: click.Context, stage: str, start: int, end: int) -> None:
    """Move the task at position START to position END within STAGE (0-based)."""
    session = _open_session(ctx)
    before = session.board.snapshot
    after = session.board.reorder_tasks(start, end, stage)
    if after is before:
        log.warn(f"No task at position {start} in {stage}; nothing changed.")
    render_board(session.console, session.board.snapshot)


@main.command()
@click.option("--dark/--light", default=None, help="Choose the colour theme")
@click.pass_context
def theme(ctx: click.Context, dark: bool | None) -> None:
    """Show or set the display theme."""
    cfg: Config = ctx.obj
    storage = FileStorage(cfg.data_dir)
    if dark is None:
        current = load_dark_mode(storage, cfg.preference_key)
        click.echo("dark" if current else "light")
        return
    save_dark_mode(storage, cfg.preference_key, dark)
    log.success(f"Theme set to {'dark' if dark else 'light'}")
