"""Console logging with coloured level tags via Rich.

Only the level tag is markup; message text is escaped, so task titles,
ids and stage keys containing square brackets print as-is.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
_err_console = Console(highlight=False, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def _emit(target: Console, tag: str, msg: str) -> None:
    target.print(f"{tag} {escape(msg)}")


def info(msg: str) -> None:
    _emit(console, "[blue]\\[INFO][/blue]", msg)


def success(msg: str) -> None:
    _emit(console, "[green]\\[OK][/green]", msg)


def warn(msg: str) -> None:
    _emit(console, "[yellow]\\[WARN][/yellow]", msg)


def error(msg: str) -> None:
    _emit(_err_console, "[red]\\[ERROR][/red]", msg)


def debug(msg: str) -> None:
    if _verbose:
        console.print(f"[dim]\\[DEBUG] {escape(msg)}[/dim]")
