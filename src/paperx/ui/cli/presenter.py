"""Rich-aware presenters for CLI output."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from paperx.api import BuildResult
from paperx.core.exceptions import EngineExecutionError

from .state import CLIState


if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console


def _get_console(state: CLIState, *, stderr: bool = False) -> Console | None:
    """Return the Rich console for interactive terminals, ``None`` otherwise."""
    console = state.err_console if stderr else state.console
    if console.is_terminal:
        return console
    return None


def _format_path(path: Path) -> str:
    """Format a path relative to the current working directory for display."""
    resolved = path.resolve()
    try:
        return str(resolved.relative_to(Path.cwd()))
    except ValueError:
        return str(resolved)


def _size_details(path: Path) -> str:
    """Return a human-readable size for a file if it exists."""
    try:
        stat = path.stat()
    except OSError:
        return ""
    if not path.is_file():
        return ""
    size = stat.st_size
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MiB"
    if size >= 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size} B"


def _render_summary(state: CLIState, rows: Sequence[tuple[str, str, str]]) -> None:
    console = _get_console(state)
    if console is not None:
        from rich import box
        from rich.table import Table

        table = Table(box=box.SQUARE, header_style="bold cyan")
        table.add_column("Artifact", style="cyan")
        table.add_column("Location", style="bright_green")
        table.add_column("Filesize", style="magenta", justify="right", no_wrap=True)
        for artifact, location, details in rows:
            table.add_row(artifact, location, details)
        console.print(table)
        return

    for artifact, location, details in rows:
        suffix = f" ({details})" if details else ""
        typer.echo(f"{artifact}: {location}{suffix}")


def _render_failure_panel(
    state: CLIState,
    title: str,
    rows: Sequence[tuple[str, str]],
) -> None:
    console = _get_console(state, stderr=True)
    if console is not None:
        from rich import box
        from rich.panel import Panel
        from rich.table import Table
        from rich.text import Text

        table = Table(box=box.SQUARE, show_header=False)
        for label, value in rows:
            table.add_row(Text(label, style="bold red"), Text(value, style="yellow"))
        console.print(Panel(table, box=box.SQUARE, title=title, border_style="red"))
        return

    typer.echo(title, err=True)
    for label, value in rows:
        typer.echo(f"  {label}: {value}", err=True)


def present_build_summary(*, state: CLIState, result: BuildResult) -> None:
    rows = [
        ("Engine", result.engine.value, ""),
        ("PDF", _format_path(result.pdf_path), _size_details(result.pdf_path)),
    ]
    _render_summary(state, rows)


def present_engine_failure(*, state: CLIState, error: EngineExecutionError) -> None:
    rows = [
        ("Command", " ".join(error.argv)),
        ("Exit status", str(error.returncode)),
        ("Next steps", "Inspect the engine output above or the log in the output directory"),
    ]
    _render_failure_panel(state, "LaTeX failure", rows)


__all__ = ["present_build_summary", "present_engine_failure"]
