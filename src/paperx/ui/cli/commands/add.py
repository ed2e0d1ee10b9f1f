"""`paperx add` sub-commands: sections and figures."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from paperx.core.figures import import_figure
from paperx.core.sections import insert_section

from ..diagnostics import CliEmitter
from ..state import get_cli_state
from ..utils import exit_on_error, main_document


add_app = typer.Typer(
    help="Add sections or figures to the current paper.",
    no_args_is_help=True,
)


@add_app.command("section")
def add_section(
    name: Annotated[str, typer.Argument(help="Section file stem, e.g. 'related-work'.")],
) -> None:
    """Create tex/sections/<name>.tex and include it from the root document."""
    emitter = CliEmitter(state=get_cli_state())
    with exit_on_error():
        insert_section(name, main_document(Path.cwd()), emitter=emitter)


@add_app.command("figure")
def add_figure(
    path: Annotated[
        Path,
        typer.Argument(help="Path to an existing image (png/jpg/pdf/svg etc.)."),
    ],
    label: Annotated[str | None, typer.Option("--label", help="Figure label.")] = None,
    caption: Annotated[str | None, typer.Option("--caption", help="Figure caption.")] = None,
) -> None:
    """Copy a figure to figures/ and print a LaTeX snippet to include it."""
    with exit_on_error():
        result = import_figure(
            path,
            figures_dir=Path.cwd() / "figures",
            label=label,
            caption=caption,
        )
    typer.echo("\nLaTeX snippet to include (copy into a section):\n")
    typer.echo(f"{result.snippet}\n")
    typer.echo(f"Copied to {result.destination}")


__all__ = ["add_app", "add_figure", "add_section"]
