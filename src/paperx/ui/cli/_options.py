"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from paperx.adapters.latex.engines import EngineName


BUILD_PANEL = "Build"
OUTPUT_PANEL = "Output"
METADATA_PANEL = "Metadata"

EngineOption = Annotated[
    EngineName | None,
    typer.Option(
        "--engine",
        case_sensitive=False,
        help=(
            "Preferred LaTeX engine. Other installed engines are used as fallback; "
            "defaults to the engine recorded in paperx.toml."
        ),
        rich_help_panel=BUILD_PANEL,
    ),
]

OutputDirOption = Annotated[
    Path,
    typer.Option(
        "--outdir",
        help="Directory receiving the PDF and intermediate files.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OpenOption = Annotated[
    bool,
    typer.Option(
        "--open",
        help="Open the PDF in the system viewer after a successful build.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

TitleOption = Annotated[
    str,
    typer.Option("--title", help="Paper title.", rich_help_panel=METADATA_PANEL),
]

AuthorOption = Annotated[
    str,
    typer.Option("--author", help="Author name.", rich_help_panel=METADATA_PANEL),
]

AffiliationOption = Annotated[
    str,
    typer.Option("--affiliation", help="Affiliation line.", rich_help_panel=METADATA_PANEL),
]

KeywordsOption = Annotated[
    str,
    typer.Option("--keywords", help="Comma-separated keywords.", rich_help_panel=METADATA_PANEL),
]

AbstractOption = Annotated[
    str,
    typer.Option("--abstract", help="Abstract text.", rich_help_panel=METADATA_PANEL),
]


__all__ = [
    "AbstractOption",
    "AffiliationOption",
    "AuthorOption",
    "EngineOption",
    "KeywordsOption",
    "OpenOption",
    "OutputDirOption",
    "TitleOption",
]
