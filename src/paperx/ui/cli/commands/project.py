"""Project lifecycle commands: `new`, `open` and `clean`."""

from __future__ import annotations

from pathlib import Path
import shutil
from typing import Annotated

import typer

from paperx.adapters.latex.artifacts import locate_pdf
from paperx.api import DEFAULT_OUTDIR
from paperx.core.scaffold import ProjectMetadata, ProjectTemplate, create_project

from .._options import (
    AbstractOption,
    AffiliationOption,
    AuthorOption,
    KeywordsOption,
    OutputDirOption,
    TitleOption,
)
from ..utils import exit_on_error, main_document


def new(
    name: Annotated[str, typer.Argument(help="Directory name for the new paper.")],
    template: Annotated[
        ProjectTemplate,
        typer.Option("--template", case_sensitive=False, help="Template to use."),
    ] = ProjectTemplate.ARTICLE_EN,
    title: TitleOption = "Untitled Paper",
    author: AuthorOption = "First Last",
    affiliation: AffiliationOption = "Affiliation",
    keywords: KeywordsOption = "keyword1, keyword2",
    abstract: AbstractOption = "This is the abstract.",
) -> None:
    """Create a new paper workspace."""
    metadata = ProjectMetadata(
        title=title,
        author=author,
        affiliation=affiliation,
        keywords=keywords,
        abstract=abstract,
    )
    with exit_on_error():
        create_project(Path(name), template=template, metadata=metadata)
    typer.echo(f"Created paper workspace at '{name}'.")
    typer.echo(f"Next:\n  cd {name}\n  paperx build --open")


def open_pdf(outdir: OutputDirOption = DEFAULT_OUTDIR) -> None:
    """Open the built PDF."""
    with exit_on_error():
        pdf_path = locate_pdf(outdir, main_document(Path.cwd()))
    typer.launch(str(pdf_path))


def clean(outdir: OutputDirOption = DEFAULT_OUTDIR) -> None:
    """Remove build artifacts."""
    if outdir.exists():
        shutil.rmtree(outdir, ignore_errors=True)
    typer.echo(f"Cleaned {outdir.as_posix()}/")


__all__ = ["clean", "new", "open_pdf"]
