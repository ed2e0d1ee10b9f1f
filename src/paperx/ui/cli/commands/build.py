"""Implementation of the `paperx build` and `paperx watch` commands."""

from __future__ import annotations

from pathlib import Path

import typer

from paperx.adapters.watcher import ChangeWatcher
from paperx.api import DEFAULT_OUTDIR, build_project
from paperx.core.config import load_config

from .._options import EngineOption, OpenOption, OutputDirOption
from ..diagnostics import CliEmitter
from ..presenter import present_build_summary
from ..state import emit_info, get_cli_state
from ..utils import exit_on_error


def build(
    engine: EngineOption = None,
    outdir: OutputDirOption = DEFAULT_OUTDIR,
    open_pdf: OpenOption = False,
) -> None:
    """Build the paper to PDF."""
    state = get_cli_state()
    emitter = CliEmitter(state=state)
    with exit_on_error():
        result = build_project(
            Path.cwd(),
            engine=engine,
            outdir=outdir,
            console=state.console,
            emitter=emitter,
        )
    present_build_summary(state=state, result=result)
    if open_pdf:
        typer.launch(str(result.pdf_path))


def watch(
    engine: EngineOption = None,
    outdir: OutputDirOption = DEFAULT_OUTDIR,
) -> None:
    """Watch tex/, bib/ and figures/ and rebuild on change."""
    state = get_cli_state()
    emitter = CliEmitter(state=state)
    root = Path.cwd()
    with exit_on_error():
        load_config(root)

    def rebuild() -> None:
        result = build_project(
            root,
            engine=engine,
            outdir=outdir,
            console=state.console,
            emitter=emitter,
        )
        emit_info(f"Built {result.pdf_path}", state=state)

    watcher = ChangeWatcher(root, rebuild, emitter=emitter)
    with exit_on_error():
        watcher.start()
    watcher.serve_forever()


__all__ = ["build", "watch"]
