"""Helper utilities shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from paperx.core.config import CONFIG_FILENAME, PaperConfig, load_config
from paperx.core.exceptions import ConfigError, EngineExecutionError, PaperxError
from paperx.core.scaffold import MAIN_TEX

from .presenter import present_engine_failure
from .state import emit_error, get_cli_state


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Render :class:`PaperxError` failures and abort with exit code 1."""
    try:
        yield
    except EngineExecutionError as exc:
        present_engine_failure(state=get_cli_state(), error=exc)
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    except PaperxError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


def main_document(root: Path) -> Path:
    """Return the configured root document, defaulting to ``tex/main.tex``."""
    config = optional_config(root)
    return config.main_path(root) if config is not None else root / MAIN_TEX


def optional_config(root: Path) -> PaperConfig | None:
    """Load ``paperx.toml`` when present; a missing file is not an error."""
    try:
        return load_config(root)
    except ConfigError:
        if (root / CONFIG_FILENAME).exists():
            raise
        return None


__all__ = ["exit_on_error", "main_document", "optional_config"]
