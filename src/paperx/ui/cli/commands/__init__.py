"""CLI command implementations exposed via `paperx.ui.cli`."""

from __future__ import annotations

from .add import add_app
from .build import build, watch
from .project import clean, new, open_pdf


__all__ = ["add_app", "build", "clean", "new", "open_pdf", "watch"]
