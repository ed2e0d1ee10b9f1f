"""Custom exception hierarchy for paperx builds and scaffolding."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class PaperxError(RuntimeError):
    """Base exception for every failure surfaced to the CLI."""


class ConfigError(PaperxError):
    """Raised when ``paperx.toml`` is missing or cannot be parsed."""


class BuildError(PaperxError):
    """Base exception for failures while producing a PDF."""


class EngineNotFoundError(BuildError):
    """Raised when none of the candidate LaTeX engines is installed."""

    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = list(candidates)
        listed = ", ".join(self.candidates)
        super().__init__(
            f"No TeX engine found (tried {listed}). Please install tectonic or TeX Live."
        )


class UnknownEngineError(BuildError):
    """Raised when an engine identifier is not part of the engine table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown engine: {name}")


class SourceNotFoundError(BuildError):
    """Raised when the entry document does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Main tex not found: {path}")


class EngineExecutionError(BuildError):
    """Raised when an engine exits with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(f"Command failed with status {returncode}: {' '.join(self.argv)}")


class ArtifactNotFoundError(BuildError):
    """Raised when an engine succeeded but no PDF can be located."""

    def __init__(self, outdir: Path) -> None:
        self.outdir = outdir
        super().__init__(f"Could not find resulting PDF in {outdir}")


class ScaffoldError(PaperxError):
    """Base exception for project and section scaffolding failures."""


class AlreadyExistsError(ScaffoldError):
    """Raised when scaffolding would overwrite an existing path."""

    def __init__(self, path: Path, kind: str = "Path") -> None:
        self.path = path
        super().__init__(f"{kind} already exists: {path}")


class MalformedDocumentError(ScaffoldError):
    """Raised when a root document has neither splice marker nor ``\\end{document}``."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Malformed document {path}: no '% paperx:sections' marker "
            "and no \\end{document} line to insert before."
        )


class InvalidSectionNameError(ScaffoldError):
    """Raised when a section name cannot be mapped to a fragment file."""


class FigureNotFoundError(ScaffoldError):
    """Raised when a figure to import does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Figure not found: {path}")


class WatchError(PaperxError):
    """Raised when the filesystem subscription cannot be established."""


__all__ = [
    "AlreadyExistsError",
    "ArtifactNotFoundError",
    "BuildError",
    "ConfigError",
    "EngineExecutionError",
    "EngineNotFoundError",
    "FigureNotFoundError",
    "InvalidSectionNameError",
    "MalformedDocumentError",
    "PaperxError",
    "ScaffoldError",
    "SourceNotFoundError",
    "UnknownEngineError",
    "WatchError",
]
