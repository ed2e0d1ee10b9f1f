"""LaTeX engine table, resolution with fallback, and single-pass invocation."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import shutil

from rich.console import Console

from paperx.core.diagnostics import DiagnosticEmitter, NullEmitter
from paperx.core.exceptions import (
    EngineExecutionError,
    EngineNotFoundError,
    SourceNotFoundError,
    UnknownEngineError,
)

from ..artifacts import expected_pdf_path, locate_pdf
from .runner import SPAWN_FAILURE_STATUS, run_engine_command


class EngineName(str, Enum):
    """Supported LaTeX engines."""

    TECTONIC = "tectonic"
    LATEXMK = "latexmk"
    PDFLATEX = "pdflatex"
    LUALATEX = "lualatex"


ArgvBuilder = Callable[[str, str], list[str]]


def _tectonic_argv(entry: str, outdir: str) -> list[str]:
    return [
        "tectonic",
        "-X",
        "compile",
        entry,
        "--outdir",
        outdir,
        "--keep-logs",
        "--keep-intermediates",
    ]


def _latexmk_argv(entry: str, outdir: str) -> list[str]:
    return [
        "latexmk",
        "-pdf",
        "-interaction=nonstopmode",
        f"-output-directory={outdir}",
        entry,
    ]


def _latex_argv(program: str) -> ArgvBuilder:
    def _build(entry: str, outdir: str) -> list[str]:
        return [program, "-interaction=nonstopmode", f"-output-directory={outdir}", entry]

    return _build


@dataclass(frozen=True, slots=True)
class EngineSpec:
    """Executable, fallback order and command template for one engine."""

    name: EngineName
    executable: str
    fallback: tuple[EngineName, ...]
    argv: ArgvBuilder


ENGINES: Mapping[EngineName, EngineSpec] = {
    spec.name: spec
    for spec in (
        EngineSpec(
            name=EngineName.TECTONIC,
            executable="tectonic",
            fallback=(EngineName.LATEXMK, EngineName.PDFLATEX, EngineName.LUALATEX),
            argv=_tectonic_argv,
        ),
        EngineSpec(
            name=EngineName.LATEXMK,
            executable="latexmk",
            fallback=(EngineName.TECTONIC, EngineName.PDFLATEX, EngineName.LUALATEX),
            argv=_latexmk_argv,
        ),
        EngineSpec(
            name=EngineName.PDFLATEX,
            executable="pdflatex",
            fallback=(EngineName.LATEXMK, EngineName.TECTONIC, EngineName.LUALATEX),
            argv=_latex_argv("pdflatex"),
        ),
        EngineSpec(
            name=EngineName.LUALATEX,
            executable="lualatex",
            fallback=(EngineName.LATEXMK, EngineName.TECTONIC, EngineName.PDFLATEX),
            argv=_latex_argv("lualatex"),
        ),
    )
}


@dataclass(slots=True)
class EngineCommand:
    """Executable command plus the paths it is expected to touch."""

    engine: EngineName
    argv: list[str]
    workdir: Path
    pdf_path: Path


def coerce_engine(value: str | EngineName) -> EngineName:
    """Normalise a user-supplied engine identifier."""
    if isinstance(value, EngineName):
        return value
    candidate = value.strip().lower()
    try:
        return EngineName(candidate)
    except ValueError as exc:
        raise UnknownEngineError(value) from exc


def engine_spec(engine: str | EngineName) -> EngineSpec:
    """Return the table entry for ``engine``."""
    name = coerce_engine(engine)
    spec = ENGINES.get(name)
    if spec is None:
        raise UnknownEngineError(str(engine))
    return spec


def candidate_order(preference: str | EngineName) -> list[EngineName]:
    """Return the probe order for ``preference``: preferred first, then its fallbacks."""
    spec = engine_spec(preference)
    return [spec.name, *spec.fallback]


def resolve_engine(preference: str | EngineName) -> EngineName:
    """Return the first engine from the preference order found on ``PATH``."""
    order = candidate_order(preference)
    for name in order:
        if shutil.which(ENGINES[name].executable) is not None:
            return name
    raise EngineNotFoundError([ENGINES[name].executable for name in order])


def build_engine_command(engine: str | EngineName, source: Path, outdir: Path) -> EngineCommand:
    """Construct the command compiling ``source`` into ``outdir``.

    The command runs from the directory holding ``source`` so that relative
    ``\\input`` and bibliography paths resolve the same way for every engine.
    """
    spec = engine_spec(engine)
    source = source.resolve()
    outdir = outdir.resolve()
    argv = spec.argv(source.name, str(outdir))
    return EngineCommand(
        engine=spec.name,
        argv=argv,
        workdir=source.parent,
        pdf_path=expected_pdf_path(outdir, source),
    )


def invoke_engine(
    engine: str | EngineName,
    source: Path,
    outdir: Path,
    *,
    console: Console | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> Path:
    """Run ``engine`` once over ``source`` and return the produced PDF path."""
    emitter = emitter or NullEmitter()
    if not source.is_file():
        raise SourceNotFoundError(source)
    outdir.mkdir(parents=True, exist_ok=True)

    command = build_engine_command(engine, source, outdir)
    returncode = run_engine_command(command.argv, workdir=command.workdir, console=console)
    if returncode != 0:
        raise EngineExecutionError(command.argv, returncode)

    pdf_path = locate_pdf(outdir.resolve(), source)
    if pdf_path != command.pdf_path:
        emitter.event(
            "artifact_fallback",
            {"expected": str(command.pdf_path), "path": str(pdf_path)},
        )
    return pdf_path


__all__ = [
    "ENGINES",
    "SPAWN_FAILURE_STATUS",
    "EngineCommand",
    "EngineName",
    "EngineSpec",
    "build_engine_command",
    "candidate_order",
    "coerce_engine",
    "engine_spec",
    "invoke_engine",
    "resolve_engine",
    "run_engine_command",
]
