"""High-level build entry points combining engine resolution and invocation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from paperx.adapters.latex import engines
from paperx.adapters.latex.engines import EngineName
from paperx.core.config import PaperConfig, load_config
from paperx.core.diagnostics import DiagnosticEmitter, LoggingEmitter


DEFAULT_OUTDIR = Path("build")


@dataclass(slots=True)
class BuildRequest:
    """Inputs for a single build."""

    source: Path
    outdir: Path = DEFAULT_OUTDIR
    engine: EngineName | str = EngineName.TECTONIC


@dataclass(slots=True)
class BuildResult:
    """Outcome of a successful build."""

    engine: EngineName
    pdf_path: Path


def build_document(
    request: BuildRequest,
    *,
    console: Console | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> BuildResult:
    """Resolve an engine for ``request`` and compile its source once."""
    emitter = emitter or LoggingEmitter()
    preferred = engines.coerce_engine(request.engine)
    resolved = engines.resolve_engine(preferred)
    emitter.event("engine_resolved", {"engine": resolved.value, "preferred": preferred.value})
    pdf_path = engines.invoke_engine(
        resolved,
        request.source,
        request.outdir,
        console=console,
        emitter=emitter,
    )
    return BuildResult(engine=resolved, pdf_path=pdf_path)


def project_request(
    config: PaperConfig,
    *,
    root: Path,
    engine: EngineName | str | None = None,
    outdir: Path | None = None,
) -> BuildRequest:
    """Derive a :class:`BuildRequest` for a configured project."""
    target = outdir or DEFAULT_OUTDIR
    if not target.is_absolute():
        target = root / target
    return BuildRequest(
        source=config.main_path(root),
        outdir=target,
        engine=engine or config.engine,
    )


def build_project(
    root: Path | None = None,
    *,
    engine: EngineName | str | None = None,
    outdir: Path | None = None,
    console: Console | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> BuildResult:
    """Read ``paperx.toml`` under ``root`` and build the configured entry document."""
    root = root or Path.cwd()
    config = load_config(root)
    request = project_request(config, root=root, engine=engine, outdir=outdir)
    return build_document(request, console=console, emitter=emitter)


__all__ = [
    "DEFAULT_OUTDIR",
    "BuildRequest",
    "BuildResult",
    "build_document",
    "build_project",
    "project_request",
]
