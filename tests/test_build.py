from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

import pytest

from paperx.adapters.latex import engines
from paperx.adapters.latex.engines import EngineName
from paperx.api import BuildRequest, build_document, build_project
from paperx.core.exceptions import (
    ArtifactNotFoundError,
    ConfigError,
    EngineExecutionError,
    EngineNotFoundError,
    SourceNotFoundError,
)


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.errors: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


class FakeRunner:
    """Stand-in for the engine subprocess that writes a PDF where asked."""

    def __init__(self, *, returncode: int = 0, produce: str | None = "main.pdf") -> None:
        self.returncode = returncode
        self.produce = produce
        self.calls: list[tuple[list[str], Path]] = []
        self.outdir: Path | None = None

    def __call__(self, argv: list[str], *, workdir: Path, console: object = None) -> int:
        self.calls.append((list(argv), workdir))
        if self.produce and self.outdir is not None:
            target = self.outdir / self.produce
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(b"%PDF-1.5\n")
        return self.returncode


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "tex" / "main.tex"
    path.parent.mkdir(parents=True)
    path.write_text("\\documentclass{article}\n\\begin{document}\n\\end{document}\n")
    return path


def _install_runner(monkeypatch: pytest.MonkeyPatch, runner: FakeRunner, outdir: Path) -> None:
    runner.outdir = outdir
    monkeypatch.setattr(engines, "run_engine_command", runner)


def test_invoke_returns_conventional_pdf(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    outdir = tmp_path / "nested" / "build"
    runner = FakeRunner()
    _install_runner(monkeypatch, runner, outdir)

    pdf = engines.invoke_engine(EngineName.TECTONIC, source, outdir)

    assert pdf == outdir.resolve() / "main.pdf"
    assert outdir.is_dir()
    assert len(runner.calls) == 1
    argv, workdir = runner.calls[0]
    assert argv[:3] == ["tectonic", "-X", "compile"]
    assert workdir == source.parent.resolve()


def test_invoke_scans_output_directory_when_pdf_name_differs(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    outdir = tmp_path / "build"
    runner = FakeRunner(produce="tex/output.pdf")
    _install_runner(monkeypatch, runner, outdir)
    emitter = RecordingEmitter()

    pdf = engines.invoke_engine("latexmk", source, outdir, emitter=emitter)

    assert pdf == outdir.resolve() / "tex" / "output.pdf"
    assert [name for name, _ in emitter.events] == ["artifact_fallback"]


def test_invoke_without_pdf_raises(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    outdir = tmp_path / "build"
    _install_runner(monkeypatch, FakeRunner(produce=None), outdir)

    with pytest.raises(ArtifactNotFoundError):
        engines.invoke_engine("pdflatex", source, outdir)


def test_invoke_reports_failed_command(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    outdir = tmp_path / "build"
    runner = FakeRunner(returncode=1)
    _install_runner(monkeypatch, runner, outdir)

    with pytest.raises(EngineExecutionError) as excinfo:
        engines.invoke_engine("lualatex", source, outdir)

    assert excinfo.value.returncode == 1
    assert excinfo.value.argv == runner.calls[0][0]
    assert excinfo.value.argv[0] == "lualatex"


def test_invoke_requires_existing_source(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    runner = FakeRunner()
    _install_runner(monkeypatch, runner, tmp_path / "build")

    with pytest.raises(SourceNotFoundError):
        engines.invoke_engine("tectonic", tmp_path / "missing.tex", tmp_path / "build")

    assert runner.calls == []


def test_build_document_never_spawns_without_engines(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    runner = FakeRunner()
    _install_runner(monkeypatch, runner, tmp_path / "build")
    monkeypatch.setattr(engines.shutil, "which", lambda _name: None)

    with pytest.raises(EngineNotFoundError):
        build_document(BuildRequest(source=source, outdir=tmp_path / "build"))

    assert runner.calls == []


def test_build_document_reports_resolved_engine(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    outdir = tmp_path / "build"
    runner = FakeRunner()
    _install_runner(monkeypatch, runner, outdir)
    monkeypatch.setattr(
        engines.shutil, "which", lambda name: "/usr/bin/latexmk" if name == "latexmk" else None
    )
    emitter = RecordingEmitter()

    result = build_document(
        BuildRequest(source=source, outdir=outdir, engine="tectonic"), emitter=emitter
    )

    assert result.engine is EngineName.LATEXMK
    assert result.pdf_path == outdir.resolve() / "main.pdf"
    assert emitter.events[0] == ("engine_resolved", {"engine": "latexmk", "preferred": "tectonic"})
    assert runner.calls[0][0][0] == "latexmk"


def test_build_document_logs_without_emitter(
    monkeypatch: pytest.MonkeyPatch,
    source: Path,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    outdir = tmp_path / "build"
    _install_runner(monkeypatch, FakeRunner(), outdir)
    monkeypatch.setattr(engines.shutil, "which", lambda name: f"/usr/bin/{name}")

    with caplog.at_level(logging.INFO, logger="paperx.core.diagnostics"):
        build_document(BuildRequest(source=source, outdir=outdir, engine="pdflatex"))

    assert "Using engine: pdflatex" in caplog.messages


def test_build_project_uses_configured_engine(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    (tmp_path / "paperx.toml").write_text(
        'main_tex = "tex/main.tex"\nengine = "pdflatex"\n', encoding="utf-8"
    )
    runner = FakeRunner()
    _install_runner(monkeypatch, runner, tmp_path / "build")
    monkeypatch.setattr(engines.shutil, "which", lambda name: f"/usr/bin/{name}")

    result = build_project(tmp_path)

    assert result.engine is EngineName.PDFLATEX
    assert result.pdf_path == (tmp_path / "build").resolve() / "main.pdf"


def test_build_project_engine_argument_overrides_config(
    monkeypatch: pytest.MonkeyPatch, source: Path, tmp_path: Path
) -> None:
    (tmp_path / "paperx.toml").write_text(
        'main_tex = "tex/main.tex"\nengine = "pdflatex"\n', encoding="utf-8"
    )
    outdir = tmp_path / "out"
    runner = FakeRunner()
    _install_runner(monkeypatch, runner, outdir)
    monkeypatch.setattr(engines.shutil, "which", lambda name: f"/usr/bin/{name}")

    result = build_project(tmp_path, engine=EngineName.LUALATEX, outdir=Path("out"))

    assert result.engine is EngineName.LUALATEX
    assert result.pdf_path.parent == outdir.resolve()


def test_build_project_without_config_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        build_project(tmp_path)
