import itertools
from pathlib import Path

import pytest

from paperx.adapters.latex import engines
from paperx.adapters.latex.engines import EngineName
from paperx.core.exceptions import EngineNotFoundError, UnknownEngineError


FALLBACK_ORDERS = {
    "tectonic": ["tectonic", "latexmk", "pdflatex", "lualatex"],
    "latexmk": ["latexmk", "tectonic", "pdflatex", "lualatex"],
    "pdflatex": ["pdflatex", "latexmk", "tectonic", "lualatex"],
    "lualatex": ["lualatex", "latexmk", "tectonic", "pdflatex"],
}


def _installed(monkeypatch: pytest.MonkeyPatch, available: set[str]) -> list[str]:
    probed: list[str] = []

    def fake_which(name: str) -> str | None:
        probed.append(name)
        return f"/usr/bin/{name}" if name in available else None

    monkeypatch.setattr(engines.shutil, "which", fake_which)
    return probed


@pytest.mark.parametrize(("preference", "expected"), FALLBACK_ORDERS.items())
def test_candidate_order_starts_with_preference(preference: str, expected: list[str]) -> None:
    order = [name.value for name in engines.candidate_order(preference)]

    assert order == expected
    assert sorted(order) == sorted(name.value for name in EngineName)


@pytest.mark.parametrize("preference", list(EngineName))
def test_resolve_returns_first_installed_candidate(
    monkeypatch: pytest.MonkeyPatch, preference: EngineName
) -> None:
    order = engines.candidate_order(preference)
    names = [name.value for name in EngineName]
    for size in range(1, len(names) + 1):
        for subset in itertools.combinations(names, size):
            _installed(monkeypatch, set(subset))
            resolved = engines.resolve_engine(preference)
            expected = next(name for name in order if name.value in subset)
            assert resolved is expected


def test_resolve_prefers_requested_engine(monkeypatch: pytest.MonkeyPatch) -> None:
    probed = _installed(monkeypatch, {"tectonic", "lualatex"})

    assert engines.resolve_engine("lualatex") is EngineName.LUALATEX
    assert probed == ["lualatex"]


def test_resolve_without_any_engine_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    probed = _installed(monkeypatch, set())

    with pytest.raises(EngineNotFoundError) as excinfo:
        engines.resolve_engine(EngineName.PDFLATEX)

    assert probed == FALLBACK_ORDERS["pdflatex"]
    assert excinfo.value.candidates == FALLBACK_ORDERS["pdflatex"]
    assert "No TeX engine found" in str(excinfo.value)


def test_unknown_engine_is_rejected() -> None:
    with pytest.raises(UnknownEngineError, match="xelatex"):
        engines.resolve_engine("xelatex")


def test_coerce_engine_normalises_case_and_spacing() -> None:
    assert engines.coerce_engine(" LuaLaTeX ") is EngineName.LUALATEX
    assert engines.coerce_engine(EngineName.LATEXMK) is EngineName.LATEXMK


def test_tectonic_command_uses_compile_subcommand(tmp_path: Path) -> None:
    source = tmp_path / "tex" / "main.tex"
    outdir = tmp_path / "build"

    command = engines.build_engine_command("tectonic", source, outdir)

    assert command.argv == [
        "tectonic",
        "-X",
        "compile",
        "main.tex",
        "--outdir",
        str(outdir.resolve()),
        "--keep-logs",
        "--keep-intermediates",
    ]
    assert command.workdir == source.parent.resolve()
    assert command.pdf_path == outdir.resolve() / "main.pdf"


def test_latexmk_command_uses_output_directory_flag(tmp_path: Path) -> None:
    source = tmp_path / "tex" / "paper.tex"
    outdir = tmp_path / "out"

    command = engines.build_engine_command(EngineName.LATEXMK, source, outdir)

    assert command.argv == [
        "latexmk",
        "-pdf",
        "-interaction=nonstopmode",
        f"-output-directory={outdir.resolve()}",
        "paper.tex",
    ]
    assert command.pdf_path.name == "paper.pdf"


@pytest.mark.parametrize("program", ["pdflatex", "lualatex"])
def test_plain_engines_take_single_output_flag(tmp_path: Path, program: str) -> None:
    source = tmp_path / "main.tex"
    outdir = tmp_path / "build"

    command = engines.build_engine_command(program, source, outdir)

    assert command.argv[0] == program
    assert command.argv[-1] == "main.tex"
    assert [arg for arg in command.argv if arg.startswith("-output-directory=")] == [
        f"-output-directory={outdir.resolve()}"
    ]


def test_engine_table_covers_every_engine() -> None:
    assert set(engines.ENGINES) == set(EngineName)
    for name, spec in engines.ENGINES.items():
        assert spec.name is name
        assert spec.executable == name.value
        assert name not in spec.fallback
