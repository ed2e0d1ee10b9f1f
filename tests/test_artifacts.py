from pathlib import Path

import pytest

from paperx.adapters.latex.artifacts import expected_pdf_path, iter_pdfs, locate_pdf
from paperx.core.exceptions import ArtifactNotFoundError


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"%PDF")
    return path


def test_expected_path_follows_entry_stem(tmp_path: Path) -> None:
    assert expected_pdf_path(tmp_path, Path("tex/paper.tex")) == tmp_path / "paper.pdf"


def test_locate_prefers_conventional_path(tmp_path: Path) -> None:
    _touch(tmp_path / "a" / "other.pdf")
    conventional = _touch(tmp_path / "main.pdf")

    assert locate_pdf(tmp_path, Path("main.tex")) == conventional


def test_locate_returns_single_nested_pdf(tmp_path: Path) -> None:
    nested = _touch(tmp_path / "deep" / "er" / "main-output.pdf")
    (tmp_path / "main.log").write_text("log")

    assert locate_pdf(tmp_path, Path("main.tex")) == nested


def test_scan_order_is_stable(tmp_path: Path) -> None:
    _touch(tmp_path / "b" / "x.pdf")
    first = _touch(tmp_path / "a" / "z.PDF")
    _touch(tmp_path / "a" / "zz" / "y.pdf")

    found = list(iter_pdfs(tmp_path))

    assert found[0] == first
    assert found == [first, tmp_path / "a" / "zz" / "y.pdf", tmp_path / "b" / "x.pdf"]


def test_locate_without_pdf_raises(tmp_path: Path) -> None:
    (tmp_path / "main.log").write_text("log")

    with pytest.raises(ArtifactNotFoundError) as excinfo:
        locate_pdf(tmp_path, Path("main.tex"))

    assert excinfo.value.outdir == tmp_path
