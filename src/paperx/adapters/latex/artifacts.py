"""Locate PDF artifacts produced by engine runs."""

from __future__ import annotations

from collections.abc import Iterator
import os
from pathlib import Path

from paperx.core.exceptions import ArtifactNotFoundError


PDF_SUFFIX = ".pdf"


def expected_pdf_path(outdir: Path, entry: Path) -> Path:
    """Return the conventional artifact location ``outdir/<entry stem>.pdf``."""
    return outdir / f"{entry.stem}{PDF_SUFFIX}"


def iter_pdfs(root: Path) -> Iterator[Path]:
    """Yield PDF files under ``root`` in a stable, depth-first order."""
    for current, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.lower().endswith(PDF_SUFFIX):
                yield Path(current) / filename


def scan_for_pdf(outdir: Path) -> Path:
    """Return the first PDF found under ``outdir`` or raise."""
    for candidate in iter_pdfs(outdir):
        return candidate
    raise ArtifactNotFoundError(outdir)


def locate_pdf(outdir: Path, entry: Path) -> Path:
    """Return the built PDF, preferring the conventional path over a scan."""
    expected = expected_pdf_path(outdir, entry)
    if expected.is_file():
        return expected
    return scan_for_pdf(outdir)


__all__ = ["PDF_SUFFIX", "expected_pdf_path", "iter_pdfs", "locate_pdf", "scan_for_pdf"]
