"""Copy figures into a project and produce the LaTeX needed to show them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import shutil

from .exceptions import FigureNotFoundError


DEFAULT_LABEL = "fig:example"
DEFAULT_CAPTION = "Caption here."


@dataclass(slots=True)
class FigureImport:
    destination: Path
    snippet: str


def figure_snippet(filename: str, *, label: str, caption: str) -> str:
    return (
        "\\begin{figure}[t]\\centering"
        f"\\includegraphics[width=0.9\\linewidth]{{figures/{filename}}}"
        f"\\caption{{{caption}}}\\label{{{label}}}\\end{{figure}}"
    )


def import_figure(
    source: Path,
    *,
    figures_dir: Path = Path("figures"),
    label: str | None = None,
    caption: str | None = None,
) -> FigureImport:
    """Copy ``source`` into ``figures_dir`` and return the matching snippet."""
    if not source.is_file():
        raise FigureNotFoundError(source)
    figures_dir.mkdir(parents=True, exist_ok=True)
    destination = figures_dir / source.name
    if not (destination.exists() and destination.samefile(source)):
        shutil.copyfile(source, destination)
    snippet = figure_snippet(
        source.name,
        label=label or DEFAULT_LABEL,
        caption=caption or DEFAULT_CAPTION,
    )
    return FigureImport(destination=destination, snippet=snippet)


__all__ = ["DEFAULT_CAPTION", "DEFAULT_LABEL", "FigureImport", "figure_snippet", "import_figure"]
