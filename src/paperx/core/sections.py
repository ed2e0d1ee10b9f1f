"""Register new section fragments in a root LaTeX document.

The root document is treated as a sequence of lines. Two of them matter:

* the splice marker, a comment line ``% paperx:sections`` under which new
  ``\\input`` directives accumulate (most recent directly below the marker);
* the closing ``\\end{document}`` line, used as fallback anchor when the
  marker has been removed.

The anchor is located before anything is written, so a malformed document or a
name collision leaves the project untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import re
from typing import Literal

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import (
    AlreadyExistsError,
    InvalidSectionNameError,
    MalformedDocumentError,
    ScaffoldError,
)


SECTION_MARKER = re.compile(r"^%\s*paperx:sections\s*$")
DOCUMENT_END = re.compile(r"^\\end\{document\}")
INCLUDE_TAG = "% paperx:include"

AnchorKind = Literal["marker", "end"]


@dataclass(slots=True)
class DocumentLayout:
    """Line-level view of a root document with its splice anchors."""

    lines: list[str]
    newline: str
    marker_index: int | None
    end_index: int | None

    @classmethod
    def parse(cls, text: str) -> DocumentLayout:
        lines = text.splitlines(keepends=True)
        marker_index: int | None = None
        end_index: int | None = None
        for index, line in enumerate(lines):
            content = line.rstrip("\r\n")
            if marker_index is None and SECTION_MARKER.match(content):
                marker_index = index
            if end_index is None and DOCUMENT_END.match(content):
                end_index = index
        newline = "\r\n" if "\r\n" in text else "\n"
        return cls(lines=lines, newline=newline, marker_index=marker_index, end_index=end_index)

    @property
    def anchor(self) -> AnchorKind | None:
        if self.marker_index is not None:
            return "marker"
        if self.end_index is not None:
            return "end"
        return None

    def splice(self, directive: list[str]) -> str:
        """Return the document text with ``directive`` inserted at the anchor."""
        block = [f"{line}{self.newline}" for line in directive]
        lines = list(self.lines)
        if self.marker_index is not None:
            marker = lines[self.marker_index]
            if not marker.endswith(("\n", "\r")):
                lines[self.marker_index] = marker + self.newline
            position = self.marker_index + 1
        elif self.end_index is not None:
            position = self.end_index
        else:
            raise ValueError("document has no splice anchor")
        lines[position:position] = block
        return "".join(lines)


@dataclass(slots=True)
class SectionInsertion:
    """Outcome of registering a new section."""

    name: str
    title: str
    fragment_path: Path
    document_path: Path
    directive: list[str]
    anchor: AnchorKind


def titleize(name: str) -> str:
    """Turn ``related-work`` or ``related_work`` into ``Related Work``."""
    return " ".join(part[:1].upper() + part[1:] for part in re.split(r"[-_ ]", name))


def validate_section_name(name: str) -> str:
    candidate = name.strip()
    if candidate.endswith(".tex"):
        candidate = candidate[: -len(".tex")]
    if not candidate:
        raise InvalidSectionNameError("Section name must not be empty.")
    if "/" in candidate or "\\" in candidate or candidate.startswith("."):
        raise InvalidSectionNameError(
            f"Invalid section name '{name}': use a plain file stem such as 'related-work'."
        )
    return candidate


def render_fragment(name: str) -> str:
    return f"% Section: {name}\n\\section{{{titleize(name)}}}\nWrite here.\n"


def include_directive(fragment: Path, document: Path) -> list[str]:
    """Return the directive lines that include ``fragment`` from ``document``."""
    relative = Path(os.path.relpath(fragment, document.parent)).as_posix()
    return [INCLUDE_TAG, f"\\input{{{relative}}}"]


def _read_document(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise ScaffoldError(f"Root document not found: {path}") from exc


def insert_section(
    name: str,
    document: Path,
    *,
    sections_dir: Path | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> SectionInsertion:
    """Create ``sections/<name>.tex`` and include it from ``document``."""
    emitter = emitter or NullEmitter()
    stem = validate_section_name(name)
    sections_dir = sections_dir or document.parent / "sections"
    fragment = sections_dir / f"{stem}.tex"
    if fragment.exists():
        raise AlreadyExistsError(fragment, kind="Section")

    layout = DocumentLayout.parse(_read_document(document))
    anchor = layout.anchor
    if anchor is None:
        raise MalformedDocumentError(document)

    directive = include_directive(fragment, document)
    updated = layout.splice(directive)

    sections_dir.mkdir(parents=True, exist_ok=True)
    fragment.write_text(render_fragment(stem), encoding="utf-8")
    with document.open("w", encoding="utf-8", newline="") as handle:
        handle.write(updated)

    emitter.event("section_added", {"path": str(fragment), "anchor": anchor})
    return SectionInsertion(
        name=stem,
        title=titleize(stem),
        fragment_path=fragment,
        document_path=document,
        directive=directive,
        anchor=anchor,
    )


__all__ = [
    "DOCUMENT_END",
    "INCLUDE_TAG",
    "SECTION_MARKER",
    "DocumentLayout",
    "SectionInsertion",
    "include_directive",
    "insert_section",
    "render_fragment",
    "titleize",
    "validate_section_name",
]
