"""Create new paper projects from the bundled templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .config import CONFIG_FILENAME, PaperConfig, write_config
from .exceptions import AlreadyExistsError


logger = logging.getLogger(__name__)

TEMPLATE_ROOT = Path(__file__).resolve().parent.parent / "templates"
MAIN_TEX = "tex/main.tex"


class ProjectTemplate(str, Enum):
    """Bundled document templates."""

    ARTICLE_EN = "article-en"
    LTJS_JA = "ltjs-ja"

    @property
    def engine(self) -> str:
        # luatexja only runs under LuaLaTeX.
        return "lualatex" if self is ProjectTemplate.LTJS_JA else "tectonic"


@dataclass(slots=True)
class ProjectMetadata:
    """Values substituted into the templates."""

    title: str = "Untitled Paper"
    author: str = "First Last"
    affiliation: str = "Affiliation"
    keywords: str = "keyword1, keyword2"
    abstract: str = "This is the abstract."


# Project-relative destination -> template file name.
_COMMON_FILES = {
    ".gitignore": "gitignore",
    "README.md": "README.md",
    "bib/references.bib": "references.bib",
    "tex/sections/introduction.tex": "introduction.tex",
}


def _build_environment(template: ProjectTemplate) -> Environment:
    loader = FileSystemLoader(
        [str(TEMPLATE_ROOT / template.value), str(TEMPLATE_ROOT / "common")]
    )
    return Environment(
        loader=loader,
        autoescape=False,
        keep_trailing_newline=True,
        block_start_string=r"\BLOCK{",
        block_end_string="}",
        variable_start_string=r"\VAR{",
        variable_end_string="}",
        comment_start_string=r"\#{",
        comment_end_string="}",
    )


def render_main_tex(
    template: ProjectTemplate,
    metadata: ProjectMetadata,
    *,
    environment: Environment | None = None,
) -> str:
    """Render the root document of ``template``."""
    environment = environment or _build_environment(template)
    return environment.get_template("main.tex").render(**_context(metadata))


def _context(metadata: ProjectMetadata) -> dict[str, str]:
    return {
        "title": metadata.title,
        "author": metadata.author,
        "affiliation": metadata.affiliation,
        "keywords": metadata.keywords,
        "abstract": metadata.abstract,
    }


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def create_project(
    root: Path,
    *,
    template: ProjectTemplate = ProjectTemplate.ARTICLE_EN,
    metadata: ProjectMetadata | None = None,
) -> PaperConfig:
    """Scaffold a project at ``root`` and return its configuration."""
    if root.exists():
        raise AlreadyExistsError(root, kind="Directory")
    metadata = metadata or ProjectMetadata()
    environment = _build_environment(template)
    context = _context(metadata)

    for name in ("tex/sections", "bib", "figures"):
        (root / name).mkdir(parents=True, exist_ok=True)

    for destination, source in _COMMON_FILES.items():
        _write(root / destination, environment.get_template(source).render(**context))
    _write(root / MAIN_TEX, render_main_tex(template, metadata, environment=environment))

    config = PaperConfig(
        main_tex=MAIN_TEX,
        engine=template.engine,
        title=metadata.title,
        author=metadata.author,
        affiliation=metadata.affiliation,
        keywords=metadata.keywords,
        abstract_text=metadata.abstract,
    )
    write_config(config, root)
    logger.debug("scaffolded %s from %s (%s)", root, template.value, CONFIG_FILENAME)
    return config


__all__ = [
    "MAIN_TEX",
    "TEMPLATE_ROOT",
    "ProjectMetadata",
    "ProjectTemplate",
    "create_project",
    "render_main_tex",
]
