"""Project configuration stored in ``paperx.toml``.

PaperConfig

`main_tex` (`str`)
: Project-relative path of the root LaTeX document. The only required key.

`engine` (`str`)
: Preferred engine identifier (`tectonic`, `latexmk`, `pdflatex` or `lualatex`).
  Used by `build` and `watch` when `--engine` is omitted.

`title`, `author`, `affiliation`, `keywords`, `abstract_text` (`str`)
: Document metadata captured when the project was scaffolded. They are kept for
  reference only; the build never reads them.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
from pathlib import Path
import tomllib
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigError


CONFIG_FILENAME = "paperx.toml"


class PaperConfig(BaseModel):
    """Settings persisted at the root of a paper project."""

    model_config = ConfigDict(extra="ignore")

    main_tex: str
    engine: str = "tectonic"
    title: str = ""
    author: str = ""
    affiliation: str = ""
    keywords: str = ""
    abstract_text: str = ""

    @field_validator("main_tex")
    @classmethod
    def _require_main_tex(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("main_tex must not be empty")
        return value

    def main_path(self, root: Path) -> Path:
        """Return the entry document resolved against the project root."""
        return root / self.main_tex


def toml_basic_string(value: str) -> str:
    """Return a TOML basic string literal (JSON string encoding is a compatible subset)."""
    return json.dumps(value, ensure_ascii=False)


def render_config(config: PaperConfig) -> str:
    """Serialise ``config`` as flat TOML key/value pairs."""
    lines = [
        f"{key} = {toml_basic_string(str(value))}"
        for key, value in config.model_dump().items()
    ]
    return "\n".join(lines) + "\n"


def parse_config(data: Mapping[str, Any], *, source: Path | None = None) -> PaperConfig:
    """Validate raw mapping data into a :class:`PaperConfig`."""
    try:
        return PaperConfig.model_validate(dict(data))
    except ValidationError as exc:
        origin = source or CONFIG_FILENAME
        raise ConfigError(f"Invalid configuration in {origin}: {exc}") from exc


def load_config(root: Path | None = None) -> PaperConfig:
    """Read ``paperx.toml`` from ``root`` (default: the working directory)."""
    path = (root or Path.cwd()) / CONFIG_FILENAME
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Unable to decode {path} as UTF-8: {exc}") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Unable to parse {path}: {exc}") from exc
    return parse_config(data, source=path)


def write_config(config: PaperConfig, root: Path) -> Path:
    """Write ``config`` to ``root/paperx.toml`` and return the file path."""
    path = root / CONFIG_FILENAME
    path.write_text(render_config(config), encoding="utf-8")
    return path


__all__ = [
    "CONFIG_FILENAME",
    "PaperConfig",
    "load_config",
    "parse_config",
    "render_config",
    "toml_basic_string",
    "write_config",
]
