"""Primary public API for paperx."""

from __future__ import annotations

from paperx.adapters.latex.engines import (
    ENGINES,
    EngineName,
    build_engine_command,
    candidate_order,
    invoke_engine,
    resolve_engine,
)
from paperx.adapters.watcher import ChangeWatcher
from paperx.api import BuildRequest, BuildResult, build_document, build_project
from paperx.core.config import PaperConfig, load_config
from paperx.core.exceptions import (
    AlreadyExistsError,
    ArtifactNotFoundError,
    BuildError,
    ConfigError,
    EngineExecutionError,
    EngineNotFoundError,
    MalformedDocumentError,
    PaperxError,
    UnknownEngineError,
    WatchError,
)
from paperx.core.scaffold import ProjectMetadata, ProjectTemplate, create_project
from paperx.core.sections import SectionInsertion, insert_section
from paperx.core.watch import RebuildCoordinator
from paperx.version import get_version


__version__ = get_version()

__all__ = [
    "ENGINES",
    "AlreadyExistsError",
    "ArtifactNotFoundError",
    "BuildError",
    "BuildRequest",
    "BuildResult",
    "ChangeWatcher",
    "ConfigError",
    "EngineExecutionError",
    "EngineName",
    "EngineNotFoundError",
    "MalformedDocumentError",
    "PaperConfig",
    "PaperxError",
    "ProjectMetadata",
    "ProjectTemplate",
    "RebuildCoordinator",
    "SectionInsertion",
    "UnknownEngineError",
    "WatchError",
    "__version__",
    "build_document",
    "build_engine_command",
    "build_project",
    "candidate_order",
    "create_project",
    "get_version",
    "insert_section",
    "invoke_engine",
    "load_config",
    "resolve_engine",
]
