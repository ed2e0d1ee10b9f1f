"""Programmatic API for building and scaffolding paper projects."""

from __future__ import annotations

from .build import (
    DEFAULT_OUTDIR,
    BuildRequest,
    BuildResult,
    build_document,
    build_project,
    project_request,
)


__all__ = [
    "DEFAULT_OUTDIR",
    "BuildRequest",
    "BuildResult",
    "build_document",
    "build_project",
    "project_request",
]
