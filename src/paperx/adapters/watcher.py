"""Filesystem watching built on watchdog observers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from pathlib import Path
import time

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from paperx.core.diagnostics import DiagnosticEmitter, NullEmitter
from paperx.core.exceptions import WatchError
from paperx.core.watch import DEFAULT_DEBOUNCE, RebuildCoordinator


logger = logging.getLogger(__name__)

WATCH_DIRECTORIES: tuple[str, ...] = ("tex", "bib", "figures")

# Opened/closed notifications fire whenever an engine reads the sources.
TRIGGER_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)


class RebuildHandler(FileSystemEventHandler):
    """Forward content mutations to a :class:`RebuildCoordinator`."""

    def __init__(self, coordinator: RebuildCoordinator) -> None:
        super().__init__()
        self.coordinator = coordinator

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in TRIGGER_EVENTS:
            return
        logger.debug("%s: %s", event.event_type, event.src_path)
        self.coordinator.offer()


class ChangeWatcher:
    """Rebuild a project whenever its sources change."""

    def __init__(
        self,
        root: Path,
        rebuild: Callable[[], object],
        *,
        directories: Sequence[str] = WATCH_DIRECTORIES,
        debounce: float = DEFAULT_DEBOUNCE,
        emitter: DiagnosticEmitter | None = None,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        self.root = root
        self.directories = tuple(directories)
        self._emitter = emitter or NullEmitter()
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None
        self.coordinator = RebuildCoordinator(rebuild, debounce=debounce, emitter=self._emitter)
        self.handler = RebuildHandler(self.coordinator)

    def existing_directories(self) -> list[Path]:
        """Return the watch directories present on disk; missing ones are skipped."""
        found: list[Path] = []
        for name in self.directories:
            candidate = self.root / name
            if candidate.is_dir():
                found.append(candidate)
            else:
                logger.debug("skipping missing watch directory %s", candidate)
        return found

    def start(self) -> list[Path]:
        """Subscribe to every existing watch directory and start the observer."""
        watched = self.existing_directories()
        observer = self._observer_factory()
        try:
            for directory in watched:
                observer.schedule(self.handler, str(directory), recursive=True)
            observer.start()
        except OSError as exc:
            raise WatchError(f"Unable to watch {self.root}: {exc}") from exc
        self._observer = observer
        self._emitter.event(
            "watch_started",
            {"directories": [path.name for path in watched]},
        )
        return watched

    def stop(self) -> None:
        observer = self._observer
        if observer is None:
            return
        self._observer = None
        observer.stop()
        observer.join()

    def serve_forever(self, *, interval: float = 1.0) -> None:
        """Block until interrupted, then release the observer."""
        if self._observer is None:
            self.start()
        try:
            while True:
                time.sleep(interval)
        except KeyboardInterrupt:
            logger.debug("watch session interrupted")
        finally:
            self.stop()


__all__ = ["TRIGGER_EVENTS", "WATCH_DIRECTORIES", "ChangeWatcher", "RebuildHandler"]
