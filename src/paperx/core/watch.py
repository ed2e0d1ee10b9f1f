"""Debounced rebuild coordination for watch sessions."""

from __future__ import annotations

from collections.abc import Callable
import logging
from threading import Lock
import time

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import PaperxError


logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.4


class RebuildCoordinator:
    """Turn bursts of change notifications into serialized rebuilds.

    Every notification goes through :meth:`offer`. A notification arriving less
    than ``debounce`` seconds after the last accepted one is dropped without
    touching the state, even while a rebuild runs. Any other notification
    arriving while a rebuild runs is remembered, and one trailing rebuild
    follows once the current one ends, so two rebuilds never overlap.
    """

    def __init__(
        self,
        rebuild: Callable[[], object],
        *,
        debounce: float = DEFAULT_DEBOUNCE,
        clock: Callable[[], float] = time.monotonic,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._rebuild = rebuild
        self.debounce = debounce
        self._clock = clock
        self._emitter = emitter or LoggingEmitter()
        self._lock = Lock()
        self._last_trigger: float | None = None
        self._building = False
        self._pending = False
        self.triggers = 0
        self.failures = 0

    @property
    def last_trigger(self) -> float | None:
        return self._last_trigger

    @property
    def building(self) -> bool:
        return self._building

    def offer(self, now: float | None = None) -> bool:
        """Handle one change notification; return ``True`` when it started a rebuild."""
        timestamp = self._clock() if now is None else now
        with self._lock:
            if self._last_trigger is not None and timestamp - self._last_trigger < self.debounce:
                return False
            if self._building:
                self._pending = True
                return False
            self._last_trigger = timestamp
            self._building = True

        self._run_until_settled()
        return True

    def _run_until_settled(self) -> None:
        try:
            while True:
                self._run_once()
                with self._lock:
                    if not self._pending:
                        return
                    self._pending = False
                    self._last_trigger = self._clock()
        finally:
            with self._lock:
                self._building = False
                self._pending = False

    def _run_once(self) -> None:
        self.triggers += 1
        self._emitter.event("rebuild", {"count": self.triggers})
        try:
            self._rebuild()
        except (PaperxError, OSError) as exc:
            self.failures += 1
            logger.debug("rebuild %d failed", self.triggers, exc_info=exc)
            self._emitter.error(f"build error: {exc}", exc)


__all__ = ["DEFAULT_DEBOUNCE", "RebuildCoordinator"]
