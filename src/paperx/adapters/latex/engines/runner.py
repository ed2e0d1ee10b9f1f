"""Runtime helpers for invoking LaTeX engines as subprocesses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import io
import logging
import os
from pathlib import Path
import subprocess

from rich.console import Console


logger = logging.getLogger(__name__)

# Exit status reported when the executable cannot be spawned at all.
SPAWN_FAILURE_STATUS = 127


def run_engine_command(
    argv: Sequence[str],
    *,
    workdir: Path,
    env: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> int:
    """Execute an engine command to completion, streaming plain output."""
    console = console or Console(file=io.StringIO())

    def _safe_console_print(text: str) -> None:
        try:
            console.print(text, markup=False, highlight=False)
        except UnicodeEncodeError:
            stream = getattr(console, "file", None)
            if stream is None:
                return
            encoding = getattr(stream, "encoding", None) or "utf-8"
            sanitized = text.encode(encoding, errors="replace").decode(encoding, errors="replace")
            stream.write(f"{sanitized}\n")
            stream.flush()

    logger.debug("running %s in %s", " ".join(argv), workdir)
    try:
        with subprocess.Popen(
            list(argv),
            cwd=str(workdir),
            env=dict(env) if env is not None else os.environ.copy(),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
            encoding="utf-8",
            errors="replace",
        ) as process:
            assert process.stdout is not None
            for line in process.stdout:
                _safe_console_print(line.rstrip())
            returncode = process.wait()
    except OSError as exc:
        _safe_console_print(str(exc))
        return SPAWN_FAILURE_STATUS

    return returncode


__all__ = ["SPAWN_FAILURE_STATUS", "run_engine_command"]
