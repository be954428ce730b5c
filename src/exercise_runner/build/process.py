"""Blocking subprocess execution with captured text output."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from exercise_runner.build.results import ExecutionOutput
from exercise_runner.errors import ToolchainError

LOGGER = logging.getLogger(__name__)


def run_captured(
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    logger: logging.Logger | None = None,
) -> ExecutionOutput:
    """Run `command` to completion and capture stdout/stderr as text.

    There is no timeout: a hung child blocks the caller until it exits.
    Failing to launch the program at all raises `ToolchainError`.
    """

    effective_logger = logger or LOGGER
    effective_logger.debug("process.launch command=%s cwd=%s", list(command), cwd)
    try:
        process = subprocess.run(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ToolchainError(f"Failed to launch {command[0]!r}: {exc}") from exc
    effective_logger.debug("process.exit command=%s returncode=%s", command[0], process.returncode)
    return ExecutionOutput.from_completed(process)
