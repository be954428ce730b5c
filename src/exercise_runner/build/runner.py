"""Execute compiled exercise artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from exercise_runner.build.process import run_captured
from exercise_runner.build.results import CompiledArtifact, ExecutionOutput
from exercise_runner.exercises.models import Mode

LOGGER = logging.getLogger(__name__)

DEFAULT_TEST_RUN_ARGS: tuple[str, ...] = ("--show-output",)


class ArtifactRunner:
    """Runs a compiled artifact with its mode's runtime flags."""

    def __init__(
        self,
        *,
        test_run_args: Sequence[str] = DEFAULT_TEST_RUN_ARGS,
        cwd: Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._test_run_args = tuple(test_run_args)
        self._cwd = cwd
        self._logger = logger or LOGGER

    def command_for(self, artifact: CompiledArtifact) -> list[str]:
        if artifact.path is None:
            raise ValueError(f"exercise {artifact.exercise.name} has no runnable artifact")
        # A bare relative name would be looked up on PATH.
        executable = str(artifact.path.absolute())
        if artifact.exercise.mode is Mode.TEST:
            return [executable, *self._test_run_args]
        return [executable]

    def run(self, artifact: CompiledArtifact) -> ExecutionOutput:
        """Run `artifact` once; success or failure is read from `returncode`."""

        command = self.command_for(artifact)
        self._logger.info("run.start exercise=%s artifact=%s", artifact.exercise.name, artifact.path)
        output = run_captured(command, cwd=self._cwd, logger=self._logger)
        self._logger.info("run.finished exercise=%s returncode=%s", artifact.exercise.name, output.returncode)
        return output
