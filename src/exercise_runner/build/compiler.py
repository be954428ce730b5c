"""Mode-specific compiler invocation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from exercise_runner.build.process import run_captured
from exercise_runner.build.results import CompiledArtifact
from exercise_runner.errors import CompileFailure
from exercise_runner.exercises.models import Exercise, Mode
from exercise_runner.utils.paths import remove_file_quietly

LOGGER = logging.getLogger(__name__)

DEFAULT_RUSTC: tuple[str, ...] = ("rustc",)
DEFAULT_CLIPPY: tuple[str, ...] = ("clippy-driver",)
DEFAULT_CLIPPY_ARGS: tuple[str, ...] = ("-D", "warnings")


class CompilerInvoker:
    """Builds the compiler command line for an exercise's mode and runs it."""

    def __init__(
        self,
        rustc: Sequence[str] = DEFAULT_RUSTC,
        clippy: Sequence[str] = DEFAULT_CLIPPY,
        *,
        color: str = "always",
        clippy_args: Sequence[str] = DEFAULT_CLIPPY_ARGS,
        cwd: Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if not rustc or not clippy:
            raise ValueError("compiler commands must not be empty")
        self._rustc = tuple(rustc)
        self._clippy = tuple(clippy)
        self._color = color
        self._clippy_args = tuple(clippy_args)
        self._cwd = cwd
        self._logger = logger or LOGGER

    def command_for(self, exercise: Exercise, artifact_path: Path) -> list[str]:
        """Return the full argv used to compile (or lint) `exercise`."""

        source = str(exercise.path)
        color = ["--color", self._color]
        if exercise.mode is Mode.COMPILE:
            return [*self._rustc, source, "-o", str(artifact_path), *color]
        if exercise.mode is Mode.TEST:
            return [*self._rustc, "--test", source, "-o", str(artifact_path), *color]
        # Lint metadata goes to the allocated path so cleanup can find it.
        return [*self._clippy, source, *color, *self._clippy_args, f"--emit=metadata={artifact_path}"]

    def compile(self, exercise: Exercise, artifact_path: Path) -> CompiledArtifact:
        """Compile `exercise` to `artifact_path`.

        Raises `CompileFailure` on a nonzero exit, after removing any partial
        artifact. On success the artifact file belongs to the caller. Lint-only
        exercises return an artifact with no path.
        """

        command = self.command_for(exercise, artifact_path)
        self._logger.info("compile.start exercise=%s mode=%s", exercise.name, exercise.mode.value)
        output = run_captured(command, cwd=self._cwd, logger=self._logger)
        if not output.succeeded:
            remove_file_quietly(artifact_path, logger=self._logger)
            self._logger.info(
                "compile.failed exercise=%s returncode=%s",
                exercise.name,
                output.returncode,
            )
            raise CompileFailure(exercise.name, output)

        self._logger.info("compile.ok exercise=%s", exercise.name)
        return CompiledArtifact(
            exercise=exercise,
            path=artifact_path if exercise.mode.produces_binary else None,
            compile_output=output,
        )
