"""Exception hierarchy shared by the runner packages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exercise_runner.build.results import ExecutionOutput


class ExerciseRunnerError(Exception):
    """Base class for all runner exceptions."""


class ManifestError(ExerciseRunnerError):
    """Raised when the exercise manifest is missing, unreadable or malformed."""


class ExerciseNotFoundError(ExerciseRunnerError, LookupError):
    """Raised when a requested exercise name or folder has no matching exercises."""


class ToolchainError(ExerciseRunnerError):
    """Raised when the compiler or a compiled artifact cannot be launched at all."""


class CompileFailure(ExerciseRunnerError):
    """Raised when the compiler exits nonzero; carries the captured diagnostics."""

    def __init__(self, exercise_name: str, output: ExecutionOutput) -> None:
        super().__init__(f"Compilation of {exercise_name} failed with exit status {output.returncode}")
        self.exercise_name = exercise_name
        self.output = output
