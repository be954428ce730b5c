"""Value objects produced by compiling and running exercises."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from exercise_runner.exercises.models import Exercise


@dataclass(frozen=True, slots=True)
class ExecutionOutput:
    """Captured streams and exit status of one completed subprocess."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @classmethod
    def from_completed(cls, process: subprocess.CompletedProcess[str]) -> "ExecutionOutput":
        return cls(
            stdout=process.stdout or "",
            stderr=process.stderr or "",
            returncode=process.returncode,
        )


@dataclass(frozen=True, slots=True)
class CompiledArtifact:
    """A successful compile: the exercise, its binary path and the compiler output.

    `path` is None for lint-only compiles, which produce nothing to run.
    """

    exercise: Exercise
    path: Path | None
    compile_output: ExecutionOutput


class Outcome(str, Enum):
    COMPILE_FAILED = "compile_failed"
    RUN_SUCCEEDED = "run_succeeded"
    RUN_FAILED = "run_failed"


@dataclass(frozen=True, slots=True)
class RunResult:
    """Terminal outcome of one exercise's compile-then-run pipeline."""

    exercise: Exercise
    outcome: Outcome
    output: ExecutionOutput

    @classmethod
    def compile_failed(cls, exercise: Exercise, output: ExecutionOutput) -> "RunResult":
        return cls(exercise=exercise, outcome=Outcome.COMPILE_FAILED, output=output)

    @classmethod
    def run_succeeded(cls, exercise: Exercise, output: ExecutionOutput) -> "RunResult":
        return cls(exercise=exercise, outcome=Outcome.RUN_SUCCEEDED, output=output)

    @classmethod
    def run_failed(cls, exercise: Exercise, output: ExecutionOutput) -> "RunResult":
        return cls(exercise=exercise, outcome=Outcome.RUN_FAILED, output=output)

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.RUN_SUCCEEDED
