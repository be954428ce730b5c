"""Compile and run stages for a single exercise."""

from exercise_runner.build.compiler import CompilerInvoker
from exercise_runner.build.naming import ArtifactNamer, sanitize_token
from exercise_runner.build.process import run_captured
from exercise_runner.build.results import CompiledArtifact, ExecutionOutput, Outcome, RunResult
from exercise_runner.build.runner import ArtifactRunner

__all__ = [
    "ArtifactNamer",
    "ArtifactRunner",
    "CompiledArtifact",
    "CompilerInvoker",
    "ExecutionOutput",
    "Outcome",
    "RunResult",
    "run_captured",
    "sanitize_token",
]
