"""Sequential compile, run, report and cleanup orchestration."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from exercise_runner.build.compiler import CompilerInvoker
from exercise_runner.build.naming import ArtifactNamer
from exercise_runner.build.results import ExecutionOutput, Outcome, RunResult
from exercise_runner.build.runner import ArtifactRunner
from exercise_runner.config import AppSettings
from exercise_runner.errors import CompileFailure
from exercise_runner.exercises.models import Exercise
from exercise_runner.exercises.registry import ExerciseRegistry
from exercise_runner.reporting import Reporter
from exercise_runner.utils.paths import remove_file_quietly

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BatchRunResult:
    """Ordered per-exercise outcomes of one invocation."""

    results: tuple[RunResult, ...]
    duration_sec: float

    @property
    def total(self) -> int:
        return len(self.results)

    def count(self, outcome: Outcome) -> int:
        return sum(1 for result in self.results if result.outcome is outcome)

    @property
    def all_succeeded(self) -> bool:
        return all(result.succeeded for result in self.results)

    def exit_code(self, fail_on_error: bool) -> int:
        """Process exit status: 0 unless `fail_on_error` and something failed."""

        if fail_on_error and not self.all_succeeded:
            return 1
        return 0


class ExercisePipeline:
    """Drives exercises through compile, run, report and artifact cleanup."""

    def __init__(
        self,
        registry: ExerciseRegistry,
        *,
        namer: ArtifactNamer,
        compiler: CompilerInvoker,
        runner: ArtifactRunner,
        reporter: Reporter,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry
        self._namer = namer
        self._compiler = compiler
        self._runner = runner
        self._reporter = reporter
        self._logger = logger or LOGGER

    def process(self, exercise: Exercise) -> RunResult:
        """Run one exercise end to end; its artifact is gone when this returns."""

        artifact_path = self._namer.artifact_path()
        try:
            result = self._compile_and_run(exercise, artifact_path)
            self._reporter.report(result)
            return result
        finally:
            removed = remove_file_quietly(artifact_path, logger=self._logger)
            self._logger.debug("pipeline.cleanup exercise=%s path=%s removed=%s", exercise.name, artifact_path, removed)

    def _compile_and_run(self, exercise: Exercise, artifact_path: Path) -> RunResult:
        source = self._namer.directory / exercise.path
        if not source.is_file():
            self._logger.warning("pipeline.source_missing exercise=%s path=%s", exercise.name, source)
            return RunResult.compile_failed(
                exercise,
                ExecutionOutput(stdout="", stderr=f"Source file {exercise.path} does not exist.\n", returncode=1),
            )

        try:
            artifact = self._compiler.compile(exercise, artifact_path)
        except CompileFailure as exc:
            return RunResult.compile_failed(exercise, exc.output)

        if artifact.path is None:
            # Lint-only: a clean lint is the whole exercise.
            return RunResult.run_succeeded(exercise, artifact.compile_output)

        output = self._runner.run(artifact)
        if output.succeeded:
            return RunResult.run_succeeded(exercise, output)
        return RunResult.run_failed(exercise, output)

    def run_many(self, exercises: Iterable[Exercise]) -> BatchRunResult:
        """Process exercises in order; no failure stops the batch."""

        started_mono = time.monotonic()
        results: list[RunResult] = []
        for exercise in exercises:
            result = self.process(exercise)
            results.append(result)
            self._logger.info("pipeline.exercise_done exercise=%s outcome=%s", exercise.name, result.outcome.value)

        batch = BatchRunResult(results=tuple(results), duration_sec=time.monotonic() - started_mono)
        self._logger.info(
            "pipeline.batch_done total=%s succeeded=%s compile_failed=%s run_failed=%s elapsed_sec=%.2f",
            batch.total,
            batch.count(Outcome.RUN_SUCCEEDED),
            batch.count(Outcome.COMPILE_FAILED),
            batch.count(Outcome.RUN_FAILED),
            batch.duration_sec,
        )
        return batch

    def run_exercise(self, name: str) -> BatchRunResult:
        """Single exercise by name; lookup failure raises before anything compiles."""

        exercise = self.registry.find_by_name(name)
        return self.run_many([exercise])

    def run_folder(self, folder_name: str) -> BatchRunResult:
        exercises = self.registry.find_by_folder(folder_name)
        batch = self.run_many(exercises)
        self._reporter.summary(batch.results)
        return batch

    def run_all(self) -> BatchRunResult:
        batch = self.run_many(self.registry)
        self._reporter.summary(batch.results)
        return batch


def build_pipeline(
    settings: AppSettings,
    reporter: Reporter,
    *,
    registry: ExerciseRegistry | None = None,
    logger: logging.Logger | None = None,
) -> ExercisePipeline:
    """Wire a pipeline from settings; loads the manifest unless `registry` is given."""

    effective_logger = logger or LOGGER
    work_dir = settings.paths.work_dir
    toolchain = settings.toolchain
    return ExercisePipeline(
        registry or ExerciseRegistry.from_manifest(settings.paths.manifest_file, logger=effective_logger),
        namer=ArtifactNamer(directory=work_dir, prefix=settings.artifacts.prefix),
        compiler=CompilerInvoker(
            toolchain.rustc,
            toolchain.clippy,
            color=toolchain.color,
            clippy_args=toolchain.clippy_args,
            cwd=work_dir,
            logger=effective_logger,
        ),
        runner=ArtifactRunner(test_run_args=toolchain.test_run_args, cwd=work_dir, logger=effective_logger),
        reporter=reporter,
        logger=effective_logger,
    )
