"""Terminal rendering of exercise outcomes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from rich.console import Console
from rich.text import Text

from exercise_runner.build.results import ExecutionOutput, Outcome, RunResult
from exercise_runner.exercises.models import Exercise


class Reporter(ABC):
    """Writes one status line per outcome followed by the captured output.

    Subclasses only decide which marker precedes a status line.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True, emoji=False)

    @abstractmethod
    def marker(self, outcome: Outcome) -> str: ...

    def _status(self, outcome: Outcome, message: str, style: str) -> None:
        line = Text()
        line.append(self.marker(outcome), style=style)
        line.append(" ")
        line.append(message, style=style)
        self.console.print(line)

    def _streams(self, output: ExecutionOutput, *, stderr_first: bool = False) -> None:
        streams = (output.stderr, output.stdout) if stderr_first else (output.stdout, output.stderr)
        for text in streams:
            if text:
                # Compiler diagnostics arrive with ANSI colors already applied.
                self.console.print(Text.from_ansi(text.rstrip("\n")))

    def report(self, result: RunResult) -> None:
        exercise = result.exercise
        if result.outcome is Outcome.COMPILE_FAILED:
            self._status(
                result.outcome,
                f"Compilation of {exercise.path} failed! Compiler error message:",
                "red",
            )
            self._streams(result.output, stderr_first=True)
        elif result.outcome is Outcome.RUN_FAILED:
            self._status(result.outcome, f"Ran {exercise.path} with errors", "yellow")
            self._streams(result.output)
        else:
            self._status(result.outcome, f"Successfully ran {exercise.path}!", "green")
            self._streams(result.output)

    def summary(self, results: Sequence[RunResult]) -> None:
        counts = {outcome: 0 for outcome in Outcome}
        for result in results:
            counts[result.outcome] += 1
        self.console.print(
            Text(
                f"{len(results)} exercises: "
                f"{counts[Outcome.RUN_SUCCEEDED]} succeeded, "
                f"{counts[Outcome.COMPILE_FAILED]} failed to compile, "
                f"{counts[Outcome.RUN_FAILED]} failed to run"
            )
        )

    def hint(self, exercise: Exercise) -> None:
        # Manifest text is printed as-is, without markup or :emoji: codes.
        self.console.print(Text(exercise.hint))

    def listing(self, exercises: Sequence[Exercise]) -> None:
        width = max((len(exercise.name) for exercise in exercises), default=0)
        for exercise in exercises:
            self.console.print(Text(f"{exercise.name:<{width}}  {exercise.mode.value:<7}  {exercise.path}"))


class DecoratedReporter(Reporter):
    """Emoji markers."""

    _MARKERS = {
        Outcome.COMPILE_FAILED: "⚠️ ",
        Outcome.RUN_FAILED: "⚠️ ",
        Outcome.RUN_SUCCEEDED: "✅",
    }

    def marker(self, outcome: Outcome) -> str:
        return self._MARKERS[outcome]


class PlainReporter(Reporter):
    """Plain-text markers for terminals without emoji support."""

    _MARKERS = {
        Outcome.COMPILE_FAILED: "!",
        Outcome.RUN_FAILED: "!",
        Outcome.RUN_SUCCEEDED: "✓",
    }

    def marker(self, outcome: Outcome) -> str:
        return self._MARKERS[outcome]


def build_reporter(use_decorations: bool, console: Console | None = None) -> Reporter:
    """Pick the rendering strategy for `use_decorations`."""

    if use_decorations:
        return DecoratedReporter(console)
    return PlainReporter(console)
