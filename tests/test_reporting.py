from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from exercise_runner.build.results import ExecutionOutput, RunResult
from exercise_runner.exercises.models import Exercise, Mode
from exercise_runner.reporting import DecoratedReporter, PlainReporter, build_reporter

EXERCISE = Exercise(name="intro1", path=Path("exercises/intro/intro1.rs"), mode=Mode.COMPILE, hint="Try `let`.")


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, highlight=False, soft_wrap=True), buffer


def test_build_reporter_picks_strategy():
    assert isinstance(build_reporter(True), DecoratedReporter)
    assert isinstance(build_reporter(False), PlainReporter)


def test_plain_markers():
    console, buffer = _console()
    reporter = PlainReporter(console)

    reporter.report(RunResult.run_succeeded(EXERCISE, ExecutionOutput("hi\n", "", 0)))
    reporter.report(RunResult.run_failed(EXERCISE, ExecutionOutput("", "panicked\n", 101)))

    lines = buffer.getvalue().splitlines()
    assert lines == [
        "✓ Successfully ran exercises/intro/intro1.rs!",
        "hi",
        "! Ran exercises/intro/intro1.rs with errors",
        "panicked",
    ]


def test_decorated_markers():
    console, buffer = _console()
    reporter = DecoratedReporter(console)

    reporter.report(RunResult.run_succeeded(EXERCISE, ExecutionOutput("", "", 0)))

    assert buffer.getvalue().startswith("✅ Successfully ran")
    assert "!" not in buffer.getvalue().split()[0]


def test_compile_failure_shows_diagnostics_verbatim():
    console, buffer = _console()
    reporter = PlainReporter(console)
    diagnostics = "\x1b[0m\x1b[1m\x1b[38;5;9merror[E0308]\x1b[0m: mismatched types [see --explain]\n"

    reporter.report(RunResult.compile_failed(EXERCISE, ExecutionOutput("", diagnostics, 1)))

    text = buffer.getvalue()
    assert "! Compilation of exercises/intro/intro1.rs failed! Compiler error message:" in text
    assert "error[E0308]: mismatched types [see --explain]" in text
    assert "\x1b" not in text


def test_summary_hint_and_listing():
    console, buffer = _console()
    reporter = PlainReporter(console)
    other = Exercise(name="tests10", path=Path("exercises/tests/tests10.rs"), mode=Mode.TEST, hint="")

    reporter.summary(
        [
            RunResult.run_succeeded(EXERCISE, ExecutionOutput("", "", 0)),
            RunResult.compile_failed(other, ExecutionOutput("", "", 1)),
        ]
    )
    reporter.hint(EXERCISE)
    reporter.listing([EXERCISE, other])

    lines = buffer.getvalue().splitlines()
    assert lines[0] == "2 exercises: 1 succeeded, 1 failed to compile, 0 failed to run"
    assert lines[1] == "Try `let`."
    assert lines[2].split() == ["intro1", "compile", "exercises/intro/intro1.rs"]
    assert lines[3].split() == ["tests10", "test", "exercises/tests/tests10.rs"]


def test_manifest_text_is_not_rewritten_by_the_console():
    buffer = io.StringIO()
    reporter = PlainReporter(Console(file=buffer, highlight=False, soft_wrap=True, emoji=True))
    crab = Exercise(name="crab:ok:", path=Path("exercises/intro/intro2.rs"), mode=Mode.COMPILE, hint="Use :crab: and [red]x[/red]")

    reporter.hint(crab)
    reporter.listing([crab])

    lines = buffer.getvalue().splitlines()
    assert lines[0] == "Use :crab: and [red]x[/red]"
    assert lines[1].split()[0] == "crab:ok:"