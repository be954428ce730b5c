"""Typer CLI entrypoint for exercise_runner."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from exercise_runner.config import AppSettings, load_settings
from exercise_runner.errors import ExerciseNotFoundError, ManifestError, ToolchainError
from exercise_runner.exercises.registry import ExerciseRegistry
from exercise_runner.logging_utils import configure_logging
from exercise_runner.pipeline import BatchRunResult, build_pipeline
from exercise_runner.reporting import Reporter, build_reporter

app = typer.Typer(
    add_completion=False,
    help="Compile, run and check tutorial exercises listed in info.toml.",
    invoke_without_command=True,
)

USAGE_HINT = (
    "No command given. Run every exercise with `exercise-runner --all`, one exercise with "
    "`exercise-runner run NAME`, or one folder with `exercise-runner run-dir FOLDER`."
)

CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config-file",
    help="Optional settings YAML path.",
    exists=False,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log pipeline progress to stderr.")
FAIL_ON_ERROR_OPTION = typer.Option(
    False,
    "--fail-on-error",
    help="Exit with status 1 if any exercise fails to compile or run.",
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    verbose: bool = False,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        level = logging.INFO if verbose else settings.logging.level
        logger = configure_logging(settings.logging.file, level=level)
    else:
        logger = logging.getLogger("exercise_runner")
    return settings, logger


def _fatal(exc: Exception) -> typer.Exit:
    typer.echo(str(exc), err=True)
    return typer.Exit(code=1)


def _load_registry(settings: AppSettings, logger: logging.Logger) -> ExerciseRegistry:
    try:
        return ExerciseRegistry.from_manifest(settings.paths.manifest_file, logger=logger)
    except ManifestError as exc:
        raise _fatal(exc) from exc


def _reporter_for(settings: AppSettings) -> Reporter:
    return build_reporter(settings.reporter.use_decorations)


def _finish(batch: BatchRunResult, settings: AppSettings, fail_on_error: bool) -> None:
    code = batch.exit_code(fail_on_error or settings.run_policy.fail_on_error)
    if code != 0:
        raise typer.Exit(code=code)


@app.callback()
def main_callback(
    ctx: typer.Context,
    run_all: bool = typer.Option(False, "--all", help="Run every exercise in manifest order."),
    fail_on_error: bool = FAIL_ON_ERROR_OPTION,
    verbose: bool = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Run exercises from the manifest."""

    if ctx.invoked_subcommand is not None:
        if run_all:
            raise typer.BadParameter("--all cannot be combined with a subcommand.")
        return

    if not run_all:
        typer.echo(USAGE_HINT)
        return

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, verbose=verbose)
    registry = _load_registry(settings, logger)
    pipeline = build_pipeline(settings, _reporter_for(settings), registry=registry, logger=logger)
    try:
        batch = pipeline.run_all()
    except ToolchainError as exc:
        raise _fatal(exc) from exc
    _finish(batch, settings, fail_on_error)


@app.command("run")
def run_cmd(
    name: str = typer.Argument(..., help="Exercise name as listed in the manifest."),
    fail_on_error: bool = FAIL_ON_ERROR_OPTION,
    verbose: bool = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Compile and run a single exercise."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, verbose=verbose)
    registry = _load_registry(settings, logger)
    pipeline = build_pipeline(settings, _reporter_for(settings), registry=registry, logger=logger)
    try:
        batch = pipeline.run_exercise(name)
    except (ExerciseNotFoundError, ToolchainError) as exc:
        raise _fatal(exc) from exc
    _finish(batch, settings, fail_on_error)


@app.command("run-dir")
def run_dir_cmd(
    folder: str = typer.Argument(..., help="Folder name, the second segment of exercise paths."),
    fail_on_error: bool = FAIL_ON_ERROR_OPTION,
    verbose: bool = VERBOSE_OPTION,
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Compile and run every exercise in one folder, in manifest order."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, verbose=verbose)
    registry = _load_registry(settings, logger)
    pipeline = build_pipeline(settings, _reporter_for(settings), registry=registry, logger=logger)
    try:
        batch = pipeline.run_folder(folder)
    except (ExerciseNotFoundError, ToolchainError) as exc:
        raise _fatal(exc) from exc
    _finish(batch, settings, fail_on_error)


@app.command("list")
def list_cmd(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """List every exercise with its mode and source path."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    registry = _load_registry(settings, logger)
    _reporter_for(settings).listing(registry.exercises)


@app.command("hint")
def hint_cmd(
    name: str = typer.Argument(..., help="Exercise name as listed in the manifest."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Print the hint for one exercise."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    registry = _load_registry(settings, logger)
    try:
        exercise = registry.find_by_name(name)
    except ExerciseNotFoundError as exc:
        raise _fatal(exc) from exc
    _reporter_for(settings).hint(exercise)


@app.command("show-config")
def show_config(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
