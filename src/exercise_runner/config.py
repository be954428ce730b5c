"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from exercise_runner.utils.paths import resolve_against

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "EXERCISE_RUNNER_SETTINGS_FILE"
NO_EMOJI_ENV = "NO_EMOJI"


class ProjectConfig(BaseModel):
    """Project metadata settings."""

    name: str = "exercise_runner"
    env: str = "dev"


class PathsConfig(BaseModel):
    """Manifest location and the directory artifacts are built in."""

    manifest_file: Path = Path("info.toml")
    work_dir: Path = Path(".")

    def resolved(self, base_dir: Path) -> "PathsConfig":
        """Return a copy with relative paths resolved against `base_dir`."""

        updates: dict[str, Path] = {}
        for field_name in type(self).model_fields:
            updates[field_name] = resolve_against(getattr(self, field_name), base_dir)
        return self.model_copy(update=updates)


class ToolchainConfig(BaseModel):
    """External compiler commands and their fixed arguments."""

    rustc: list[str] = Field(default_factory=lambda: ["rustc"], min_length=1)
    clippy: list[str] = Field(default_factory=lambda: ["clippy-driver"], min_length=1)
    color: Literal["always", "auto", "never"] = "always"
    clippy_args: list[str] = Field(default_factory=lambda: ["-D", "warnings"])
    test_run_args: list[str] = Field(default_factory=lambda: ["--show-output"])


class ArtifactsConfig(BaseModel):
    """Temporary build artifact naming."""

    prefix: str = Field(default="temp", pattern=r"^[0-9A-Za-z]+$")


class ReporterConfig(BaseModel):
    """Terminal report rendering."""

    use_decorations: bool = True


class RunPolicyConfig(BaseModel):
    """Process-level outcome policy."""

    fail_on_error: bool = False


class LoggingConfig(BaseModel):
    """Diagnostic logging, separate from the user-facing report."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: Path | None = None


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    reporter: ReporterConfig = Field(default_factory=ReporterConfig)
    run_policy: RunPolicyConfig = Field(default_factory=RunPolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="EXERCISE_RUNNER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides.

    Relative `paths` entries are resolved against the current working
    directory, wherever the settings file itself lives. The bare presence of
    `NO_EMOJI` in the environment switches the reporter to plain-text markers,
    whatever its value.
    """

    settings_file = resolve_settings_file(config_file)
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    updates: dict[str, object] = {"paths": settings.paths.resolved(base_dir=Path.cwd().resolve())}
    if NO_EMOJI_ENV in os.environ:
        updates["reporter"] = settings.reporter.model_copy(update={"use_decorations": False})
    return settings.model_copy(update=updates)
