"""Load the TOML exercise manifest into ordered exercise records."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

import tomli
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from exercise_runner.errors import ManifestError
from exercise_runner.exercises.models import Exercise, Mode

LOGGER = logging.getLogger(__name__)

DEFAULT_MANIFEST_FILE = Path("info.toml")
MIN_PATH_SEGMENTS = 3


class ManifestEntry(BaseModel):
    """One `[[exercises]]` table of the manifest."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    path: str = Field(min_length=1)
    mode: Mode
    hint: str

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: object) -> Mode:
        if isinstance(value, Mode):
            return value
        if not isinstance(value, str):
            raise ValueError("mode must be a string")
        return Mode.parse(value)

    @field_validator("path")
    @classmethod
    def _check_path_layout(cls, value: str) -> str:
        parts = PurePosixPath(value).parts
        if PurePosixPath(value).is_absolute():
            raise ValueError(f"path must be relative to the working directory (got {value!r})")
        if len(parts) < MIN_PATH_SEGMENTS:
            raise ValueError(f"path must look like <root>/<folder>/<file> (got {value!r})")
        return value

    def to_exercise(self) -> Exercise:
        return Exercise(name=self.name, path=Path(self.path), mode=self.mode, hint=self.hint)


class ExerciseManifest(BaseModel):
    """Top-level manifest document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    exercises: list[ManifestEntry]

    @field_validator("exercises")
    @classmethod
    def _check_unique_names(cls, value: list[ManifestEntry]) -> list[ManifestEntry]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for entry in value:
            if entry.name in seen:
                duplicates.append(entry.name)
            seen.add(entry.name)
        if duplicates:
            raise ValueError(f"duplicate exercise names: {', '.join(sorted(set(duplicates)))}")
        return value


def parse_manifest(text: str, source: str = "<string>") -> list[Exercise]:
    """Parse manifest TOML text into exercises, preserving manifest order."""

    try:
        payload = tomli.loads(text)
    except tomli.TOMLDecodeError as exc:
        raise ManifestError(f"Manifest {source} is not valid TOML: {exc}") from exc
    try:
        manifest = ExerciseManifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(f"Manifest {source} is malformed:\n{exc}") from exc
    return [entry.to_exercise() for entry in manifest.exercises]


def load_manifest(path: Path = DEFAULT_MANIFEST_FILE, logger: logging.Logger | None = None) -> list[Exercise]:
    """Read and parse the manifest file; any failure is a `ManifestError`."""

    effective_logger = logger or LOGGER
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Unable to read manifest {path}: {exc}") from exc
    exercises = parse_manifest(text, source=str(path))
    effective_logger.info("manifest.loaded path=%s exercises=%s", path, len(exercises))
    return exercises
