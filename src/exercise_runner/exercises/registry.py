"""In-memory, manifest-ordered collection of exercises."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from exercise_runner.errors import ExerciseNotFoundError
from exercise_runner.exercises.manifest import load_manifest
from exercise_runner.exercises.models import Exercise

LOGGER = logging.getLogger(__name__)


class ExerciseRegistry:
    """Ordered exercise catalog with lookup by name and by containing folder."""

    def __init__(self, exercises: Iterable[Exercise]) -> None:
        self._exercises: tuple[Exercise, ...] = tuple(exercises)
        names = [exercise.name for exercise in self._exercises]
        if len(names) != len(set(names)):
            raise ValueError("exercise names must be unique within a registry")

    @classmethod
    def from_manifest(cls, manifest_path: Path, logger: logging.Logger | None = None) -> "ExerciseRegistry":
        return cls(load_manifest(manifest_path, logger=logger))

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._exercises)

    def __len__(self) -> int:
        return len(self._exercises)

    @property
    def exercises(self) -> Sequence[Exercise]:
        return self._exercises

    def find_by_name(self, name: str) -> Exercise:
        """Return the exercise whose name matches exactly."""

        for exercise in self._exercises:
            if exercise.name == name:
                return exercise
        LOGGER.debug("registry.name_not_found name=%s", name)
        raise ExerciseNotFoundError(f"Exercise {name} not found!")

    def find_by_folder(self, folder_name: str) -> list[Exercise]:
        """Return the exercises under `<root>/<folder_name>/`, in manifest order."""

        matches = [exercise for exercise in self._exercises if exercise.folder == folder_name]
        if not matches:
            LOGGER.debug("registry.folder_not_found folder=%s", folder_name)
            raise ExerciseNotFoundError(f"No exercises found in folder {folder_name}!")
        return matches
