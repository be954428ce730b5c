"""Exercise catalog: records, manifest loading and lookup."""

from exercise_runner.exercises.manifest import (
    DEFAULT_MANIFEST_FILE,
    ExerciseManifest,
    ManifestEntry,
    load_manifest,
    parse_manifest,
)
from exercise_runner.exercises.models import Exercise, Mode
from exercise_runner.exercises.registry import ExerciseRegistry

__all__ = [
    "DEFAULT_MANIFEST_FILE",
    "Exercise",
    "ExerciseManifest",
    "ExerciseRegistry",
    "ManifestEntry",
    "Mode",
    "load_manifest",
    "parse_manifest",
]
