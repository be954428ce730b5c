from __future__ import annotations

from pathlib import Path

import pytest

from exercise_runner.errors import ExerciseNotFoundError
from exercise_runner.exercises.models import Exercise, Mode
from exercise_runner.exercises.registry import ExerciseRegistry


def _exercise(name: str, path: str, mode: Mode = Mode.COMPILE) -> Exercise:
    return Exercise(name=name, path=Path(path), mode=mode, hint=f"hint for {name}")


@pytest.fixture
def registry() -> ExerciseRegistry:
    return ExerciseRegistry(
        [
            _exercise("variables1", "exercises/variables/variables1.rs"),
            _exercise("functions1", "exercises/functions/functions1.rs"),
            _exercise("variables2", "exercises/variables/variables2.rs"),
            _exercise("tests1", "exercises/tests/tests1.rs", Mode.TEST),
            _exercise("variables3", "./exercises/variables/variables3.rs"),
        ]
    )


def test_find_by_name_returns_exact_entry(registry: ExerciseRegistry):
    exercise = registry.find_by_name("functions1")

    assert exercise.name == "functions1"
    assert exercise.path == Path("exercises/functions/functions1.rs")
    assert exercise.hint == "hint for functions1"


def test_find_by_name_is_exact_match(registry: ExerciseRegistry):
    with pytest.raises(ExerciseNotFoundError, match="Exercise variables not found!"):
        registry.find_by_name("variables")


def test_find_by_folder_preserves_manifest_order(registry: ExerciseRegistry):
    names = [exercise.name for exercise in registry.find_by_folder("variables")]
    assert names == ["variables1", "variables2", "variables3"]


def test_find_by_folder_matches_second_segment_only(registry: ExerciseRegistry):
    with pytest.raises(ExerciseNotFoundError):
        registry.find_by_folder("exercises")
    with pytest.raises(ExerciseNotFoundError):
        registry.find_by_folder("variables1.rs")


def test_find_by_folder_absent(registry: ExerciseRegistry):
    with pytest.raises(ExerciseNotFoundError, match="No exercises found in folder strings"):
        registry.find_by_folder("strings")


def test_iteration_follows_manifest_order(registry: ExerciseRegistry):
    assert [exercise.name for exercise in registry] == [
        "variables1",
        "functions1",
        "variables2",
        "tests1",
        "variables3",
    ]
    assert len(registry) == 5


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        ExerciseRegistry(
            [
                _exercise("a", "exercises/x/a.rs"),
                _exercise("a", "exercises/y/a.rs"),
            ]
        )


def test_exercise_folder_for_short_paths():
    assert _exercise("a", "exercises/a.rs").folder is None
    assert _exercise("a", "exercises/x/a.rs").folder == "x"
