"""Shared utility helpers."""

from exercise_runner.utils.paths import remove_file_quietly, resolve_against

__all__ = [
    "remove_file_quietly",
    "resolve_against",
]
