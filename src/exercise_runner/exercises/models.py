"""Exercise records and modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Mode(str, Enum):
    """How an exercise's source is treated."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"

    @classmethod
    def parse(cls, value: str) -> "Mode":
        """Parse a manifest mode string case-insensitively."""

        normalized = value.strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        allowed = ", ".join(mode.value for mode in cls)
        raise ValueError(f"mode must be one of: {allowed} (got {value!r})")

    @property
    def produces_binary(self) -> bool:
        return self is not Mode.CLIPPY


@dataclass(frozen=True, slots=True)
class Exercise:
    """One tutorial exercise loaded from the manifest."""

    name: str
    path: Path
    mode: Mode
    hint: str

    @property
    def folder(self) -> str | None:
        """Second path segment (`<root>/<folder>/<file>`), if the path has one."""

        parts = self.path.parts
        if len(parts) < 3:
            return None
        return parts[1]
