"""Path and filesystem helper functions."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def remove_file_quietly(path: Path, logger: logging.Logger | None = None) -> bool:
    """Delete `path` if possible; return whether a file was removed.

    Missing or undeletable files are not errors.
    """

    effective_logger = logger or LOGGER
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        effective_logger.debug("paths.remove_failed path=%s error=%s", path, exc)
        return False
    return True


def resolve_against(path: Path, root: Path) -> Path:
    """Return `path` unchanged if absolute, otherwise resolved under `root`."""

    return path if path.is_absolute() else (root / path).resolve()
