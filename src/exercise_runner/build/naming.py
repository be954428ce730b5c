"""Collision-resistant temporary artifact paths."""

from __future__ import annotations

import itertools
import os
import re
import threading
from pathlib import Path
from uuid import uuid4

DEFAULT_ARTIFACT_PREFIX = "temp"

_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]")


def sanitize_token(token: str) -> str:
    """Keep only ASCII alphanumeric characters of `token`."""

    return _NON_ALNUM.sub("", token)


class ArtifactNamer:
    """Hands out `<directory>/<prefix>_<pid>_<token>` paths.

    The token combines a per-namer identity with a lock-protected counter, so
    every call yields a fresh path: across processes (pid), across namers
    (identity) and across calls on any thread (counter).
    """

    def __init__(
        self,
        directory: Path = Path("."),
        prefix: str = DEFAULT_ARTIFACT_PREFIX,
        identity: str | None = None,
    ) -> None:
        cleaned_prefix = sanitize_token(prefix)
        if not cleaned_prefix:
            raise ValueError("artifact prefix must contain at least one alphanumeric character")
        self._directory = directory
        self._prefix = cleaned_prefix
        self._identity = sanitize_token(identity if identity is not None else uuid4().hex[:8])
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def prefix(self) -> str:
        return self._prefix

    def next_token(self) -> str:
        with self._lock:
            sequence = next(self._counter)
        return sanitize_token(f"{self._identity}{sequence}")

    def artifact_path(self, token: str | None = None) -> Path:
        """Return a path for one compile attempt; an explicit `token` is sanitized first."""

        chosen = sanitize_token(token) if token is not None else self.next_token()
        if not chosen:
            raise ValueError("artifact token must contain at least one alphanumeric character")
        return self._directory / f"{self._prefix}_{os.getpid()}_{chosen}"
