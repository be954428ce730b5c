from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

import pytest
import yaml

from exercise_runner.build.compiler import CompilerInvoker
from exercise_runner.build.naming import ArtifactNamer
from exercise_runner.build.runner import ArtifactRunner

FAKE_RUSTC = Path(__file__).resolve().parent / "fixtures" / "fake_rustc.py"

OK_SOURCE = "print('hello from the exercise')\n"
BROKEN_SOURCE = "COMPILE_ERROR\n"
FAILING_SOURCE = "import sys\nprint('about to fail')\nprint('went wrong', file=sys.stderr)\nsys.exit(3)\n"
ARGV_SOURCE = "import sys\nprint(' '.join(sys.argv[1:]))\n"


@dataclass
class ExerciseFixture:
    name: str
    path: str
    mode: str = "compile"
    source: str | None = OK_SOURCE
    hint: str = "No hints this time ;)"


@dataclass
class Workspace:
    root: Path
    exercises: list[ExerciseFixture] = field(default_factory=list)

    @property
    def compile_log(self) -> Path:
        return self.root / "compile.log"

    def compile_calls(self) -> list[str]:
        if not self.compile_log.exists():
            return []
        return self.compile_log.read_text(encoding="utf-8").splitlines()

    def temp_files(self) -> list[Path]:
        return sorted(self.root.glob("temp_*"))


def fake_command() -> list[str]:
    return [sys.executable, str(FAKE_RUSTC)]


def render_manifest(exercises: list[ExerciseFixture]) -> str:
    blocks = []
    for entry in exercises:
        blocks.append(
            "[[exercises]]\n"
            f'name = "{entry.name}"\n'
            f'path = "{entry.path}"\n'
            f'mode = "{entry.mode}"\n'
            f'hint = """\n{entry.hint}"""\n'
        )
    return "\n".join(blocks)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("NO_EMOJI", "EXERCISE_RUNNER_SETTINGS_FILE"):
        monkeypatch.delenv(name, raising=False)
    # CLI commands reconfigure the root logger; put pytest's handlers back afterwards.
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def make_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[list[ExerciseFixture]], Workspace]:
    """Lay out info.toml, exercise sources and settings in tmp_path and chdir into it."""

    def _make(exercises: list[ExerciseFixture], settings: dict | None = None) -> Workspace:
        for entry in exercises:
            if entry.source is None:
                continue
            source_path = tmp_path / entry.path
            source_path.parent.mkdir(parents=True, exist_ok=True)
            source_path.write_text(entry.source, encoding="utf-8")
        (tmp_path / "info.toml").write_text(render_manifest(exercises), encoding="utf-8")

        payload = {"toolchain": {"rustc": fake_command(), "clippy": fake_command()}}
        payload.update(settings or {})
        configs = tmp_path / "configs"
        configs.mkdir(exist_ok=True)
        (configs / "settings.yaml").write_text(yaml.safe_dump(payload), encoding="utf-8")

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FAKE_RUSTC_LOG", str(tmp_path / "compile.log"))
        return Workspace(root=tmp_path, exercises=list(exercises))

    return _make


@pytest.fixture
def compiler(tmp_path: Path) -> CompilerInvoker:
    return CompilerInvoker(fake_command(), fake_command(), cwd=tmp_path)


@pytest.fixture
def runner(tmp_path: Path) -> ArtifactRunner:
    return ArtifactRunner(cwd=tmp_path)


@pytest.fixture
def namer(tmp_path: Path) -> ArtifactNamer:
    return ArtifactNamer(directory=tmp_path)
