import os
import re
from collections.abc import Callable
from pathlib import Path

import pytest

from testrun.config import RunConfig

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")
ScriptFactory = Callable[..., Path]


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


def write_script(path: Path, body: str, executable: bool = True) -> Path:
    """Write a /bin/sh script at `path` (creating parents)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(0o755 if executable else 0o644)
    return path


@pytest.fixture
def make_script(tmp_path: Path) -> ScriptFactory:
    """Factory for shell-script test files under tmp_path/tests."""

    def _make(name: str, body: str = "exit 0", executable: bool = True) -> Path:
        return write_script(tmp_path / "tests" / name, body, executable=executable)

    return _make


@pytest.fixture
def tests_dir(tmp_path: Path) -> Path:
    path = tmp_path / "tests"
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Isolated root for workspace directories."""
    root = tmp_path / "tmp"
    root.mkdir()
    return root


@pytest.fixture
def run_config(temp_root: Path) -> Callable[..., RunConfig]:
    def _config(**kwargs) -> RunConfig:
        kwargs.setdefault("temp_root", temp_root)
        return RunConfig(**kwargs)

    return _config


@pytest.fixture
def is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0
