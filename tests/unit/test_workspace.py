# tests/unit/test_workspace.py

"""Tests for workspace creation, permissions and guaranteed release."""

import io
import os
import signal
import stat
from pathlib import Path

import pytest

from testrun.exceptions import WorkspaceError
from testrun.workspace import WORKSPACE_PREFIX, acquire_workspace, create_workspace


def test_create_is_owner_only(temp_root: Path) -> None:
    workspace = create_workspace(temp_root)
    try:
        assert workspace.path == temp_root / f"{WORKSPACE_PREFIX}{os.getpid()}"
        assert workspace.path.is_dir()
        assert stat.S_IMODE(workspace.path.stat().st_mode) == 0o700
    finally:
        workspace.release()


def test_accessors_live_inside_workspace(temp_root: Path) -> None:
    with acquire_workspace(temp_root) as workspace:
        assert workspace.stdin_path.parent == workspace.path
        assert workspace.stdout_path.name == "stdout"
        assert workspace.stderr_path.name == "stderr"


def test_missing_root_fails(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceError, match="temp directory doesnt exist") as exc_info:
        create_workspace(tmp_path / "nope")
    assert exc_info.value.exit_code == 1


def test_stale_directory_is_replaced(temp_root: Path) -> None:
    stale = temp_root / f"{WORKSPACE_PREFIX}{os.getpid()}"
    stale.mkdir()
    (stale / "stdout").write_bytes(b"old")

    with acquire_workspace(temp_root) as workspace:
        assert not workspace.stdout_path.exists()


def test_released_after_normal_exit(temp_root: Path) -> None:
    with acquire_workspace(temp_root) as workspace:
        workspace.stdout_path.write_bytes(b"data")
        path = workspace.path

    assert not path.exists()
    assert workspace.released


def test_released_after_error(temp_root: Path) -> None:
    with pytest.raises(RuntimeError):
        with acquire_workspace(temp_root) as workspace:
            path = workspace.path
            raise RuntimeError("boom")

    assert not path.exists()


def test_released_on_sigterm(temp_root: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        with acquire_workspace(temp_root) as workspace:
            path = workspace.path
            os.kill(os.getpid(), signal.SIGTERM)

    assert exc_info.value.code == 128 + signal.SIGTERM
    assert not path.exists()


def test_signal_handlers_restored(temp_root: Path) -> None:
    before = signal.getsignal(signal.SIGTERM)
    with acquire_workspace(temp_root):
        assert signal.getsignal(signal.SIGTERM) is not before
    assert signal.getsignal(signal.SIGTERM) == before


def test_release_is_idempotent(temp_root: Path) -> None:
    workspace = create_workspace(temp_root)
    workspace.release()
    workspace.release()
    assert not workspace.path.exists()


def test_fork_stdin_keeps_nul_bytes(temp_root: Path) -> None:
    payload = b"first\x00second\nthird"
    with acquire_workspace(temp_root) as workspace:
        size = workspace.fork_stdin(io.BytesIO(payload))

        assert size == len(payload)
        assert workspace.stdin_path.read_bytes() == payload
