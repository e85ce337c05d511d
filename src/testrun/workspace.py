# src/testrun/workspace.py

"""
Private scratch directory used to buffer each test's output streams and,
optionally, a forked copy of the run's stdin.
"""

import os
import shutil
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import FrameType
from typing import BinaryIO

import structlog
from attrs import define, field

from testrun.exceptions import WorkspaceError
from testrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("workspace")

WORKSPACE_PREFIX = "testrun__"
# Signals that would otherwise terminate the process without unwinding.
RELEASE_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


@define(slots=True)
class Workspace:
    """
    Handle on the scratch directory.

    Holds at most three files: `stdin`, `stdout` and `stderr`. The output
    files are truncated for every test, never accumulated.
    """

    path: Path = field()
    _released: bool = field(default=False, init=False, repr=False)

    @property
    def stdin_path(self) -> Path:
        return self.path / "stdin"

    @property
    def stdout_path(self) -> Path:
        return self.path / "stdout"

    @property
    def stderr_path(self) -> Path:
        return self.path / "stderr"

    @property
    def released(self) -> bool:
        return self._released

    def fork_stdin(self, source: BinaryIO) -> int:
        """Buffer `source` to completion; returns the number of bytes stored."""
        try:
            with self.stdin_path.open("wb") as buffer:
                shutil.copyfileobj(source, buffer)
                size = buffer.tell()
        except OSError as e:
            raise WorkspaceError("failed to buffer stdin", path=str(self.stdin_path), details=e) from e
        log.debug("Buffered stdin for forking", size=size, emoji_key="workspace")
        return size

    def release(self) -> None:
        """Remove the directory and everything in it. Safe to call twice."""
        if self._released:
            return
        self._released = True
        shutil.rmtree(self.path, ignore_errors=True)
        log.debug("Workspace released", path=str(self.path), emoji_key="workspace")


def create_workspace(root: Path) -> Workspace:
    """
    Create an owner-only directory under `root`, keyed by process id.

    A stale directory left behind by an earlier process with the same id is
    removed first.
    """
    root = Path(root)
    if not root.is_dir():
        raise WorkspaceError(f"temp directory doesnt exist: {root}", path=str(root))

    path = root / f"{WORKSPACE_PREFIX}{os.getpid()}"
    if path.exists():
        log.warning("Removing stale workspace", path=str(path), emoji_key="workspace")
        shutil.rmtree(path, ignore_errors=True)

    old_umask = os.umask(0o077)
    try:
        path.mkdir(mode=0o700)
    except OSError as e:
        raise WorkspaceError("failed to create workspace directory", path=str(path), details=e) from e
    finally:
        os.umask(old_umask)

    log.debug("Workspace created", path=str(path), emoji_key="workspace")
    return Workspace(path=path)


def _raise_system_exit(signum: int, frame: FrameType | None) -> None:
    signame = signal.Signals(signum).name
    log.warning("Received termination signal", signal=signame, signal_num=signum)
    raise SystemExit(128 + signum)


@contextmanager
def acquire_workspace(root: Path) -> Iterator[Workspace]:
    """
    Scoped acquisition: the workspace is released on every exit path,
    including propagated errors and SIGTERM/SIGHUP.
    """
    workspace = create_workspace(root)
    previous_handlers: dict[int, object] = {}
    try:
        for sig in RELEASE_SIGNALS:
            try:
                previous_handlers[sig] = signal.signal(sig, _raise_system_exit)
            except ValueError:
                # Not on the main thread; rely on the finally block alone.
                break
        yield workspace
    finally:
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        workspace.release()


# 🔼⚙️
