# src/testrun/resolver.py

"""
Expands user-supplied paths into an ordered list of runnable test files.
"""

import os
from collections.abc import Iterable, Iterator
from enum import Enum, auto

import structlog
from attrs import define, field

from testrun.config import Anomaly
from testrun.exceptions import MissingTestError, NoTestsError, NotExecutableError
from testrun.policy import PolicyEngine
from testrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("resolver")


class CandidateKind(Enum):
    """Classification of a path found during resolution."""

    REGULAR_EXECUTABLE = auto()
    DIRECTORY = auto()
    MISSING = auto()
    NOT_EXECUTABLE = auto()


@define(frozen=True, slots=True)
class TestCandidate:
    """A path plus its classification."""

    __test__ = False

    path: str = field()
    kind: CandidateKind = field()

    @property
    def runnable(self) -> bool:
        return self.kind is CandidateKind.REGULAR_EXECUTABLE


def classify(path: str) -> TestCandidate:
    """Classify a top-level path the way the user handed it to us."""
    if not os.path.exists(path):
        return TestCandidate(path, CandidateKind.MISSING)
    if not os.access(path, os.X_OK):
        return TestCandidate(path, CandidateKind.NOT_EXECUTABLE)
    if os.path.isdir(path):
        return TestCandidate(path, CandidateKind.DIRECTORY)
    return TestCandidate(path, CandidateKind.REGULAR_EXECUTABLE)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def walk_directory(directory: str, recursive: bool = False, include_hidden: bool = False) -> Iterator[str]:
    """
    Yield entries of `directory` in filesystem enumeration order.

    With `recursive`, descends depth-first into each subdirectory as it is
    encountered. Hidden entries are skipped (and hidden directories not
    descended into) unless `include_hidden`. Symlinked directories are
    listed but not descended into.
    """
    try:
        with os.scandir(directory) as entries:
            children = list(entries)
    except OSError as e:
        log.warning("Unable to list directory", directory=directory, error=str(e), emoji_key="path")
        return

    for entry in children:
        if not include_hidden and is_hidden(entry.name):
            continue
        child = os.path.join(directory, entry.name)
        yield child
        if recursive and entry.is_dir(follow_symlinks=False):
            yield from walk_directory(child, recursive=True, include_hidden=include_hidden)


def is_executable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


class PathResolver:
    """
    Turns top-level paths into TestCandidates, consulting the policy engine
    at each anomaly.
    """

    def __init__(self, policy: PolicyEngine):
        self.policy = policy
        self.config = policy.config

    def expand(self, directory: str) -> Iterator[TestCandidate]:
        """Executable regular files inside `directory`; everything else is skipped silently."""
        for child in walk_directory(
            directory,
            recursive=self.config.recursive,
            include_hidden=self.config.include_hidden,
        ):
            if is_executable_file(child):
                yield TestCandidate(child, CandidateKind.REGULAR_EXECUTABLE)

    def iter_candidates(self, paths: Iterable[str | os.PathLike[str]]) -> Iterator[TestCandidate]:
        for raw_path in paths:
            candidate = classify(os.fspath(raw_path))

            if candidate.kind is CandidateKind.REGULAR_EXECUTABLE:
                yield candidate
            elif candidate.kind is CandidateKind.DIRECTORY:
                yield from self.expand(candidate.path)
            elif candidate.kind is CandidateKind.MISSING:
                if self.policy.should_halt_on(Anomaly.MISSING_TEST):
                    raise MissingTestError(candidate.path)
                log.info("Ignoring missing test path", path=candidate.path, emoji_key="path")
            else:
                if self.policy.should_halt_on(Anomaly.NON_EXEC):
                    raise NotExecutableError(candidate.path)
                log.info("Ignoring non-executable test path", path=candidate.path, emoji_key="path")

    def resolve(self, paths: Iterable[str | os.PathLike[str]]) -> list[TestCandidate]:
        """
        Resolve `paths` into the ordered candidate list.

        Raises:
            MissingTestError: a path does not exist and missing_test halts.
            NotExecutableError: a path is not executable and non_exec halts.
            NoTestsError: nothing to run and no_tests halts.
        """
        candidates = list(self.iter_candidates(paths))
        if not candidates and self.policy.should_halt_on(Anomaly.NO_TESTS):
            raise NoTestsError()
        log.debug("Resolved test candidates", count=len(candidates), emoji_key="path")
        return candidates


# 🔼⚙️
