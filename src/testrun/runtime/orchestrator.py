# src/testrun/runtime/orchestrator.py

"""
High-level coordinator for a test run.
Wires path resolution, the workspace, execution and reporting together.
"""

import os
from collections.abc import Callable, Iterable, Sequence
from typing import BinaryIO

import structlog
from rich.console import Console

from testrun.config import Anomaly, RunConfig
from testrun.exceptions import ConfigurationError, TestFailureError
from testrun.policy import PolicyEngine
from testrun.resolver import PathResolver, TestCandidate
from testrun.state import RunOutcome
from testrun.telemetry import StructLogger
from testrun.testing import SubprocessTestExecutor, TestExecutor
from testrun.workspace import Workspace, acquire_workspace

from .reporter import ResultReporter

log: StructLogger = structlog.get_logger("runtime.orchestrator")

ExecutorFactory = Callable[[Workspace, RunConfig], TestExecutor]


def default_executor_factory(workspace: Workspace, config: RunConfig) -> TestExecutor:
    return SubprocessTestExecutor(workspace, params=config.test_params, fork_stdin=config.fork_stdin)


class TestRunOrchestrator:
    """Instantiates and coordinates all components for one run."""

    __test__ = False

    def __init__(
        self,
        config: RunConfig,
        reporter: ResultReporter,
        stdin: BinaryIO | None = None,
        executor_factory: ExecutorFactory = default_executor_factory,
    ):
        if config.fork_stdin and stdin is None:
            raise ConfigurationError("--fork-stdin requires a readable standard input")
        self.config = config
        self.policy = reporter.policy
        self.reporter = reporter
        self.stdin = stdin
        self.executor_factory = executor_factory
        self.outcome = RunOutcome()

    @classmethod
    def create(
        cls,
        config: RunConfig,
        stdout: BinaryIO,
        stderr: BinaryIO,
        stdin: BinaryIO | None = None,
        console: Console | None = None,
        executor_factory: ExecutorFactory = default_executor_factory,
    ) -> "TestRunOrchestrator":
        reporter = ResultReporter(PolicyEngine(config), stdout=stdout, stderr=stderr, console=console)
        return cls(config, reporter, stdin=stdin, executor_factory=executor_factory)

    def resolve(self, test_paths: Iterable[str | os.PathLike[str]]) -> list[TestCandidate]:
        return PathResolver(self.policy).resolve(test_paths)

    def dry_run(self, candidates: Sequence[TestCandidate]) -> RunOutcome:
        for candidate in candidates:
            self.reporter.report_dry_run(candidate.path, self.config.test_params)
        log.info("Dry run complete", count=len(candidates))
        return self.outcome

    def execute(self, candidates: Sequence[TestCandidate], workspace: Workspace) -> RunOutcome:
        """Run candidates strictly in order, one at a time."""
        if self.config.fork_stdin:
            workspace.fork_stdin(self.stdin)

        executor = self.executor_factory(workspace, self.config)
        for candidate in candidates:
            result = executor.run_test(candidate)
            self.reporter.report(result)
            self.outcome.record(result)
            if not result.success and self.policy.should_halt_on(Anomaly.FAILED_TEST):
                self.outcome.halt()
                break
        return self.outcome

    def run(self, test_paths: Iterable[str | os.PathLike[str]]) -> RunOutcome:
        """
        Main execution method: resolve, then execute (or dry run).

        Raises:
            TestFailureError: once the workspace is released, if any test failed.
            PathValidationError, NoTestsError: from resolution, before any test runs.
            InternalError: workspace or launch failures.
        """
        log.info("Test run starting", dry_run=self.config.dry_run)
        candidates = self.resolve(test_paths)

        if self.config.dry_run:
            return self.dry_run(candidates)

        with acquire_workspace(self.config.temp_root) as workspace:
            self.execute(candidates, workspace)

        log.info(
            "Test run finished",
            tests_run=self.outcome.tests_run,
            failed=self.outcome.failed,
            halted_early=self.outcome.halted_early,
        )
        if self.outcome.any_failed:
            raise TestFailureError(self.outcome.failed, halted_early=self.outcome.halted_early)
        return self.outcome


# 🔼⚙️
