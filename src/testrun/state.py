# src/testrun/state.py
#
"""
Aggregate state of a test run, updated after every reported test.
"""

import structlog
from attrs import field, mutable

from testrun.testing.protocols import TestResult

log: structlog.stdlib.BoundLogger = structlog.get_logger("state")

EXIT_SUCCESS = 0
EXIT_TESTS_FAILED = 8


@mutable(slots=True)
class RunOutcome:
    """
    Starts at "no failures"; finalized once the candidate list is exhausted
    or a halt fires.
    """

    tests_run: int = field(default=0)
    failed: int = field(default=0)
    halted_early: bool = field(default=False)

    @property
    def any_failed(self) -> bool:
        return self.failed > 0

    @property
    def exit_code(self) -> int:
        return EXIT_TESTS_FAILED if self.any_failed else EXIT_SUCCESS

    def record(self, result: TestResult) -> None:
        self.tests_run += 1
        if not result.success:
            self.failed += 1

    def halt(self) -> None:
        log.info("Run halted early", tests_run=self.tests_run, failed=self.failed)
        self.halted_early = True
