# src/testrun/policy.py

"""
Halt/ignore and display decisions derived from an immutable RunConfig.
"""

from attrs import define, field

from testrun.config import Anomaly, DisplaySelector, RunConfig


@define(frozen=True, slots=True)
class PolicyEngine:
    """Pure lookups over the run configuration; holds no state of its own."""

    config: RunConfig = field()

    def should_halt_on(self, kind: Anomaly) -> bool:
        return self.config.halt_on[Anomaly(kind)]

    @staticmethod
    def should_print(selector: DisplaySelector, exit_code: int) -> bool:
        if selector is DisplaySelector.ALWAYS:
            return True
        if selector is DisplaySelector.NEVER:
            return False
        if selector is DisplaySelector.SUCCESS:
            return exit_code == 0
        return exit_code != 0

    def should_print_result(self, exit_code: int) -> bool:
        return self.should_print(self.config.print_result, exit_code)

    def should_print_stdout(self, exit_code: int) -> bool:
        return self.should_print(self.config.print_stdout, exit_code)

    def should_print_stderr(self, exit_code: int) -> bool:
        return self.should_print(self.config.print_stderr, exit_code)


# 🔼⚙️
