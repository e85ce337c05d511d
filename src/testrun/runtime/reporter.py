# src/testrun/runtime/reporter.py

"""
Echoes captured test output and one-line status markers according to the
display policy.
"""

import shlex
from typing import BinaryIO, TextIO

import structlog
from rich.console import Console
from rich.text import Text

from testrun.policy import PolicyEngine
from testrun.telemetry import StructLogger
from testrun.testing.protocols import TestResult

log: StructLogger = structlog.get_logger("runtime.reporter")


def status_console(file: TextIO | None = None) -> Console:
    """
    Console for status markers. Always emits ANSI color, TTY or not; NO_COLOR
    still turns it off.
    """
    return Console(
        file=file,
        stderr=file is None,
        force_terminal=True,
        color_system="standard",
        highlight=False,
        soft_wrap=True,
    )


def format_status(result: TestResult) -> Text:
    """`[exit_code] path`, green on success and red on failure."""
    style = "green" if result.success else "red"
    return Text.assemble((f"[{result.exit_code}]", style), " ", shlex.quote(result.path))


class ResultReporter:
    """
    Reports each TestResult as soon as it is produced; nothing is buffered
    across tests.
    """

    def __init__(
        self,
        policy: PolicyEngine,
        stdout: BinaryIO,
        stderr: BinaryIO,
        console: Console | None = None,
    ):
        self.policy = policy
        self.stdout = stdout
        self.stderr = stderr
        self.console = console or status_console()

    def report(self, result: TestResult) -> None:
        exit_code = result.exit_code
        if self.policy.should_print_stdout(exit_code):
            self.stdout.write(result.stdout)
            self.stdout.flush()
        if self.policy.should_print_stderr(exit_code):
            self.stderr.write(result.stderr)
            self.stderr.flush()
        # Quiet mode hides the marker, never the captured output.
        if self.policy.should_print_result(exit_code) and not self.policy.config.quiet:
            self.console.print(format_status(result))
            self.console.file.flush()
        log.debug("Reported test result", path=result.path, exit_code=exit_code, emoji_key="result")

    def report_dry_run(self, path: str, params: tuple[str, ...]) -> None:
        """Emit the invocation a real run would perform."""
        line = shlex.quote(path)
        if params:
            line += " " + shlex.join(params)
        self.stdout.write(line.encode() + b"\n")
        self.stdout.flush()


# 🔼⚙️
