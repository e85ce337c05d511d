# src/testrun/cli/main.py

"""
Main CLI entry point for testrun using Click.
Parses options into a RunConfig and maps errors to exit statuses.
"""

import sys
import tempfile
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
import structlog

from testrun.cli.utils import logging_options, setup_logging_from_options
from testrun.config import Anomaly, DisplaySelector, build_run_config
from testrun.exceptions import TestFailureError, TestrunError
from testrun.runtime import TestRunOrchestrator, status_console
from testrun.telemetry import StructLogger

try:
    __version__ = version("testrun")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

log: StructLogger = structlog.get_logger("cli.main")

EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

ANOMALY_CHOICES = click.Choice([a.value for a in Anomaly], case_sensitive=True)
SELECTOR_CHOICES = click.Choice([s.value for s in DisplaySelector], case_sensitive=True)

EPILOG = """
\b
Defaults:
  --print-result always
  --print-stdout never
  --print-stderr failure
  --halt-on missing_test
  --halt-on no_tests
  --ignore failed_test
  --ignore non_exec

\b
Examples:
  # Run all tests in a directory
  testrun ./tests
  # Run all tests recursively in two different directories
  testrun -r /my/test/dir /my/other-test/dir
  # Fork stdin across all tests
  printf '%s\\n' "hello all tests" | testrun -F ./tests

\b
Exit status:
  0    success
  1    unmanaged error
  2    failed parameter validation
  4    failed validation of test files to be run
  8    one or more tests returned an exit code greater than 0
"""


def _fail(ctx: click.Context, error: TestrunError) -> None:
    click.echo(f"ERROR: testrun, {error}", err=True)
    ctx.exit(error.exit_code)


# --halt-on and --ignore toggle the same table; the last occurrence wins.
HALT_TOGGLE_PARAMS = {"halt_on": True, "ignore": False}


class RunCommand(click.Command):
    """
    Command that remembers whether it was invoked bare, and the command-line
    order of every --halt-on/--ignore occurrence.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta["testrun.bare"] = not args
        parser = self.make_parser(ctx)
        _, _, param_order = parser.parse_args(args=list(args))
        ctx.meta["testrun.toggle_order"] = [
            param.name for param in param_order if param.name in HALT_TOGGLE_PARAMS
        ]
        return super().parse_args(ctx, args)


def ordered_toggles(
    order: list[str] | None, halt_on: tuple[str, ...], ignore: tuple[str, ...]
) -> list[tuple[str, bool]]:
    """Pair toggle values with their option, in command-line order."""
    if order is None:
        order = ["halt_on"] * len(halt_on) + ["ignore"] * len(ignore)
    values = {"halt_on": iter(halt_on), "ignore": iter(ignore)}
    return [(next(values[name]), HALT_TOGGLE_PARAMS[name]) for name in order]


@click.command(
    name="testrun",
    cls=RunCommand,
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, "-V", "--version", package_name="testrun")
@click.option("-a", "--all", "include_hidden", is_flag=True, help="Include files and directories beginning with '.'.")
@click.option("-q", "--quiet", is_flag=True, help="Do not print the per-test status line.")
@click.option("-r", "--recursive", is_flag=True, help="Search each DIRECTORY recursively.")
@click.option(
    "-p",
    "--params",
    default="",
    metavar="VAL",
    help="Whitespace separated param(s) for every test file, ex: -p '-c=3 -f /my/file'.",
)
@click.option("-F", "--fork-stdin", is_flag=True, help="Write stdin into all tests.")
@click.option("--dry-run", is_flag=True, help="Print the filepaths to be executed.")
@click.option("-o", "--halt-on", multiple=True, type=ANOMALY_CHOICES, help="Abort the run on this anomaly.")
@click.option("-i", "--ignore", multiple=True, type=ANOMALY_CHOICES, help="Continue past this anomaly (the later of --halt-on/--ignore wins).")
@click.option("--print-result", type=SELECTOR_CHOICES, default="always", show_default=True)
@click.option("--print-stdout", type=SELECTOR_CHOICES, default="never", show_default=True)
@click.option("--print-stderr", type=SELECTOR_CHOICES, default="failure", show_default=True)
@click.option(
    "--tmp-dir",
    "temp_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=lambda: Path(tempfile.gettempdir()),
    envvar="TESTRUN_TMPDIR",
    show_envvar=True,
    help="Root under which the private scratch directory is created.",
)
@logging_options
@click.argument("test_paths", nargs=-1, type=click.Path(path_type=str))
@click.pass_context
def cli(
    ctx: click.Context,
    include_hidden: bool,
    quiet: bool,
    recursive: bool,
    params: str,
    fork_stdin: bool,
    dry_run: bool,
    halt_on: tuple[str, ...],
    ignore: tuple[str, ...],
    print_result: str,
    print_stdout: str,
    print_stderr: str,
    temp_root: Path,
    test_paths: tuple[str, ...],
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    testrun [OPTION]... [FILE]... [DIRECTORY]...

    A generic stand-alone runner for executing test files and reporting on them.

    Each DIRECTORY is assumed to only contain executable FILEs that are tests.
    Null characters are allowed in stdin (see: -F) and in the stdout and stderr
    of executed test FILEs.
    """
    setup_logging_from_options(log_level, log_file, json_logs)

    if not test_paths:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(0 if ctx.meta.get("testrun.bare") else EXIT_USAGE)

    toggles = ordered_toggles(ctx.meta.get("testrun.toggle_order"), halt_on, ignore)

    try:
        config = build_run_config(
            include_hidden=include_hidden,
            recursive=recursive,
            quiet=quiet,
            fork_stdin=fork_stdin,
            dry_run=dry_run,
            test_params=params.split(),
            halt_toggles=toggles,
            print_result=print_result,
            print_stdout=print_stdout,
            print_stderr=print_stderr,
            temp_root=temp_root,
        )
        orchestrator = TestRunOrchestrator.create(
            config,
            stdout=sys.stdout.buffer,
            stderr=sys.stderr.buffer,
            stdin=sys.stdin.buffer if fork_stdin else None,
            console=status_console(sys.stderr),
        )
        orchestrator.run(test_paths)
    except TestFailureError as e:
        log.info("Tests failed", failed=e.failed, halted_early=e.halted_early)
        ctx.exit(e.exit_code)
    except TestrunError as e:
        log.debug("Run aborted", error=str(e), exit_code=e.exit_code)
        _fail(ctx, e)
    except KeyboardInterrupt:
        log.warning("Run interrupted by KeyboardInterrupt (CTRL-C).")
        ctx.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    cli()

# 🖥️⚙️
