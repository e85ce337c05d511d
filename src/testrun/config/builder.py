#
# config/builder.py
#
"""
Validating constructor that turns raw front-end values into a RunConfig.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog

from testrun.exceptions import ConfigurationError
from testrun.telemetry import StructLogger

from .models import DEFAULT_HALT_ON, Anomaly, RunConfig

log: StructLogger = structlog.get_logger("config.builder")


def apply_halt_toggles(toggles: Iterable[tuple[str, bool]]) -> dict[Anomaly, bool]:
    """
    Apply halt-on/ignore toggles in order; later toggles overwrite earlier ones.
    """
    halt_on = dict(DEFAULT_HALT_ON)
    for kind, halt in toggles:
        try:
            halt_on[Anomaly(kind)] = halt
        except ValueError:
            raise ConfigurationError(f"unrecognized value of --halt-on or --ignore: {kind}") from None
    return halt_on


def build_run_config(
    *,
    include_hidden: bool = False,
    recursive: bool = False,
    quiet: bool = False,
    fork_stdin: bool = False,
    dry_run: bool = False,
    test_params: Sequence[str] = (),
    halt_toggles: Iterable[tuple[str, bool]] = (),
    print_result: str = "always",
    print_stdout: str = "never",
    print_stderr: str = "failure",
    temp_root: str | Path | None = None,
) -> RunConfig:
    """
    Build a RunConfig, converting every validation failure into ConfigurationError.
    """
    halt_on = apply_halt_toggles(halt_toggles)

    for option, value in (
        ("--print-result", print_result),
        ("--print-stdout", print_stdout),
        ("--print-stderr", print_stderr),
    ):
        if str(getattr(value, "value", value)).lower() not in {"always", "failure", "success", "never"}:
            raise ConfigurationError(f"unrecognized value for {option}: {value}")

    kwargs = {}
    if temp_root is not None:
        kwargs["temp_root"] = temp_root

    try:
        config = RunConfig(
            include_hidden=include_hidden,
            recursive=recursive,
            quiet=quiet,
            fork_stdin=fork_stdin,
            dry_run=dry_run,
            test_params=test_params,
            halt_on=halt_on,
            print_result=print_result,
            print_stdout=print_stdout,
            print_stderr=print_stderr,
            **kwargs,
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e)) from e

    log.debug(
        "Run configuration built",
        halt_on={kind.value: halt for kind, halt in config.halt_on.items()},
        print_result=config.print_result.value,
        print_stdout=config.print_stdout.value,
        print_stderr=config.print_stderr.value,
        temp_root=str(config.temp_root),
    )
    return config


# 🔼⚙️
