#
# config/models.py
#
"""
Attrs-based data models for testrun run configuration.
"""

import tempfile
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from attrs import define, field


class DisplaySelector(str, Enum):
    """When a piece of test output should be echoed."""

    ALWAYS = "always"
    FAILURE = "failure"
    SUCCESS = "success"
    NEVER = "never"


class Anomaly(str, Enum):
    """Deviations whose handling (halt vs. ignore) is policy-controlled."""

    MISSING_TEST = "missing_test"
    NON_EXEC = "non_exec"
    NO_TESTS = "no_tests"
    FAILED_TEST = "failed_test"


DEFAULT_HALT_ON: Mapping[Anomaly, bool] = MappingProxyType(
    {
        Anomaly.MISSING_TEST: True,
        Anomaly.NO_TESTS: True,
        Anomaly.FAILED_TEST: False,
        Anomaly.NON_EXEC: False,
    }
)


# --- Converters and validators ---
def _to_selector(value: Any) -> DisplaySelector:
    if isinstance(value, DisplaySelector):
        return value
    try:
        return DisplaySelector(str(value).lower())
    except ValueError:
        choices = [s.value for s in DisplaySelector]
        raise ValueError(f"unrecognized display selector '{value}'. Must be one of {choices}.") from None


def _to_halt_on(value: Mapping[Any, bool] | None) -> Mapping[Anomaly, bool]:
    """Fill in defaults for every anomaly kind and freeze the result."""
    merged = dict(DEFAULT_HALT_ON)
    for key, halt in (value or {}).items():
        try:
            kind = Anomaly(key)
        except ValueError:
            choices = [a.value for a in Anomaly]
            raise ValueError(f"unrecognized anomaly kind '{key}'. Must be one of {choices}.") from None
        merged[kind] = bool(halt)
    return MappingProxyType(merged)


def _validate_string_sequence(inst: Any, attr: Any, value: tuple[str, ...]) -> None:
    """Validator ensures every test parameter is a string."""
    for item in value:
        if not isinstance(item, str):
            raise TypeError(f"Field '{attr.name}' must contain only strings, got {item!r}")


@define(frozen=True, slots=True)
class RunConfig:
    """
    Immutable settings for one test run.

    Built once from validated input and threaded explicitly through the
    resolver, policy engine, executor and reporter.
    """

    include_hidden: bool = field(default=False)
    recursive: bool = field(default=False)
    quiet: bool = field(default=False)
    fork_stdin: bool = field(default=False)
    dry_run: bool = field(default=False)
    test_params: tuple[str, ...] = field(default=(), converter=tuple, validator=_validate_string_sequence)
    halt_on: Mapping[Anomaly, bool] = field(factory=dict, converter=_to_halt_on)
    print_result: DisplaySelector = field(default=DisplaySelector.ALWAYS, converter=_to_selector)
    print_stdout: DisplaySelector = field(default=DisplaySelector.NEVER, converter=_to_selector)
    print_stderr: DisplaySelector = field(default=DisplaySelector.FAILURE, converter=_to_selector)
    temp_root: Path = field(factory=lambda: Path(tempfile.gettempdir()), converter=Path)


# 🔼⚙️
