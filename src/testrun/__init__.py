#
# src/testrun/__init__.py
#
"""
testrun: run every executable in a set of paths as an independent test.
"""

from testrun.config import Anomaly, DisplaySelector, RunConfig, build_run_config
from testrun.exceptions import TestrunError

__all__ = [
    "Anomaly",
    "DisplaySelector",
    "RunConfig",
    "TestrunError",
    "build_run_config",
]

# 🔼⚙️
