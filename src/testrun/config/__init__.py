#
# config/__init__.py
#
"""
Configuration handling sub-package for testrun.

Exports the validating builder and the core configuration model.
"""

from .builder import apply_halt_toggles, build_run_config
from .models import DEFAULT_HALT_ON, Anomaly, DisplaySelector, RunConfig

__all__ = [
    "DEFAULT_HALT_ON",
    "Anomaly",
    "DisplaySelector",
    "RunConfig",
    "apply_halt_toggles",
    "build_run_config",
]

# 🔼⚙️
