#
# src/testrun/runtime/__init__.py
#
"""
Runtime orchestration for testrun.
"""
from .orchestrator import TestRunOrchestrator, default_executor_factory
from .reporter import ResultReporter, format_status, status_console

__all__ = [
    "ResultReporter",
    "TestRunOrchestrator",
    "default_executor_factory",
    "format_status",
    "status_console",
]

# 🔼⚙️
