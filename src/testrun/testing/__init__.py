#
# src/testrun/testing/__init__.py
#
"""
Test execution sub-package for testrun.
"""
from .protocols import TestExecutor, TestResult
from .subprocess_runner import SubprocessTestExecutor

__all__ = [
    "SubprocessTestExecutor",
    "TestExecutor",
    "TestResult",
]

# 🔼⚙️
