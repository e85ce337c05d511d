# src/testrun/exceptions.py

"""
Exception hierarchy for testrun.

Every error carries the process exit status it maps to; only the CLI turns
them into an actual exit.
"""


class TestrunError(Exception):
    """Base class for all testrun errors."""

    __test__ = False
    exit_code: int = 1

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class ConfigurationError(TestrunError):
    """An option value failed validation."""

    exit_code = 2


class PathValidationError(TestrunError):
    """A user-supplied test path was rejected under an active halt policy."""

    exit_code = 4


class MissingTestError(PathValidationError):
    """Raised when a test path does not exist."""

    def __init__(self, path: str):
        super().__init__(f"test path does not exist: {path}", path=path)


class NotExecutableError(PathValidationError):
    """Raised when a test path exists but cannot be executed."""

    def __init__(self, path: str):
        super().__init__(f"test path is not executable: {path}", path=path)


class NoTestsError(TestrunError):
    """Path resolution produced nothing to run."""

    exit_code = 4

    def __init__(self, message: str = "no files to execute"):
        super().__init__(message)


class TestFailureError(TestrunError):
    """One or more tests exited non-zero."""

    exit_code = 8

    def __init__(self, failed: int, halted_early: bool = False):
        self.failed = failed
        self.halted_early = halted_early
        message = f"{failed} test(s) failed"
        if halted_early:
            message += " (run halted on first failure)"
        super().__init__(message)


class InternalError(TestrunError):
    """Unmanaged failure: workspace or I/O problems."""

    exit_code = 1

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.details = details
        super().__init__(message, path=path)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class WorkspaceError(InternalError):
    """The scratch directory could not be created or used."""

    pass


# 🔼⚙️
