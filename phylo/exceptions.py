"""Exception classes for phylo.

Each exception that reaches the command line maps to one process exit code.
"""

from typing import Optional


class PhyloException(Exception):
    """Base exception for listing operations."""

    exit_code = 1

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UsageError(PhyloException):
    """Raised when the command line has the wrong number of arguments."""

    def __init__(self, message: str = "Expected 2 arguments: operation arg"):
        super().__init__(message)


class EnumerationOpenError(PhyloException):
    """Raised when a pattern cannot be opened for enumeration.

    Covers missing directories, permission errors and patterns that match
    nothing at all.
    """

    exit_code = 2

    def __init__(self, pattern: str, error_code: Optional[int] = None):
        self.pattern = pattern
        self.error_code = error_code
        super().__init__(f'Failed to read "{pattern}" ({error_code})')


class EnumerationError(PhyloException):
    """Raised when enumeration fails after the pattern was opened."""

    exit_code = 3

    def __init__(self, pattern: str, error_code: Optional[int] = None):
        self.pattern = pattern
        self.error_code = error_code
        super().__init__(f'Failed while reading "{pattern}" ({error_code})')


def format_os_error_code(error: OSError) -> Optional[int]:
    """Return the native error code of an OSError.

    Windows reports its own codes in ``winerror``; everywhere else ``errno``
    is the native code.
    """
    winerror = getattr(error, "winerror", None)
    if winerror:
        return winerror
    return error.errno
