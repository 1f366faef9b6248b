"""
Error types for git-touchfish-commit

Every failure carries a user-facing message and the exit code the CLI
terminates with.
"""

from typing import Optional


class TouchfishError(Exception):
    """Base class for all git-tc failures"""

    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidFormatError(TouchfishError):
    """A time-of-day string (or the stored config) is not HH:MM"""

    exit_code = 2


class InvalidWindowError(TouchfishError):
    """Window start is not earlier than its end"""

    exit_code = 2


class NotConfiguredError(TouchfishError):
    """No window has been stored yet"""

    exit_code = 3


class NoCommitsError(TouchfishError):
    """The requested commit does not exist (empty repo or root commit)"""


class WindowExhaustedError(TouchfishError):
    """No second of the window lies after the lower bound"""

    exit_code = 4


class GitCommandError(TouchfishError):
    """A git invocation exited non-zero"""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, exit_code=returncode or 1)
        self.returncode = returncode
        self.stderr = stderr
