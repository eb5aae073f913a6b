"""Exceptions raised by CLI commands."""

from enum import Enum


class ErrorCode(Enum):
    """Classification of a failed command; the value doubles as the exit code."""

    SUCCEEDED = 0
    EXCEPTION = 1
    ILLEGAL_COMMAND = 2
    NO_SUCH_COMMAND = 3
    INVALID_PARAMETER = 4
    NOT_LOGGED_IN = 5
    NOT_FOUND = 6


class CLIError(Exception):
    """A command failure carrying a user-facing message and an error code."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.EXCEPTION):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    @property
    def exit_code(self) -> int:
        return self.error_code.value
