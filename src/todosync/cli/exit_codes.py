"""
Exit Codes - Process exit statuses for the todosync CLI.

Scripts can rely on these values to tell failure kinds apart.
"""

from enum import IntEnum

from todosync.core.exceptions import (
    ConfigError,
    NetworkError,
    RemoteError,
    ResourceNotFoundError,
    TransientError,
    ValidationError,
)


class ExitCode(IntEnum):
    """Exit statuses returned by ``todosync``."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    CONNECTION_ERROR = 3
    VALIDATION_ERROR = 4
    NOT_FOUND = 5
    REMOTE_ERROR = 6
    SIGINT = 130

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExitCode":
        """Pick the exit code that best describes ``exc``."""
        if isinstance(exc, KeyboardInterrupt):
            return cls.SIGINT
        if isinstance(exc, ConfigError):
            return cls.CONFIG_ERROR
        if isinstance(exc, ValidationError):
            return cls.VALIDATION_ERROR
        if isinstance(exc, ResourceNotFoundError):
            return cls.NOT_FOUND
        # Retries exhausted means the store is unreachable in practice.
        if isinstance(exc, (NetworkError, TransientError)):
            return cls.CONNECTION_ERROR
        if isinstance(exc, RemoteError):
            return cls.REMOTE_ERROR
        return cls.ERROR
