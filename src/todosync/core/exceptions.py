"""
Centralized exception hierarchy for todosync.

All errors raised by the library derive from TodoSyncError so callers
can catch everything with a single except clause, while still being able
to distinguish local validation failures from transport and remote errors.

Hierarchy:
    TodoSyncError
    ├── ValidationError          - rejected locally, no request was sent
    ├── ConfigError              - invalid or missing configuration
    ├── NetworkError             - request failed or store unreachable
    └── RemoteError              - store answered with a non-success status
        ├── ResourceNotFoundError
        ├── TransientError
        └── RateLimitError
"""

from __future__ import annotations


__all__ = [
    "ConfigError",
    "NetworkError",
    "RateLimitError",
    "RemoteError",
    "ResourceNotFoundError",
    "TodoSyncError",
    "TransientError",
    "ValidationError",
]


class TodoSyncError(Exception):
    """
    Base class for all todosync errors.

    Attributes:
        message: Human-readable error message.
        cause: Underlying exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
        return self.message


class ValidationError(TodoSyncError):
    """Input rejected before any network call was made."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConfigError(TodoSyncError):
    """Configuration is missing, malformed or invalid."""


class NetworkError(TodoSyncError):
    """The request could not be completed (connection refused, timeout, ...)."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.endpoint = endpoint


class RemoteError(TodoSyncError):
    """
    The task store returned a non-success status.

    Attributes:
        status_code: HTTP status code, if known.
        server_message: The ``message`` field of the error payload, if the
            store sent one. This is what gets shown to the user.
        endpoint: The endpoint that failed.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
        endpoint: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.server_message = server_message
        self.endpoint = endpoint


class ResourceNotFoundError(RemoteError):
    """The requested task does not exist (HTTP 404)."""


class TransientError(RemoteError):
    """A retryable server error persisted after all retries were used."""


class RateLimitError(TransientError):
    """The store rejected the request with HTTP 429."""

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        server_message: str | None = None,
        endpoint: str | None = None,
    ):
        super().__init__(
            message,
            status_code=429,
            server_message=server_message,
            endpoint=endpoint,
        )
        self.retry_after = retry_after
