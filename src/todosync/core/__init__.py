"""
Core Layer - Domain entities, exceptions and ports.

Nothing in this package performs I/O.
"""

from .domain import Task, TaskId
from .exceptions import (
    ConfigError,
    NetworkError,
    RateLimitError,
    RemoteError,
    ResourceNotFoundError,
    TodoSyncError,
    TransientError,
    ValidationError,
)


__all__ = [
    "ConfigError",
    "NetworkError",
    "RateLimitError",
    "RemoteError",
    "ResourceNotFoundError",
    "Task",
    "TaskId",
    "TodoSyncError",
    "TransientError",
    "ValidationError",
]
