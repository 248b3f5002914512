"""
Remote Task Service Port - Abstract interface for the remote task store.

The store is the source of truth for tasks and for their ordering. The
client only ever sees it through this interface.

Implementations:
- TasksApiAdapter: JSON REST store (``/api/tasks``)
"""

from abc import ABC, abstractmethod
from typing import Any

from todosync.core.domain.entities import Task, TaskId
from todosync.core.exceptions import (
    NetworkError,
    RateLimitError,
    RemoteError,
    ResourceNotFoundError,
    TransientError,
)


__all__ = [
    "RECENT_TASKS_LIMIT",
    "NetworkError",
    "RateLimitError",
    "RemoteError",
    "RemoteTaskServicePort",
    "ResourceNotFoundError",
    "TransientError",
]


# The store returns at most this many tasks from the list operation.
RECENT_TASKS_LIMIT = 5


class RemoteTaskServicePort(ABC):
    """
    Abstract interface for the remote task store.

    All operations are coroutines so that several can be in flight on one
    event loop. Failures are reported by raising NetworkError (transport)
    or RemoteError (non-success status, with the store's message).
    """

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the service name."""
        ...

    @abstractmethod
    async def test_connection(self) -> bool:
        """Check that the store is reachable and reports itself healthy."""
        ...

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    async def list_recent(self) -> list[Task]:
        """
        Fetch the most recent incomplete tasks.

        Returns:
            Up to RECENT_TASKS_LIMIT tasks, newest first, all incomplete.
        """
        ...

    @abstractmethod
    async def get_task(self, task_id: TaskId) -> Task:
        """
        Fetch a single task by id.

        Raises:
            ResourceNotFoundError: If the task doesn't exist
        """
        ...

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    async def create_task(self, title: str, description: str = "") -> Task:
        """
        Create a task.

        Returns:
            The created task with its store-assigned id and timestamp
        """
        ...

    @abstractmethod
    async def complete_task(self, task_id: TaskId) -> Task:
        """
        Mark a task as completed.

        Returns:
            The updated task as reported by the store
        """
        ...

    @abstractmethod
    async def delete_task(self, task_id: TaskId) -> dict[str, Any]:
        """
        Delete a task.

        Returns:
            The deletion confirmation payload
        """
        ...
