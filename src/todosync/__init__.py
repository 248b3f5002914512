"""
todosync - Keep a local view of a remote task store in sync.

Layers:
- core/: Task entity, exceptions and ports (no I/O)
- adapters/: REST task store client and configuration providers
- application/: TaskStore and SyncEngine
- cli/: The ``todosync`` command
"""

__version__ = "1.0.0"

from .application import SyncEngine, TaskStore
from .core import (
    NetworkError,
    RemoteError,
    Task,
    TaskId,
    TodoSyncError,
    ValidationError,
)


__all__ = [
    "NetworkError",
    "RemoteError",
    "SyncEngine",
    "Task",
    "TaskId",
    "TaskStore",
    "TodoSyncError",
    "ValidationError",
    "__version__",
]
