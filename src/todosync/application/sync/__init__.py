"""
Sync module - Keeps the local task view consistent with the remote store.
"""

from .engine import (
    COMPLETE_FAILED,
    CREATE_FAILED,
    DELETE_FAILED,
    LOAD_FAILED,
    LOAD_TASK_FAILED,
    TITLE_REQUIRED,
    SyncEngine,
    display_message,
)
from .store import TaskStore


__all__ = [
    "COMPLETE_FAILED",
    "CREATE_FAILED",
    "DELETE_FAILED",
    "LOAD_FAILED",
    "LOAD_TASK_FAILED",
    "TITLE_REQUIRED",
    "SyncEngine",
    "TaskStore",
    "display_message",
]
