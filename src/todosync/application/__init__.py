"""
Application Layer - Use cases built on the core ports.
"""

from .sync import SyncEngine, TaskStore


__all__ = ["SyncEngine", "TaskStore"]
