"""
Domain layer - the Task entity and helpers.
"""

from .entities import Task, TaskId, parse_timestamp


__all__ = ["Task", "TaskId", "parse_timestamp"]
