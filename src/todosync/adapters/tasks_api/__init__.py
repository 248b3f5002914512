"""
Tasks API Adapter - Integration with the REST task store.

This module provides the TasksApiAdapter and the low-level TasksApiClient.
"""

from todosync.adapters.tasks_api.adapter import TasksApiAdapter
from todosync.adapters.tasks_api.client import TasksApiClient


__all__ = ["TasksApiAdapter", "TasksApiClient"]
