"""
Adapters Layer - Implementations of the core ports.

- tasks_api: REST task store client and adapter
- config: configuration providers
"""

from .config import EnvironmentConfigProvider, FileConfigProvider
from .tasks_api import TasksApiAdapter, TasksApiClient


__all__ = [
    "EnvironmentConfigProvider",
    "FileConfigProvider",
    "TasksApiAdapter",
    "TasksApiClient",
]
