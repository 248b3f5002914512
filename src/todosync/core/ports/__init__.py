"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import (
    DEFAULT_SERVICE_URL,
    AppConfig,
    ConfigProviderPort,
    ServiceConfig,
    SyncConfig,
)
from .task_service import RECENT_TASKS_LIMIT, RemoteTaskServicePort


__all__ = [
    "DEFAULT_SERVICE_URL",
    "RECENT_TASKS_LIMIT",
    "AppConfig",
    "ConfigProviderPort",
    "RemoteTaskServicePort",
    "ServiceConfig",
    "SyncConfig",
]
