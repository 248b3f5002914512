"""
Configuration Provider Port - Abstract interface for configuration.

Implementations:
- FileConfigProvider: Load from YAML/TOML config files
- EnvironmentConfigProvider: Load from env vars and .env, layered over files
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


DEFAULT_SERVICE_URL = "http://localhost:8080"


@dataclass
class ServiceConfig:
    """Configuration for the remote task store."""

    url: str = DEFAULT_SERVICE_URL
    timeout: float = 30.0
    max_retries: int = 3

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return bool(self.url) and self.url.startswith(("http://", "https://"))


@dataclass
class SyncConfig:
    """Configuration for the synchronization engine."""

    # Wait before reconciling after a confirmed complete/delete.
    # Responses are trusted, so no delay is needed against a consistent store.
    settle_delay: float = 0.0

    verbose: bool = False


@dataclass
class AppConfig:
    """Complete application configuration."""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.service.url:
            errors.append("Missing task service URL (service.url / TODOSYNC_API_URL)")
        elif not self.service.is_valid():
            errors.append(
                f"Invalid task service URL '{self.service.url}': must start with http:// or https://"
            )
        if self.service.timeout <= 0:
            errors.append("service.timeout must be greater than 0")
        if self.service.max_retries < 0:
            errors.append("service.max_retries must not be negative")
        if self.sync.settle_delay < 0:
            errors.append("sync.settle_delay must not be negative")

        return errors


class ConfigProviderPort(ABC):
    """
    Abstract interface for configuration providers.

    Configuration can come from various sources:
    - YAML/TOML config files
    - .env files
    - Environment variables
    - Command line arguments
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """
        Load configuration from source.

        Returns:
            Complete application configuration
        """
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a specific configuration value.

        Args:
            key: Configuration key (dot notation, e.g. "service.url")
            default: Default value if not found

        Returns:
            Configuration value
        """
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate loaded configuration.

        Returns:
            List of validation errors
        """
        ...
