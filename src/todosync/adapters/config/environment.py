"""
Environment Configuration Provider - Load configuration from env vars and .env.

Precedence (highest first):
1. CLI arguments
2. Environment variables
3. .env file
4. Config file (.todosync.yaml / .todosync.toml / pyproject.toml)
5. Defaults

Environment variables:
    TODOSYNC_API_URL        Task store base URL (e.g. http://localhost:8080)
    TODOSYNC_TIMEOUT        Request timeout in seconds
    TODOSYNC_MAX_RETRIES    Retries for transient failures
    TODOSYNC_SETTLE_DELAY   Seconds to wait before reconciling after complete/delete
    TODOSYNC_VERBOSE        Enable verbose output (true/false)
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from todosync.core.exceptions import ConfigError
from todosync.core.ports.config_provider import AppConfig, ConfigProviderPort

from .file_config import FileConfigProvider, build_config, cli_overrides_to_keys, coerce_value


ENV_KEYS = {
    "TODOSYNC_API_URL": "service.url",
    "TODOSYNC_TIMEOUT": "service.timeout",
    "TODOSYNC_MAX_RETRIES": "service.max_retries",
    "TODOSYNC_SETTLE_DELAY": "sync.settle_delay",
    "TODOSYNC_VERBOSE": "sync.verbose",
}


def read_env_file(path: Path) -> dict[str, str]:
    """Read a .env file, skipping keys without a value."""
    values: dict[str, str] = {}
    for key, value in dotenv_values(path).items():
        if key is None or value is None:
            continue
        values[str(key)] = str(value)
    return values


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider layering .env and environment variables over files.
    """

    def __init__(
        self,
        config_file: Path | None = None,
        env_file: Path | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ):
        """
        Initialize the provider.

        Args:
            config_file: Explicit YAML/TOML config file (auto-detected if None)
            env_file: Explicit .env file (./.env if None)
            cli_overrides: Parsed command-line arguments (argparse names)
        """
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._file_provider = FileConfigProvider(config_path=config_file)
        self.logger = logging.getLogger("EnvironmentConfigProvider")

    @property
    def name(self) -> str:
        if self.config_file_path:
            return f"Environment + {self.config_file_path.name}"
        return "Environment"

    @property
    def config_file_path(self) -> Path | None:
        return self._file_provider.config_file_path

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    def load(self) -> AppConfig:
        return build_config(self._merged_values())

    def get(self, key: str, default: Any = None) -> Any:
        values = self._merged_values()
        if key in values:
            return coerce_value(key, values[key])
        return default

    def validate(self) -> list[str]:
        errors = self._file_provider.load_errors
        if errors:
            return errors

        try:
            config = self.load()
        except ConfigError as e:
            return [f"{e} (check the config file, .env and TODOSYNC_* environment variables)"]

        return [
            f"{error} - set it in a config file, .env or the environment" for error in config.validate()
        ]

    # -------------------------------------------------------------------------
    # Source Merging
    # -------------------------------------------------------------------------

    def _merged_values(self) -> dict[str, Any]:
        values = dict(self._file_provider.file_values())
        values.update(self._dotenv_values())
        values.update(self._environment_values())
        values.update(cli_overrides_to_keys(self._cli_overrides))
        return values

    def _dotenv_values(self) -> dict[str, Any]:
        path = self._env_file or Path.cwd() / ".env"
        if not path.is_file():
            return {}

        raw = read_env_file(path)
        self.logger.debug(f"Loaded .env from {path}")
        return {key: raw[name] for name, key in ENV_KEYS.items() if name in raw}

    @staticmethod
    def _environment_values() -> dict[str, Any]:
        return {key: os.environ[name] for name, key in ENV_KEYS.items() if name in os.environ}
