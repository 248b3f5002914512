"""
File Configuration Provider - Load configuration from YAML or TOML files.

Looked up in this order when no explicit path is given:
- ./.todosync.yaml, ./.todosync.yml, ./.todosync.toml
- ./pyproject.toml (only if it has a [tool.todosync] section)
- ~/.todosync.yaml, ~/.todosync.yml, ~/.todosync.toml

Example .todosync.yaml:

    service:
      url: http://localhost:8080
      timeout: 10
      max_retries: 2

    sync:
      settle_delay: 0.5
      verbose: true
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from todosync.core.exceptions import ConfigError
from todosync.core.ports.config_provider import (
    AppConfig,
    ConfigProviderPort,
    ServiceConfig,
    SyncConfig,
)


try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for older Python


CONFIG_FILE_NAMES = (".todosync.yaml", ".todosync.yml", ".todosync.toml")

# Dotted config keys and the type each one is coerced to.
KEY_TYPES: dict[str, type] = {
    "service.url": str,
    "service.timeout": float,
    "service.max_retries": int,
    "sync.settle_delay": float,
    "sync.verbose": bool,
}

# Command-line argument names and the config key they override.
CLI_KEYS = {
    "api_url": "service.url",
    "timeout": "service.timeout",
    "max_retries": "service.max_retries",
    "settle_delay": "sync.settle_delay",
    "verbose": "sync.verbose",
}

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off", "")


def coerce_value(key: str, value: Any) -> Any:
    """
    Convert a raw config value to the type expected for ``key``.

    Raises:
        ConfigError: If the value can't be converted
    """
    expected = KEY_TYPES.get(key, str)

    if expected is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ConfigError(f"Invalid boolean for {key}: {value!r}")

    try:
        if expected is str:
            return str(value).strip()
        return expected(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}", cause=e) from e


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested sections into dotted keys ({"service": {"url": x}} -> "service.url")."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def cli_overrides_to_keys(cli_overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Map argparse names to config keys, dropping unset (None) values."""
    values: dict[str, Any] = {}
    for arg_name, key in CLI_KEYS.items():
        value = (cli_overrides or {}).get(arg_name)
        if value is None:
            continue
        # store_true flags default to False; only an explicit True overrides
        if KEY_TYPES[key] is bool and value is False:
            continue
        values[key] = value
    return values


def build_config(values: dict[str, Any]) -> AppConfig:
    """
    Build an AppConfig from dotted-key values.

    Unknown keys are ignored; missing keys keep their defaults.

    Raises:
        ConfigError: If a value has the wrong type
    """
    typed = {key: coerce_value(key, values[key]) for key in KEY_TYPES if key in values}

    service = ServiceConfig()
    sync = SyncConfig()

    if "service.url" in typed:
        service.url = typed["service.url"].rstrip("/")
    if "service.timeout" in typed:
        service.timeout = typed["service.timeout"]
    if "service.max_retries" in typed:
        service.max_retries = typed["service.max_retries"]
    if "sync.settle_delay" in typed:
        sync.settle_delay = typed["sync.settle_delay"]
    if "sync.verbose" in typed:
        sync.verbose = typed["sync.verbose"]

    return AppConfig(service=service, sync=sync)


class FileConfigProvider(ConfigProviderPort):
    """
    Configuration provider that reads YAML or TOML files.

    CLI overrides, when given, take precedence over file values.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ):
        """
        Initialize the provider.

        Args:
            config_path: Explicit config file (auto-detected if None)
            cli_overrides: Parsed command-line arguments (argparse names)
        """
        self._explicit_path = config_path
        self._cli_overrides = cli_overrides or {}
        self.logger = logging.getLogger("FileConfigProvider")

        self._config_file: Path | None = None
        self._values: dict[str, Any] | None = None
        self._load_errors: list[str] = []

    @property
    def name(self) -> str:
        if self.config_file_path:
            return f"File ({self.config_file_path.name})"
        return "File"

    @property
    def config_file_path(self) -> Path | None:
        """The config file in use, if one was found."""
        if self._config_file is None:
            self._config_file = self._find_config_file()
        return self._config_file

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    def load(self) -> AppConfig:
        values = dict(self.file_values())
        values.update(cli_overrides_to_keys(self._cli_overrides))
        return build_config(values)

    def get(self, key: str, default: Any = None) -> Any:
        overrides = cli_overrides_to_keys(self._cli_overrides)
        if key in overrides:
            return coerce_value(key, overrides[key])
        values = self.file_values()
        if key in values:
            return coerce_value(key, values[key])
        return default

    def validate(self) -> list[str]:
        if self.load_errors:
            return self.load_errors
        try:
            return self.load().validate()
        except ConfigError as e:
            return [str(e)]

    # -------------------------------------------------------------------------
    # File Handling
    # -------------------------------------------------------------------------

    @property
    def load_errors(self) -> list[str]:
        """Errors hit while locating or parsing the config file."""
        self.file_values()
        return list(self._load_errors)

    def file_values(self) -> dict[str, Any]:
        """Dotted-key values read from the config file ({} if there is none)."""
        if self._values is not None:
            return self._values

        self._values = {}
        path = self.config_file_path

        if self._explicit_path is not None and path is None:
            self._load_errors.append(f"Config file not found: {self._explicit_path}")
            return self._values
        if path is None:
            return self._values

        try:
            self._values = flatten(self._read_file(path))
            self.logger.debug(f"Loaded config from {path}")
        except yaml.YAMLError as e:
            self._load_errors.append(f"Invalid YAML syntax in {path}: {e}")
        except tomllib.TOMLDecodeError as e:
            self._load_errors.append(f"Invalid TOML syntax in {path}: {e}")
        except OSError as e:
            self._load_errors.append(f"Cannot read config file {path}: {e}")
        except ConfigError as e:
            self._load_errors.append(str(e))

        return self._values

    def _find_config_file(self) -> Path | None:
        if self._explicit_path is not None:
            return self._explicit_path if self._explicit_path.is_file() else None

        cwd = Path.cwd()
        for file_name in CONFIG_FILE_NAMES:
            candidate = cwd / file_name
            if candidate.is_file():
                return candidate

        pyproject = cwd / "pyproject.toml"
        if pyproject.is_file() and self._has_tool_section(pyproject):
            return pyproject

        home = Path.home()
        for file_name in CONFIG_FILE_NAMES:
            candidate = home / file_name
            if candidate.is_file():
                return candidate

        return None

    def _read_file(self, path: Path) -> dict[str, Any]:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        else:
            with path.open("rb") as f:
                data = tomllib.load(f)
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("todosync", {})

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at the top level")
        return data

    @staticmethod
    def _has_tool_section(pyproject: Path) -> bool:
        try:
            with pyproject.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return False
        return "todosync" in data.get("tool", {})
