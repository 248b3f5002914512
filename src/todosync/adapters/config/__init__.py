"""
Configuration adapters - file, .env and environment variable providers.
"""

from .environment import EnvironmentConfigProvider
from .file_config import FileConfigProvider


__all__ = ["EnvironmentConfigProvider", "FileConfigProvider"]
