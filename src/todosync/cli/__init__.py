"""
CLI Module - Command Line Interface for todosync.
"""

from .app import main, run
from .exit_codes import ExitCode
from .output import Console


__all__ = [
    "Console",
    "ExitCode",
    "main",
    "run",
]
