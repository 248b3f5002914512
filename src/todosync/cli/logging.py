"""
Logging - Structured log output for the todosync CLI.

Two formats are available:
- text: human readable, optionally colored, for terminals
- json: one JSON object per line, for log aggregation

Extra fields passed via ``extra=`` (or bound with ContextLogger) are kept:
under "context" in JSON output and as key=value pairs in text output.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, TextIO


# Attributes every LogRecord has; anything else came in through ``extra``.
STANDARD_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)

NOISY_LOGGERS = ("urllib3", "requests")


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON objects.

    Args:
        include_timestamp: Add an ISO 8601 UTC "timestamp"
        include_level: Add "level"
        include_logger: Add "logger"
        include_location: Add "location" (file, line, function)
        static_fields: Fields added to every record (e.g. service name)
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_location: bool = False,
        static_fields: dict[str, Any] | None = None,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_location = include_location
        self.static_fields = static_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {}

        if self.include_timestamp:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            entry["timestamp"] = created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(record.msecs):03d}Z"
        if self.include_level:
            entry["level"] = record.levelname
        if self.include_logger:
            entry["logger"] = record.name

        entry["message"] = record.getMessage()
        entry.update(self.static_fields)

        if self.include_location:
            entry["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        context = _extra_fields(record)
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
            }

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human readable formatter with optional level colors and context pairs."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",
        logging.INFO: "\033[36m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1m\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, include_context: bool = True):
        super().__init__(fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")
        self.use_colors = use_colors
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        output = super().format(record)

        if self.include_context:
            context = _extra_fields(record)
            if context:
                pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
                output = f"{output} [{pairs}]"

        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno)
            if color:
                output = f"{color}{output}{self.RESET}"

        return output


class ContextLogger:
    """
    Logger wrapper that attaches bound context fields to every record.

    Example:
        >>> log = get_logger("SyncEngine", operation="complete")
        >>> log.bind(task_id=42).info("Removed task")
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        self._logger = logging.getLogger(name)
        self._context = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **context: Any) -> "ContextLogger":
        """Return a new ContextLogger with ``context`` merged into this one's."""
        return ContextLogger(self._logger.name, {**self._context, **context})

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        extra = {**self._context, **(kwargs.pop("extra", None) or {})}
        self._logger.log(level, msg, *args, extra=extra, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.log(logging.CRITICAL, msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)


def get_logger(name: str, **context: Any) -> ContextLogger:
    """Get a ContextLogger for ``name`` with optional bound context."""
    return ContextLogger(name, context)


def setup_logging(
    level: int = logging.INFO,
    log_format: str = "text",
    log_file: str | None = None,
    static_fields: dict[str, Any] | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure root logging for the CLI.

    Replaces any existing root handlers with a console handler (stderr) and,
    if ``log_file`` is given, a file handler. File output never has colors.

    Args:
        level: Root log level
        log_format: "text" or "json"
        log_file: Optional path to also write logs to
        static_fields: Fields added to every JSON record
        stream: Console stream (defaults to stderr)
    """
    console_stream = stream or sys.stderr

    def make_formatter(colors: bool) -> logging.Formatter:
        if log_format == "json":
            return JSONFormatter(static_fields=static_fields)
        return TextFormatter(use_colors=colors)

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    console_handler = logging.StreamHandler(console_stream)
    console_handler.setFormatter(make_formatter(colors=console_stream.isatty()))
    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(make_formatter(colors=False))
        root.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
