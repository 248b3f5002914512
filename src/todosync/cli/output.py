"""
Output - Console output formatting for the todosync CLI.

Provides colored, human readable output and a JSON mode for scripting.
"""

import json
import sys
from collections.abc import Iterable
from typing import Any

from todosync.core.domain.entities import Task


class Colors:
    """
    ANSI color codes for terminal output.

    Attributes:
        RESET: Reset all formatting to default.
        BOLD: Make text bold.
        DIM: Make text dimmed/faded.
        RED: Red text color.
        GREEN: Green text color.
        YELLOW: Yellow text color.
        CYAN: Cyan text color.
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for terminal output."""

    CHECK = "✓"
    CROSS = "✗"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"


def format_timestamp(task: Task) -> str:
    """Short creation time for listings ("" if unknown)."""
    if task.created_at is None:
        return ""
    return task.created_at.strftime("%Y-%m-%d %H:%M")


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


class Console:
    """
    Console output helper with colors and formatting.

    Attributes:
        color: Whether to use ANSI color codes.
        verbose: Whether to print debug messages.
        quiet: Whether to suppress most output (for CI/scripting).
        json_mode: Whether to output JSON for programmatic use.
    """

    def __init__(
        self,
        color: bool = True,
        verbose: bool = False,
        quiet: bool = False,
        json_mode: bool = False,
    ):
        """
        Initialize the console output helper.

        Args:
            color: Enable colored output. Automatically disabled if stdout is not a TTY.
            verbose: Enable verbose debug output.
            quiet: Suppress most output, only show errors and results.
            json_mode: Output JSON instead of text.
        """
        self.json_mode = json_mode
        self.color = color and sys.stdout.isatty() and not json_mode
        self.verbose = verbose
        self.quiet = quiet or json_mode

        # Quiet mode overrides verbose
        if self.quiet:
            self.verbose = False

    def _c(self, text: str, *codes: str) -> str:
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "", force: bool = False) -> None:
        """
        Print text to stdout.

        Args:
            text: Text to print. Defaults to empty string for blank line.
            force: Print even in quiet mode.
        """
        if self.quiet and not force:
            return
        print(text)

    def success(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """
        Print an error message with cross symbol.

        Always prints (to stderr), even in quiet mode. In JSON mode the error
        is written as a JSON object instead.
        """
        if self.json_mode:
            self.emit_json({"success": False, "error": text}, stream=sys.stderr)
            return
        print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED), file=sys.stderr)

    def config_errors(self, errors: list[str]) -> None:
        """Print configuration errors with a hint on where settings come from."""
        if self.json_mode:
            self.emit_json({"success": False, "errors": errors}, stream=sys.stderr)
            return
        print(self._c(f"  {Symbols.CROSS} Configuration error(s):", Colors.RED), file=sys.stderr)
        for error in errors:
            print(f"    {Symbols.DOT} {error}", file=sys.stderr)
        print(
            self._c(
                "    Settings come from --api-url/--timeout flags, TODOSYNC_* variables, "
                ".env or .todosync.yaml",
                Colors.DIM,
            ),
            file=sys.stderr,
        )

    def warning(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def debug(self, text: str) -> None:
        """Print debug message (only visible in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))

    def table(self, headers: list[str], rows: list[list[str]], force: bool = False) -> None:
        """
        Print a formatted table with headers.

        Column widths are computed from the content.
        """
        if self.quiet and not force:
            return
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD) for i, h in enumerate(headers)
        )
        self.print(header_line, force=force)
        self.print("  " + "  ".join("-" * w for w in widths), force=force)

        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line.rstrip(), force=force)

    # -------------------------------------------------------------------------
    # Task Rendering
    # -------------------------------------------------------------------------

    def emit_json(self, payload: Any, stream: Any = None) -> None:
        print(json.dumps(payload, indent=2, default=str), file=stream or sys.stdout)

    def task_list(self, tasks: Iterable[Task]) -> None:
        """
        Print the visible tasks, newest first.

        Task lists are results, so they print in quiet mode too.
        """
        tasks = list(tasks)

        if self.json_mode:
            self.emit_json({"success": True, "tasks": [task.to_dict() for task in tasks]})
            return

        if not tasks:
            self.print("  No pending tasks", force=True)
            return

        rows = [
            [str(task.id), truncate(task.title, 40), truncate(task.description, 50), format_timestamp(task)]
            for task in tasks
        ]
        self.table(["ID", "Title", "Description", "Created"], rows, force=True)

    def task_detail(self, task: Task) -> None:
        """Print every field of a single task."""
        if self.json_mode:
            self.emit_json({"success": True, "task": task.to_dict()})
            return

        status = "completed" if task.completed else "pending"
        self.print(self._c(f"  {task}", Colors.BOLD), force=True)
        self.print(f"    Status:      {status}", force=True)
        if task.description:
            self.print(f"    Description: {task.description}", force=True)
        if task.created_at:
            self.print(f"    Created:     {task.created_at.isoformat()}", force=True)
        if task.updated_at:
            self.print(f"    Updated:     {task.updated_at.isoformat()}", force=True)

    def result(self, message: str, **data: Any) -> None:
        """Report a successful action (JSON object in JSON mode)."""
        if self.json_mode:
            self.emit_json({"success": True, "message": message, **data})
            return
        self.success(message)
