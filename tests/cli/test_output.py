"""
Tests for CLI output module.
"""

import json
from datetime import datetime

import pytest

from todosync.cli.output import Colors, Console, Symbols, format_timestamp, truncate
from todosync.core.domain import Task


@pytest.fixture
def tasks():
    return [
        Task(id=2, title="Walk the dog", created_at=datetime(2024, 1, 15, 11, 0)),
        Task(id=1, title="Buy milk", description="Semi-skimmed", created_at=datetime(2024, 1, 15, 10, 0)),
    ]


class TestConstants:
    def test_colors(self):
        assert Colors.RESET == "\033[0m"
        assert Colors.RED == "\033[31m"
        assert Colors.GREEN == "\033[32m"

    def test_symbols(self):
        assert Symbols.CHECK == "✓"
        assert Symbols.CROSS == "✗"


class TestHelpers:
    def test_format_timestamp(self, tasks):
        assert format_timestamp(tasks[0]) == "2024-01-15 11:00"
        assert format_timestamp(Task(id=3, title="No date")) == ""

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("a" * 20, 10) == "a" * 9 + "…"


class TestConsoleInit:
    def test_defaults(self):
        console = Console(color=False)

        assert console.verbose is False
        assert console.quiet is False
        assert console.json_mode is False

    def test_json_implies_quiet_and_no_color(self):
        console = Console(color=True, verbose=True, json_mode=True)

        assert console.quiet is True
        assert console.color is False
        assert console.verbose is False


class TestConsoleMessages:
    def test_success(self, capsys):
        Console(color=False).success("Created #1 Buy milk")
        assert "✓ Created #1 Buy milk" in capsys.readouterr().out

    def test_quiet_suppresses_info(self, capsys):
        console = Console(color=False, quiet=True)
        console.info("hidden")
        console.success("hidden")
        console.warning("hidden")

        assert capsys.readouterr().out == ""

    def test_error_goes_to_stderr_even_when_quiet(self, capsys):
        Console(color=False, quiet=True).error("Failed to load tasks")

        captured = capsys.readouterr()
        assert "Failed to load tasks" in captured.err
        assert captured.out == ""

    def test_error_json(self, capsys):
        Console(json_mode=True).error("Task not found with id: 9")

        payload = json.loads(capsys.readouterr().err)
        assert payload == {"success": False, "error": "Task not found with id: 9"}

    def test_config_errors(self, capsys):
        Console(color=False).config_errors(["service.timeout must be greater than 0"])

        err = capsys.readouterr().err
        assert "Configuration error" in err
        assert "service.timeout must be greater than 0" in err

    def test_debug_only_when_verbose(self, capsys):
        Console(color=False).debug("hidden")
        Console(color=False, verbose=True).debug("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[DEBUG] shown" in out

    def test_table(self, capsys):
        Console(color=False).table(["ID", "Title"], [["1", "Buy milk"], ["22", "Walk"]])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["ID", "Title"]
        assert lines[2].startswith("  1   Buy milk")


class TestTaskRendering:
    def test_task_list(self, capsys, tasks):
        Console(color=False).task_list(tasks)

        out = capsys.readouterr().out
        assert out.index("Walk the dog") < out.index("Buy milk")
        assert "Semi-skimmed" in out
        assert "2024-01-15 10:00" in out

    def test_task_list_prints_in_quiet_mode(self, capsys, tasks):
        Console(color=False, quiet=True).task_list(tasks)
        assert "Buy milk" in capsys.readouterr().out

    def test_empty_task_list(self, capsys):
        Console(color=False).task_list([])
        assert "No pending tasks" in capsys.readouterr().out

    def test_task_list_json(self, capsys, tasks):
        Console(json_mode=True).task_list(tasks)

        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert [task["id"] for task in payload["tasks"]] == [2, 1]

    def test_task_detail(self, capsys, tasks):
        Console(color=False).task_detail(tasks[1])

        out = capsys.readouterr().out
        assert "#1 Buy milk" in out
        assert "pending" in out
        assert "Semi-skimmed" in out

    def test_task_detail_json(self, capsys):
        Console(json_mode=True).task_detail(Task(id=5, title="Done", completed=True))

        payload = json.loads(capsys.readouterr().out)
        assert payload["task"]["completed"] is True

    def test_result(self, capsys):
        Console(color=False).result("Deleted task #3")
        assert "Deleted task #3" in capsys.readouterr().out

    def test_result_json(self, capsys):
        Console(json_mode=True).result("Deleted task #3", tasks=[])

        payload = json.loads(capsys.readouterr().out)
        assert payload == {"success": True, "message": "Deleted task #3", "tasks": []}
