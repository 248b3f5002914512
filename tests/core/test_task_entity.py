"""
Tests for the Task entity and timestamp parsing.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from todosync.core.domain import Task, parse_timestamp


class TestParseTimestamp:
    def test_naive_iso(self):
        assert parse_timestamp("2024-01-15T10:30:00") == datetime(2024, 1, 15, 10, 30)

    def test_z_suffix(self):
        parsed = parse_timestamp("2024-01-15T10:30:00Z")
        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_offset(self):
        parsed = parse_timestamp("2024-01-15T10:30:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_datetime_passthrough(self):
        now = datetime(2024, 1, 1)
        assert parse_timestamp(now) is now

    @pytest.mark.parametrize("value", [None, "", "not a date", 12345])
    def test_invalid_returns_none(self, value):
        assert parse_timestamp(value) is None


class TestTaskFromDict:
    def test_camel_case_payload(self, task_payload):
        task = Task.from_dict(task_payload)

        assert task.id == 1
        assert task.title == "Buy books"
        assert task.description == "For the new term"
        assert task.completed is False
        assert task.created_at == datetime(2024, 1, 15, 10, 30)
        assert task.updated_at == datetime(2024, 1, 15, 10, 30)

    def test_snake_case_payload(self):
        task = Task.from_dict(
            {"id": 2, "title": "Walk", "created_at": "2024-01-15T10:30:00", "completed": True}
        )

        assert task.created_at == datetime(2024, 1, 15, 10, 30)
        assert task.completed is True

    def test_missing_optional_fields(self):
        task = Task.from_dict({"id": 3, "title": "Minimal"})

        assert task.description == ""
        assert task.created_at is None
        assert task.updated_at is None
        assert task.completed is False

    def test_null_description_becomes_empty(self):
        task = Task.from_dict({"id": 3, "title": "T", "description": None})
        assert task.description == ""

    def test_missing_id_raises(self):
        with pytest.raises(ValueError, match="id"):
            Task.from_dict({"title": "No id"})


class TestTask:
    def test_is_immutable(self):
        task = Task(id=1, title="Frozen")
        with pytest.raises(FrozenInstanceError):
            task.title = "Changed"  # type: ignore[misc]

    def test_to_dict_round_trips(self, task_payload):
        task = Task.from_dict(task_payload)
        data = task.to_dict()

        assert data["createdAt"] == "2024-01-15T10:30:00"
        assert Task.from_dict(data) == task

    def test_to_dict_without_timestamps(self):
        data = Task(id=5, title="T").to_dict()
        assert data["createdAt"] is None
        assert data["updatedAt"] is None

    def test_str(self):
        assert str(Task(id=7, title="Read")) == "#7 Read"

    def test_equality_by_value(self):
        assert Task(id=1, title="A") == Task(id=1, title="A")
        assert Task(id=1, title="A") != Task(id=1, title="B")
