"""
Domain Entities - Objects with identity that persist over time.

A Task is identified by the id the remote store assigns to it. Tasks are
immutable on the client: a change in the store is observed by replacing
the whole entity on the next reconciliation, never by mutating fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


TaskId = int | str


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a timestamp sent by the store.

    Accepts ISO-8601 strings (with or without offset, ``Z`` suffix included)
    and datetime instances. Returns None for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class Task:
    """
    A task as held by the client.

    ``id`` and ``created_at`` are assigned by the store and never change.
    Every task visible in the TaskStore has ``completed == False``; the
    field is kept so responses from the complete operation can be checked.
    """

    id: TaskId
    title: str
    description: str = ""
    created_at: datetime | None = None
    completed: bool = False
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Build a Task from a store payload.

        Accepts the camelCase keys of the REST contract as well as the
        snake_case keys produced by ``to_dict``.
        """
        if "id" not in data or data["id"] is None:
            raise ValueError("Task payload is missing 'id'")

        created = data.get("createdAt", data.get("created_at"))
        updated = data.get("updatedAt", data.get("updated_at"))

        return cls(
            id=data["id"],
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            created_at=parse_timestamp(created),
            completed=bool(data.get("completed", False)),
            updated_at=parse_timestamp(updated),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a wire-style dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "completed": self.completed,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self) -> str:
        return f"#{self.id} {self.title}"
