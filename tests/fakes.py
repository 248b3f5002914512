"""
In-memory task store used by the engine and CLI tests.

Follows the REST store's semantics: list returns the five most recent
incomplete tasks newest first, completing is idempotent, unknown ids give
"Task not found with id: N".
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

from todosync.core.domain.entities import Task, TaskId
from todosync.core.exceptions import ResourceNotFoundError
from todosync.core.ports.task_service import RECENT_TASKS_LIMIT, RemoteTaskServicePort


BASE_TIME = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


class FakeTaskService(RemoteTaskServicePort):
    """
    Remote task service double.

    Attributes:
        calls: (operation, argument) pairs in call order
        failures: operation name -> exception raised on the next call
        stale_lists: snapshots returned by the next list_recent calls
            instead of the real state (simulates a lagging read)
        gates: operation name -> asyncio.Event awaited before answering
    """

    def __init__(self) -> None:
        self.records: dict[int, Task] = {}
        self.calls: list[tuple[str, Any]] = []
        self.failures: dict[str, BaseException] = {}
        self.stale_lists: list[list[Task]] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.healthy = True
        self._next_id = 1

    @property
    def name(self) -> str:
        return "Fake"

    # -------------------------------------------------------------------------
    # Test helpers
    # -------------------------------------------------------------------------

    def seed(self, *titles: str) -> list[Task]:
        """Create tasks in order, so the last title is the newest."""
        return [self._insert(title, "") for title in titles]

    def fail_next(self, operation: str, error: BaseException) -> None:
        self.failures[operation] = error

    def calls_to(self, operation: str) -> list[Any]:
        return [arg for name, arg in self.calls if name == operation]

    def visible(self) -> list[Task]:
        incomplete = [task for task in self.records.values() if not task.completed]
        incomplete.sort(key=lambda task: task.created_at, reverse=True)
        return incomplete[:RECENT_TASKS_LIMIT]

    def _insert(self, title: str, description: str) -> Task:
        task_id = self._next_id
        self._next_id += 1
        task = Task(
            id=task_id,
            title=title,
            description=description,
            created_at=BASE_TIME + timedelta(minutes=task_id),
        )
        self.records[task_id] = task
        return task

    async def _enter(self, operation: str, argument: Any = None) -> None:
        self.calls.append((operation, argument))
        gate = self.gates.get(operation)
        if gate is not None:
            await gate.wait()
        error = self.failures.pop(operation, None)
        if error is not None:
            raise error

    def _require(self, task_id: TaskId) -> Task:
        task = self.records.get(task_id)  # type: ignore[arg-type]
        if task is None:
            raise ResourceNotFoundError(
                f"Not found: tasks/{task_id}",
                status_code=404,
                server_message=f"Task not found with id: {task_id}",
            )
        return task

    # -------------------------------------------------------------------------
    # RemoteTaskServicePort
    # -------------------------------------------------------------------------

    async def test_connection(self) -> bool:
        self.calls.append(("health", None))
        return self.healthy

    async def list_recent(self) -> list[Task]:
        await self._enter("list")
        if self.stale_lists:
            return list(self.stale_lists.pop(0))
        return self.visible()

    async def get_task(self, task_id: TaskId) -> Task:
        await self._enter("get", task_id)
        return self._require(task_id)

    async def create_task(self, title: str, description: str = "") -> Task:
        await self._enter("create", (title, description))
        return self._insert(title, description)

    async def complete_task(self, task_id: TaskId) -> Task:
        await self._enter("complete", task_id)
        task = self._require(task_id)
        completed = Task(
            id=task.id,
            title=task.title,
            description=task.description,
            created_at=task.created_at,
            completed=True,
            updated_at=BASE_TIME + timedelta(hours=1),
        )
        self.records[task.id] = completed
        return completed

    async def delete_task(self, task_id: TaskId) -> dict[str, Any]:
        await self._enter("delete", task_id)
        self._require(task_id)
        del self.records[task_id]  # type: ignore[arg-type]
        return {"success": True, "message": "Task deleted successfully", "data": None}
