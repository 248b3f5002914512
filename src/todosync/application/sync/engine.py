"""
Sync Engine - Keeps the local TaskStore consistent with the remote store.

Every mutating operation runs in three steps:

1. tentative: apply the local effect right away (complete/delete only)
2. confirm: send the request to the remote store
3. reconcile: replace the TaskStore with a fresh snapshot from the store

On failure the tentative effect is undone by a corrective refresh and the
error is both raised and kept as a displayable message in ``error``.

Several operations may be in flight on the same event loop. Callers must not
issue two mutating operations for the same task id at once; operations on
different ids are independent and the last reconciliation to land wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from todosync.core.domain.entities import Task, TaskId
from todosync.core.exceptions import (
    NetworkError,
    RemoteError,
    TodoSyncError,
    ValidationError,
)
from todosync.core.ports.task_service import RECENT_TASKS_LIMIT, RemoteTaskServicePort

from .store import TaskStore


TITLE_REQUIRED = "Title is required"
LOAD_FAILED = "Failed to load tasks"
LOAD_TASK_FAILED = "Failed to load task"
CREATE_FAILED = "Failed to create task"
COMPLETE_FAILED = "Failed to complete task"
DELETE_FAILED = "Failed to delete task"


def display_message(error: BaseException, fallback: str) -> str:
    """
    Message to show the user for ``error``.

    The store's own message wins; local validation messages are shown as is;
    anything else (network failures, bodies without a message) gets the
    operation's fallback.
    """
    if isinstance(error, RemoteError) and error.server_message:
        return error.server_message
    if isinstance(error, ValidationError):
        return error.message
    return fallback


class SyncEngine:
    """
    Sole mutator of the TaskStore.

    Args:
        service: The remote task store
        store: TaskStore to own (a new empty one if omitted)
        settle_delay: Seconds to wait after a confirmed complete/delete
            before reconciling
    """

    WINDOW_SIZE = RECENT_TASKS_LIMIT

    def __init__(
        self,
        service: RemoteTaskServicePort,
        store: TaskStore | None = None,
        settle_delay: float = 0.0,
    ):
        self._service = service
        self._store = store if store is not None else TaskStore()
        self.settle_delay = settle_delay
        self._error = ""
        self.logger = logging.getLogger("SyncEngine")

    # -------------------------------------------------------------------------
    # Read Access
    # -------------------------------------------------------------------------

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._store.tasks

    @property
    def error(self) -> str:
        """Displayable message of the last failure ("" after a success)."""
        return self._error

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def refresh(self) -> tuple[Task, ...]:
        """
        Replace the TaskStore with the store's current recent tasks.

        On error the TaskStore is left untouched and the error is raised.
        """
        return await self._reconcile()

    async def create_task(self, title: str, description: str = "") -> Task:
        """
        Create a task and reconcile so it shows up in server order.

        Raises:
            ValidationError: If the title is blank (nothing is sent)
            NetworkError, RemoteError: If the store rejected or missed the
                request; the TaskStore is left untouched
        """
        title = (title or "").strip()
        if not title:
            self._error = TITLE_REQUIRED
            raise ValidationError(TITLE_REQUIRED, field="title")

        try:
            created = await self._service.create_task(title, (description or "").strip())
        except (NetworkError, RemoteError) as e:
            self._fail(e, CREATE_FAILED)
            raise

        self.logger.info(f"Created task {created.id}")

        try:
            await self._reconcile()
        except (NetworkError, RemoteError):
            # The task exists remotely; the next refresh will show it.
            self.logger.warning(f"Task {created.id} created but the list could not be reloaded")

        return created

    async def complete_task(self, task_id: TaskId) -> Task:
        """Remove the task locally, then mark it completed in the store."""
        return await self._remove_then_confirm(
            task_id, "complete", self._service.complete_task, COMPLETE_FAILED
        )

    async def delete_task(self, task_id: TaskId) -> dict[str, Any]:
        """Remove the task locally, then delete it in the store."""
        return await self._remove_then_confirm(
            task_id, "delete", self._service.delete_task, DELETE_FAILED
        )

    async def get_task(self, task_id: TaskId) -> Task:
        """Fetch a single task from the store. Does not touch the TaskStore."""
        try:
            return await self._service.get_task(task_id)
        except (NetworkError, RemoteError) as e:
            self._fail(e, LOAD_TASK_FAILED)
            raise

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    async def _remove_then_confirm(
        self,
        task_id: TaskId,
        operation: str,
        send: Callable[[TaskId], Awaitable[Any]],
        fallback: str,
    ) -> Any:
        removed = self._store.remove_by_id(task_id)
        if removed is None:
            self.logger.debug(f"{operation}: task {task_id} was not visible locally")

        try:
            result = await send(task_id)
        except (NetworkError, RemoteError) as e:
            message = self._fail(e, fallback)
            await self._corrective_refresh(task_id)
            self._error = message
            raise

        self.logger.info(f"Confirmed {operation} of task {task_id}")

        if self.settle_delay > 0:
            await asyncio.sleep(self.settle_delay)

        try:
            # The confirmed id stays out even if a lagging snapshot still lists it.
            await self._reconcile(exclude=task_id)
        except (NetworkError, RemoteError):
            self.logger.warning(
                f"Task {task_id} {operation}d but the list could not be reloaded"
            )

        return result

    async def _corrective_refresh(self, task_id: TaskId) -> None:
        try:
            await self._reconcile()
        except (NetworkError, RemoteError) as e:
            self.logger.warning(
                f"Corrective refresh after failed change to task {task_id} failed: {e}"
            )

    async def _reconcile(self, exclude: TaskId | None = None) -> tuple[Task, ...]:
        try:
            snapshot = await self._service.list_recent()
        except (NetworkError, RemoteError) as e:
            self._fail(e, LOAD_FAILED)
            raise

        visible = [
            task for task in snapshot if not task.completed and (exclude is None or task.id != exclude)
        ]
        if len(visible) != len(snapshot):
            self.logger.debug(f"Dropped {len(snapshot) - len(visible)} task(s) from snapshot")
        if len(visible) > self.WINDOW_SIZE:
            self.logger.warning(
                f"Store returned {len(visible)} tasks, more than the {self.WINDOW_SIZE}-task window"
            )

        self._store.replace_all(visible)
        self._error = ""
        return self._store.tasks

    def _fail(self, error: TodoSyncError, fallback: str) -> str:
        message = display_message(error, fallback)
        self._error = message
        self.logger.error(f"{fallback}: {error}")
        return message
