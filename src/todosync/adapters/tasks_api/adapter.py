"""
Tasks API Adapter - Implements RemoteTaskServicePort for the REST task store.

Maps the generic port interface to the store's JSON payloads. The
underlying client is synchronous (requests); each call is run in a worker
thread so that the event loop stays free and several operations can be in
flight at once.
"""

import asyncio
import logging
from typing import Any

from todosync.core.domain.entities import Task, TaskId
from todosync.core.exceptions import RemoteError
from todosync.core.ports.config_provider import ServiceConfig
from todosync.core.ports.task_service import RemoteTaskServicePort

from .client import TasksApiClient


class TasksApiAdapter(RemoteTaskServicePort):
    """
    REST implementation of the RemoteTaskServicePort.

    Translates between Task entities and the store's JSON records.
    """

    def __init__(
        self,
        config: ServiceConfig,
        client: TasksApiClient | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            config: Task service configuration
            client: Pre-built API client (a new one is created if omitted)
        """
        self.config = config
        self.logger = logging.getLogger("TasksApiAdapter")

        self._client = client or TasksApiClient(
            url=config.url,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    # -------------------------------------------------------------------------
    # RemoteTaskServicePort Implementation - Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Tasks API"

    @property
    def client(self) -> TasksApiClient:
        return self._client

    async def test_connection(self) -> bool:
        return await asyncio.to_thread(self._client.test_connection)

    # -------------------------------------------------------------------------
    # RemoteTaskServicePort Implementation - Read Operations
    # -------------------------------------------------------------------------

    async def list_recent(self) -> list[Task]:
        records = await asyncio.to_thread(self._client.list_recent_tasks)
        return [self._parse_task(record) for record in records]

    async def get_task(self, task_id: TaskId) -> Task:
        record = await asyncio.to_thread(self._client.get_task, task_id)
        return self._parse_task(record)

    # -------------------------------------------------------------------------
    # RemoteTaskServicePort Implementation - Write Operations
    # -------------------------------------------------------------------------

    async def create_task(self, title: str, description: str = "") -> Task:
        record = await asyncio.to_thread(self._client.create_task, title, description)
        task = self._parse_task(record)
        self.logger.info(f"Created task {task.id}")
        return task

    async def complete_task(self, task_id: TaskId) -> Task:
        record = await asyncio.to_thread(self._client.complete_task, task_id)
        task = self._parse_task(record)
        self.logger.info(f"Completed task {task_id}")
        return task

    async def delete_task(self, task_id: TaskId) -> dict[str, Any]:
        confirmation = await asyncio.to_thread(self._client.delete_task, task_id)
        self.logger.info(f"Deleted task {task_id}")
        return confirmation

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _parse_task(self, record: Any) -> Task:
        """Convert a store record into a Task."""
        if not isinstance(record, dict):
            raise RemoteError(f"Malformed task record from store: {record!r}")
        try:
            return Task.from_dict(record)
        except (TypeError, ValueError) as e:
            raise RemoteError(f"Malformed task record from store: {record!r}", cause=e) from e

    # -------------------------------------------------------------------------
    # Resource Cleanup
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self._client.close()
