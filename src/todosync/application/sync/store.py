"""
Task Store - In-memory ordered view of the visible tasks.

A plain state container: it holds what the presentation layer shows and
offers exactly two mutations, both used only by the SyncEngine. Ordering is
whatever the remote store returned; nothing here sorts or trims.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from todosync.core.domain.entities import Task, TaskId


class TaskStore:
    """
    Ordered sequence of visible tasks, newest first.

    ``version`` increases on every change so readers can cheaply tell
    whether they need to re-render.
    """

    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: list[Task] = list(tasks)
        self._version = 0

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the current tasks."""
        return tuple(self._tasks)

    @property
    def ids(self) -> list[TaskId]:
        return [task.id for task in self._tasks]

    @property
    def version(self) -> int:
        return self._version

    def get(self, task_id: TaskId) -> Task | None:
        """Find a visible task by id."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Replace the whole contents with ``tasks``, keeping their order."""
        self._tasks = list(tasks)
        self._version += 1

    def remove_by_id(self, task_id: TaskId) -> Task | None:
        """
        Remove the task with ``task_id``.

        Returns:
            The removed task, or None if it wasn't present
        """
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                self._version += 1
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Task):
            item = item.id
        return any(task.id == item for task in self._tasks)

    def __repr__(self) -> str:
        return f"TaskStore(ids={self.ids!r}, version={self._version})"
