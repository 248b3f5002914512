"""
Tests for TaskStore.
"""

from todosync.application.sync import TaskStore
from todosync.core.domain import Task


def make_tasks(*ids):
    return [Task(id=task_id, title=f"Task {task_id}") for task_id in ids]


class TestTaskStoreReads:
    def test_empty(self):
        store = TaskStore()

        assert len(store) == 0
        assert store.tasks == ()
        assert store.ids == []
        assert store.version == 0

    def test_initial_tasks_keep_order(self):
        store = TaskStore(make_tasks(3, 2, 1))
        assert store.ids == [3, 2, 1]

    def test_get(self):
        store = TaskStore(make_tasks(3, 2, 1))

        assert store.get(2).title == "Task 2"
        assert store.get(99) is None

    def test_contains_by_id_and_task(self):
        tasks = make_tasks(1, 2)
        store = TaskStore(tasks)

        assert 1 in store
        assert tasks[1] in store
        assert 5 not in store

    def test_iteration_is_a_snapshot(self):
        store = TaskStore(make_tasks(1, 2, 3))

        seen = []
        for task in store:
            seen.append(task.id)
            store.remove_by_id(task.id)

        assert seen == [1, 2, 3]
        assert len(store) == 0

    def test_tasks_is_immutable_view(self):
        store = TaskStore(make_tasks(1))
        snapshot = store.tasks

        store.replace_all(make_tasks(2))

        assert [task.id for task in snapshot] == [1]


class TestTaskStoreMutations:
    def test_replace_all(self):
        store = TaskStore(make_tasks(1, 2))

        store.replace_all(make_tasks(5, 4, 3))

        assert store.ids == [5, 4, 3]
        assert store.version == 1

    def test_replace_all_does_not_trim(self):
        store = TaskStore()
        store.replace_all(make_tasks(*range(7)))
        assert len(store) == 7

    def test_replace_all_with_empty(self):
        store = TaskStore(make_tasks(1, 2))
        store.replace_all([])
        assert len(store) == 0

    def test_remove_by_id(self):
        store = TaskStore(make_tasks(3, 2, 1))

        removed = store.remove_by_id(2)

        assert removed.id == 2
        assert store.ids == [3, 1]
        assert store.version == 1

    def test_remove_missing_id_is_noop(self):
        store = TaskStore(make_tasks(1))

        assert store.remove_by_id(42) is None
        assert store.ids == [1]
        assert store.version == 0

    def test_string_ids(self):
        store = TaskStore([Task(id="a1", title="A")])

        assert store.remove_by_id("a1") is not None
        assert len(store) == 0

    def test_repr(self):
        assert repr(TaskStore(make_tasks(1))) == "TaskStore(ids=[1], version=0)"
