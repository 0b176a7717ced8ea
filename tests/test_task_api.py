# tests/test_task_api.py

from __future__ import annotations

from datetime import timedelta

from agency_desk.clients.client_store import ClientStore
from agency_desk.tasks.task_api import create_task_action, edit_task_action, update_task_status_action
from agency_desk.tasks.task_models import TaskEdit, TaskPriority, TaskStatus
from agency_desk.tasks.task_store import TaskStore

from .conftest import NOW


class ExplodingStore:
    def __getattr__(self, name):
        raise AssertionError(f"store must not be touched ({name})")


def test_status_update_requires_id_and_status() -> None:
    res = update_task_status_action(ExplodingStore(), "", TaskStatus.COMPLETED)
    assert res.success is False
    assert res.error == "Task ID and new status are required."

    res = update_task_status_action(ExplodingStore(), "t1", None)
    assert res.error == "Task ID and new status are required."


def test_status_update_missing_task_is_soft_failure(task_store: TaskStore) -> None:
    res = update_task_status_action(task_store, "missing", TaskStatus.COMPLETED)
    assert res.success is False
    assert res.error == "Task missing not found."


def test_create_resolves_client_name(task_store: TaskStore, client_store: ClientStore) -> None:
    client_id = client_store.add_client(name="Clínica Sol")
    res = create_task_action(
        task_store,
        name="Post",
        assigned_to="u1",
        due_date=NOW,
        client_id=client_id,
        clients=client_store,
    )
    assert res.success is True
    task = task_store.get_task(res.id)
    assert task.client_name == "Clínica Sol"


def test_create_validates_before_store_access() -> None:
    assert create_task_action(ExplodingStore(), name="", assigned_to="u1", due_date=NOW).success is False
    assert create_task_action(ExplodingStore(), name="x", assigned_to="u1", due_date=None).success is False


def test_edit_task(task_store: TaskStore) -> None:
    task_id = task_store.add_task(name="x", assigned_to="u1", due_date=NOW)
    edit = TaskEdit(
        name="y",
        assigned_to="u2",
        due_date=NOW + timedelta(days=1),
        priority=TaskPriority.LOW,
        status=TaskStatus.IN_PROGRESS,
        alert_date=NOW + timedelta(hours=3),
    )

    res = edit_task_action(task_store, task_id, edit)
    assert res.success is True
    task = task_store.get_task(task_id)
    assert (task.name, task.assigned_to, task.status) == ("y", "u2", TaskStatus.IN_PROGRESS)
    assert task.alert_date == NOW + timedelta(hours=3)

    assert edit_task_action(task_store, "missing", edit).error == "Task missing not found."


def test_action_result_as_dict_omits_none(task_store: TaskStore) -> None:
    res = update_task_status_action(task_store, "missing", TaskStatus.COMPLETED)
    assert res.as_dict() == {"success": False, "error": "Task missing not found."}


def test_edit_requires_due_date_before_store_access(task_store: TaskStore) -> None:
    edit = TaskEdit(
        name="y",
        assigned_to="u1",
        due_date=None,
        priority=TaskPriority.MEDIUM,
        status=TaskStatus.PENDING,
    )
    res = edit_task_action(ExplodingStore(), "t1", edit)
    assert res.success is False
    assert res.error == "Due date is required."

    # The stored task keeps its due date, so it still shows up in due windows.
    task_id = task_store.add_task(name="x", assigned_to="u1", due_date=NOW)
    assert edit_task_action(task_store, task_id, edit).success is False
    assert task_store.get_task(task_id).due_date == NOW
    assert [t.id for t in task_store.list_due_tasks(now=NOW, horizon_days=0)] == [task_id]
