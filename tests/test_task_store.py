# tests/test_task_store.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from agency_desk.store.documents import DocumentStore
from agency_desk.tasks.task_models import TaskEdit, TaskPriority, TaskStatus
from agency_desk.tasks.task_store import TASKS_COLLECTION, TaskStore

from .conftest import NOW


def _add(store: TaskStore, name: str, due: datetime, **kw) -> str:
    return store.add_task(name=name, assigned_to="u1", due_date=due, **kw)


def _edit(**kw) -> TaskEdit:
    base = dict(
        name="Informe",
        assigned_to="u1",
        due_date=NOW + timedelta(days=1),
        priority=TaskPriority.HIGH,
        status=TaskStatus.PENDING,
    )
    base.update(kw)
    return TaskEdit(**base)


def test_add_and_get_task_roundtrip(task_store: TaskStore) -> None:
    due = datetime(2024, 5, 11, 0, 0, tzinfo=UTC)
    task_id = _add(task_store, "  Informe mensual ", due, priority=TaskPriority.HIGH, description="x")

    task = task_store.get_task(task_id)
    assert task is not None
    assert task.name == "Informe mensual"
    assert task.due_date == due
    assert task.priority is TaskPriority.HIGH
    assert task.status is TaskStatus.PENDING
    assert task.description == "x"
    assert task.created_at == NOW
    assert task.alert_date is None and task.alert_fired is False


def test_add_task_requires_name_and_due_date(task_store: TaskStore) -> None:
    with pytest.raises(ValueError):
        _add(task_store, " ", NOW)
    with pytest.raises(ValueError):
        task_store.add_task(name="x", assigned_to="u1", due_date=None)  # type: ignore[arg-type]


def test_update_task_rejects_missing_due_date(task_store: TaskStore, documents: DocumentStore) -> None:
    task_id = _add(task_store, "x", NOW)
    with pytest.raises(ValueError):
        task_store.update_task(task_id, _edit(due_date=None))

    assert documents.get(TASKS_COLLECTION, task_id).data["dueDate"] is not None
    assert task_store.get_task(task_id).due_date == NOW


def test_list_due_tasks_filters_orders_and_caps(task_store: TaskStore) -> None:
    tomorrow = NOW + timedelta(days=1)
    t1 = _add(task_store, "mañana", tomorrow)
    t2 = _add(task_store, "hoy", NOW - timedelta(hours=1), status=TaskStatus.IN_PROGRESS)
    _add(task_store, "hecha", NOW, status=TaskStatus.COMPLETED)
    _add(task_store, "lejos", NOW + timedelta(days=5))

    due = task_store.list_due_tasks(now=NOW, horizon_days=1)
    assert [t.id for t in due] == [t2, t1]

    capped = task_store.list_due_tasks(now=NOW, horizon_days=1, limit=1)
    assert [t.id for t in capped] == [t2]


def test_status_update_and_missing_task(task_store: TaskStore) -> None:
    task_id = _add(task_store, "x", NOW)
    task_store.update_task_status(task_id, TaskStatus.COMPLETED)
    assert task_store.get_task(task_id).status is TaskStatus.COMPLETED
    assert task_store.list_due_tasks(now=NOW, horizon_days=1) == []


def test_clearing_alert_removes_both_alert_fields(task_store: TaskStore, documents: DocumentStore) -> None:
    task_id = _add(task_store, "x", NOW, alert_date=NOW + timedelta(hours=2))
    raw = documents.get(TASKS_COLLECTION, task_id).data
    assert raw["alertFired"] is False

    task_store.update_task(task_id, _edit(alert_date=None))

    raw = documents.get(TASKS_COLLECTION, task_id).data
    assert "alertDate" not in raw
    assert "alertFired" not in raw


def test_changing_alert_resets_fired_flag(task_store: TaskStore, documents: DocumentStore) -> None:
    alert = NOW + timedelta(hours=2)
    task_id = _add(task_store, "x", NOW, alert_date=alert)
    task_store.mark_alerts_fired([task_id])

    # Same alert moment: the fired flag is left alone.
    task_store.update_task(task_id, _edit(alert_date=alert))
    assert documents.get(TASKS_COLLECTION, task_id).data["alertFired"] is True

    task_store.update_task(task_id, _edit(alert_date=alert + timedelta(hours=1)))
    task = task_store.get_task(task_id)
    assert task.alert_date == alert + timedelta(hours=1)
    assert task.alert_fired is False


def test_removing_client_and_description(task_store: TaskStore, documents: DocumentStore) -> None:
    task_id = _add(task_store, "x", NOW, client_id="c1", client_name="Clínica Sol", description="d")
    task_store.update_task(task_id, _edit(client_id=None, description=""))

    raw = documents.get(TASKS_COLLECTION, task_id).data
    assert "clientId" not in raw
    assert "clientName" not in raw
    assert "description" not in raw


def test_list_fired_alerts(task_store: TaskStore) -> None:
    past = _add(task_store, "past", NOW, alert_date=NOW - timedelta(minutes=5))
    _add(task_store, "future", NOW, alert_date=NOW + timedelta(minutes=5))
    _add(task_store, "none", NOW)
    done = _add(task_store, "done", NOW, alert_date=NOW - timedelta(minutes=10))
    task_store.mark_alerts_fired([done])

    assert [t.id for t in task_store.list_fired_alerts(now=NOW)] == [past]
