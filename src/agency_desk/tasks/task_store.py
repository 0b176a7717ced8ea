# src/agency_desk/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from datetime import datetime
from typing import Any

from ..store.documents import DELETE_FIELD, SERVER_TIMESTAMP, DocumentStore
from .due_window import cap_results, compute_due_window, select_due_tasks
from .task_models import ACTIVE_STATUSES, Task, TaskEdit, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

TASKS_COLLECTION = "tasks"


def _same_instant(a: datetime | None, b: datetime | None) -> bool:
    if a is None or b is None:
        return a is b
    return a == b


class TaskStore:
    """
    Task access over the "tasks" document collection.

    Wire field names are camelCase (dueDate, assignedTo, alertFired, ...);
    Task objects use snake_case attributes.
    """

    def __init__(self, documents: DocumentStore) -> None:
        self._docs = documents
        try:
            total = self.count_tasks()
        except Exception:
            total = -1
        logger.info("TaskStore ready total=%s", total)

    # ---- reads ----

    def count_tasks(self) -> int:
        return self._docs.count(TASKS_COLLECTION)

    def get_task(self, task_id: str) -> Task | None:
        doc = self._docs.get(TASKS_COLLECTION, task_id)
        return Task.from_document(doc.id, doc.data) if doc else None

    def list_tasks(self, *, statuses: Iterable[TaskStatus] | None = None) -> list[Task]:
        """All tasks (optionally restricted to some statuses), ordered by due date then id."""
        if statuses is None:
            docs = self._docs.query(TASKS_COLLECTION)
        else:
            docs = self._docs.query(TASKS_COLLECTION, any_of={"status": [str(s) for s in statuses]})
        tasks = [Task.from_document(d.id, d.data) for d in docs]
        tasks.sort(key=lambda t: (t.due_date is None, t.due_date or datetime.min, t.id))
        return tasks

    def list_due_tasks(
        self,
        *,
        now: datetime,
        horizon_days: int,
        statuses: Collection[TaskStatus] = ACTIVE_STATUSES,
        limit: int | None = None,
    ) -> list[Task]:
        """
        Tasks with status in `statuses` whose due date is inside the due window
        [start-of-day(now), end-of-day(now + horizon_days)], earliest first, capped at `limit`.
        """
        if now.tzinfo is None:
            now = now.astimezone()
        window = compute_due_window(now, horizon_days)
        docs = self._docs.query(TASKS_COLLECTION, any_of={"status": [str(s) for s in statuses]})
        tasks = [Task.from_document(d.id, d.data) for d in docs]
        selected = select_due_tasks(tasks, window, statuses)
        return cap_results(selected, limit)

    def list_fired_alerts(self, *, now: datetime) -> list[Task]:
        """Tasks whose alert moment has passed and that were not yet alerted, most recent first."""
        docs = self._docs.query(TASKS_COLLECTION, equals={"alertFired": False})
        out: list[Task] = []
        for d in docs:
            task = Task.from_document(d.id, d.data)
            if task.alert_date is not None and task.alert_date <= now:
                out.append(task)
        out.sort(key=lambda t: (t.alert_date, t.id), reverse=True)
        return out

    # ---- writes ----

    def add_task(
        self,
        *,
        name: str,
        assigned_to: str,
        due_date: datetime,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.PENDING,
        description: str | None = None,
        client_id: str | None = None,
        client_name: str | None = None,
        alert_date: datetime | None = None,
    ) -> str:
        if not name or not name.strip():
            raise ValueError("name is required")
        if due_date is None:
            raise ValueError("due_date is required")

        data: dict[str, Any] = {
            "name": name.strip(),
            "assignedTo": (assigned_to or "").strip(),
            "dueDate": due_date,
            "priority": str(priority),
            "status": str(status),
            "createdAt": SERVER_TIMESTAMP,
            "updatedAt": SERVER_TIMESTAMP,
        }
        if description and description.strip():
            data["description"] = description.strip()
        if client_id:
            data["clientId"] = client_id
            if client_name:
                data["clientName"] = client_name
        if alert_date is not None:
            data["alertDate"] = alert_date
            data["alertFired"] = False

        task_id = self._docs.add(TASKS_COLLECTION, data)
        logger.debug("Task added id=%s status=%s due=%s", task_id, status.value, due_date.isoformat())
        return task_id

    def update_task_status(self, task_id: str, new_status: TaskStatus) -> None:
        self._docs.update(
            TASKS_COLLECTION,
            task_id,
            {"status": str(new_status), "updatedAt": SERVER_TIMESTAMP},
        )

    def update_task(self, task_id: str, edit: TaskEdit, *, previous: Task | None = None) -> None:
        """
        Apply an edit-form submission.

        - clientId/clientName are both removed when no client is selected
        - description is removed when empty
        - alertDate/alertFired are both removed when the alert is cleared;
          alertFired is reset to False whenever the alert date is newly set or changed
        """
        if not edit.name or not edit.name.strip():
            raise ValueError("name is required")
        if edit.due_date is None:
            raise ValueError("due_date is required")

        if previous is None:
            previous = self.get_task(task_id)

        fields: dict[str, Any] = {
            "name": edit.name.strip(),
            "assignedTo": (edit.assigned_to or "").strip(),
            "dueDate": edit.due_date,
            "priority": str(edit.priority),
            "status": str(edit.status),
            "updatedAt": SERVER_TIMESTAMP,
        }

        if edit.description and edit.description.strip():
            fields["description"] = edit.description.strip()
        else:
            fields["description"] = DELETE_FIELD

        if edit.client_id:
            fields["clientId"] = edit.client_id
            fields["clientName"] = edit.client_name if edit.client_name else DELETE_FIELD
        else:
            fields["clientId"] = DELETE_FIELD
            fields["clientName"] = DELETE_FIELD

        prev_alert = previous.alert_date if previous is not None else None
        if edit.alert_date is None:
            fields["alertDate"] = DELETE_FIELD
            fields["alertFired"] = DELETE_FIELD
        elif not _same_instant(prev_alert, edit.alert_date):
            fields["alertDate"] = edit.alert_date
            fields["alertFired"] = False

        self._docs.update(TASKS_COLLECTION, task_id, fields)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))

    def mark_alerts_fired(self, task_ids: Iterable[str]) -> int:
        n = 0
        for task_id in task_ids:
            self._docs.update(TASKS_COLLECTION, task_id, {"alertFired": True})
            n += 1
        return n
