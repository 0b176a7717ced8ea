# src/agency_desk/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..store.timestamps import RecordSchema, as_datetime


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Transitions are free-form: any status may follow any other.
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Lenient user-input parser ("pending", "in_progress", "in-progress", "completed")."""
        key = (raw or "").strip().lower().replace("_", " ").replace("-", " ")
        for status in cls:
            if status.value.lower() == key or status.name.lower().replace("_", " ") == key:
                return status
        raise ValueError(f"unknown task status: {raw!r}")


class TaskPriority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


# Not-yet-finished statuses.
ACTIVE_STATUSES: frozenset[TaskStatus] = frozenset({TaskStatus.PENDING, TaskStatus.IN_PROGRESS})

TASK_SCHEMA = RecordSchema(
    fields={
        "dueDate": as_datetime,
        "alertDate": as_datetime,
        "createdAt": as_datetime,
        "updatedAt": as_datetime,
    }
)


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _opt_dt(value: Any) -> datetime | None:
    return value if isinstance(value, datetime) else None


@dataclass(slots=True)
class Task:
    id: str
    name: str
    assigned_to: str
    due_date: datetime | None
    priority: TaskPriority
    status: TaskStatus

    description: str | None = None
    client_id: str | None = None
    client_name: str | None = None

    alert_date: datetime | None = None
    alert_fired: bool = False

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Task:
        """Build a Task from a raw store document (timestamps decoded via TASK_SCHEMA)."""
        d = TASK_SCHEMA.decode(data)
        return cls(
            id=str(doc_id),
            name=str(d.get("name") or ""),
            assigned_to=str(d.get("assignedTo") or ""),
            due_date=_opt_dt(d.get("dueDate")),
            priority=TaskPriority.from_db(d.get("priority")),
            status=TaskStatus.from_db(d.get("status")),
            description=_opt_str(d.get("description")),
            client_id=_opt_str(d.get("clientId")),
            client_name=_opt_str(d.get("clientName")),
            alert_date=_opt_dt(d.get("alertDate")),
            alert_fired=bool(d.get("alertFired", False)),
            created_at=_opt_dt(d.get("createdAt")),
            updated_at=_opt_dt(d.get("updatedAt")),
        )


@dataclass(slots=True, frozen=True)
class TaskEdit:
    """
    Full edit-form submission for an existing task.

    alert_date=None means "no alert" (an existing alert is cleared).
    client_id=None means "no client" (clientId/clientName are removed).
    """

    name: str
    assigned_to: str
    due_date: datetime | None
    priority: TaskPriority
    status: TaskStatus
    description: str | None = None
    client_id: str | None = None
    client_name: str | None = None
    alert_date: datetime | None = None
