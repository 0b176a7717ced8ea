# src/agency_desk/tasks/task_api.py

"""
Result-shaped task actions used by the CLI and the assistant.

Invalid invocations are rejected before any store access; store failures are
logged and reported as ActionResult(success=False, ...), never raised.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from ..clients.client_store import ClientStore
from ..core.results import ActionResult
from ..store.documents import DocumentNotFound
from .task_models import TaskEdit, TaskPriority, TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _resolve_client_name(clients: ClientStore | None, client_id: str | None) -> str | None:
    if not client_id or clients is None:
        return None
    try:
        client = clients.get_client(client_id)
    except Exception:
        logger.exception("Client lookup failed client_id=%s", client_id)
        return None
    return client.name if client else None


def create_task_action(
    tasks: TaskStore,
    *,
    name: str,
    assigned_to: str,
    due_date: datetime | None,
    priority: TaskPriority = TaskPriority.MEDIUM,
    status: TaskStatus = TaskStatus.PENDING,
    description: str | None = None,
    client_id: str | None = None,
    alert_date: datetime | None = None,
    clients: ClientStore | None = None,
) -> ActionResult:
    if not name or not name.strip():
        return ActionResult.fail("Task name is required.")
    if due_date is None:
        return ActionResult.fail("Due date is required.")

    client_name = _resolve_client_name(clients, client_id)

    try:
        task_id = tasks.add_task(
            name=name,
            assigned_to=assigned_to,
            due_date=due_date,
            priority=priority,
            status=status,
            description=description,
            client_id=client_id,
            client_name=client_name,
            alert_date=alert_date,
        )
    except Exception as e:
        logger.exception("create_task_action failed")
        return ActionResult.fail(str(e) or "Failed to create task.")

    logger.info("Task created id=%s", task_id)
    return ActionResult.ok("Task created.", id=task_id)


def edit_task_action(
    tasks: TaskStore,
    task_id: str,
    edit: TaskEdit,
    *,
    clients: ClientStore | None = None,
) -> ActionResult:
    if not task_id:
        return ActionResult.fail("Task ID is required.")
    if not edit.name or not edit.name.strip():
        return ActionResult.fail("Task name is required.")
    if edit.due_date is None:
        return ActionResult.fail("Due date is required.")

    if edit.client_id and not edit.client_name:
        resolved = _resolve_client_name(clients, edit.client_id)
        if resolved:
            edit = replace(edit, client_name=resolved)

    try:
        previous = tasks.get_task(task_id)
        if previous is None:
            return ActionResult.fail(f"Task {task_id} not found.")
        tasks.update_task(task_id, edit, previous=previous)
    except Exception as e:
        logger.exception("edit_task_action failed task_id=%s", task_id)
        return ActionResult.fail(str(e) or "Failed to update task.")

    logger.info("Task %s updated", task_id)
    return ActionResult.ok("Task updated.", id=task_id)


def update_task_status_action(tasks: TaskStore, task_id: str, new_status: TaskStatus | None) -> ActionResult:
    if not task_id or not new_status:
        return ActionResult.fail("Task ID and new status are required.")

    try:
        tasks.update_task_status(task_id, new_status)
    except DocumentNotFound:
        return ActionResult.fail(f"Task {task_id} not found.")
    except Exception as e:
        logger.exception("Error updating task status task_id=%s", task_id)
        return ActionResult.fail(str(e) or "Failed to update task status.")

    logger.info("Task %s status updated to %s", task_id, new_status)
    return ActionResult.ok(id=task_id)
