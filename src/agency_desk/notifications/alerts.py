# src/agency_desk/notifications/alerts.py

from __future__ import annotations

"""
Task alert sweep.

A small polling loop that:
- fetches tasks whose alert moment has passed and that were not alerted yet,
- sends a reminder via an injected messenger port,
- marks the alert as fired only after a successful send.

A failed send leaves alertFired=False, so the next sweep tries again.
Transport (console, chat, ...) belongs to the connector, not the sweep.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..core.ports import OutboundMessenger
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def build_alert_text(task: Task, *, tz=None) -> str:
    due = ""
    if task.due_date is not None:
        due = f" (vence el {task.due_date.astimezone(tz).strftime('%d/%m/%Y')})"
    client = f" [{task.client_name}]" if task.client_name else ""
    name = task.name or "Tarea sin nombre"
    return f"Recordatorio: {name}{client}{due}"


async def run_alert_sweep_once(
    task_store: TaskStore,
    messenger: OutboundMessenger,
    *,
    now: datetime,
    tz=None,
) -> int:
    """Deliver every pending alert once; returns how many were marked fired."""
    try:
        tasks = await asyncio.to_thread(task_store.list_fired_alerts, now=now)
    except Exception:
        logger.exception("list_fired_alerts failed")
        return 0

    fired = 0
    for task in tasks:
        try:
            await messenger.send_text(text=build_alert_text(task, tz=tz), to_user_id=task.assigned_to or None)
        except Exception:
            logger.exception("alert send failed task_id=%s", task.id)
            continue

        try:
            await asyncio.to_thread(task_store.mark_alerts_fired, [task.id])
            fired += 1
            logger.info("Task %s alert fired", task.id)
        except Exception:
            logger.exception("mark_alerts_fired failed task_id=%s", task.id)

    return fired


async def run_alert_loop(
        task_store: TaskStore,
        messenger: OutboundMessenger,
        *,
        interval_seconds: float = 60.0,
        clock: Callable[[], datetime] | None = None,
        tz=None,
) -> None:
    """
    Simple polling loop around run_alert_sweep_once().

    To stop it, cancel the coroutine/task.
    """
    sleep_s = max(0.5, float(interval_seconds))

    while True:
        now = clock() if clock is not None else datetime.now(UTC)
        await run_alert_sweep_once(task_store, messenger, now=now, tz=tz)
        await asyncio.sleep(sleep_s)
