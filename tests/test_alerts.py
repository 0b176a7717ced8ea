# tests/test_alerts.py

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from agency_desk.notifications.alerts import build_alert_text, run_alert_loop, run_alert_sweep_once
from agency_desk.tasks.task_models import Task, TaskPriority, TaskStatus

from .conftest import NOW
from .fakes import FakeMessenger


class FakeAlertRepo:
    """
    In-memory alert source for sweep unit tests.

    Avoids SQLite so the tests are purely about sweep logic:
    time gating, marking and messenger calls.
    """

    def __init__(self, tasks: list[Task]) -> None:
        self.tasks = {t.id: t for t in tasks}

    def list_fired_alerts(self, *, now: datetime) -> list[Task]:
        out = [
            t for t in self.tasks.values()
            if t.alert_date is not None and not t.alert_fired and t.alert_date <= now
        ]
        out.sort(key=lambda t: t.alert_date, reverse=True)
        return out

    def mark_alerts_fired(self, task_ids) -> int:
        n = 0
        for task_id in task_ids:
            self.tasks[task_id] = replace(self.tasks[task_id], alert_fired=True)
            n += 1
        return n


def _task(task_id: str, alert: datetime | None, **kw) -> Task:
    return Task(
        id=task_id,
        name=kw.pop("name", "Informe"),
        assigned_to="u1",
        due_date=datetime(2024, 5, 11, 0, 0, tzinfo=UTC),
        priority=TaskPriority.MEDIUM,
        status=TaskStatus.PENDING,
        alert_date=alert,
        **kw,
    )


def test_alert_text() -> None:
    task = _task("a", NOW, client_name="Clínica Sol")
    assert build_alert_text(task, tz=UTC) == "Recordatorio: Informe [Clínica Sol] (vence el 11/05/2024)"


@pytest.mark.asyncio
async def test_sweep_sends_due_alerts_once() -> None:
    repo = FakeAlertRepo([
        _task("due", NOW - timedelta(minutes=1)),
        _task("future", NOW + timedelta(minutes=1)),
        _task("none", None),
    ])
    messenger = FakeMessenger()

    assert await run_alert_sweep_once(repo, messenger, now=NOW, tz=UTC) == 1
    assert len(messenger.sent) == 1
    assert messenger.sent[0].to_user_id == "u1"
    assert repo.tasks["due"].alert_fired is True

    assert await run_alert_sweep_once(repo, messenger, now=NOW, tz=UTC) == 0
    assert len(messenger.sent) == 1


@pytest.mark.asyncio
async def test_failed_send_is_retried_next_sweep() -> None:
    repo = FakeAlertRepo([_task("due", NOW - timedelta(minutes=1))])
    messenger = FakeMessenger(fail_times=1)

    assert await run_alert_sweep_once(repo, messenger, now=NOW) == 0
    assert repo.tasks["due"].alert_fired is False

    assert await run_alert_sweep_once(repo, messenger, now=NOW) == 1
    assert repo.tasks["due"].alert_fired is True


@pytest.mark.asyncio
async def test_alert_loop_can_be_cancelled() -> None:
    repo = FakeAlertRepo([_task("due", NOW - timedelta(minutes=1))])
    messenger = FakeMessenger()

    loop_task = asyncio.create_task(
        run_alert_loop(repo, messenger, interval_seconds=0.5, clock=lambda: NOW)
    )
    for _ in range(50):
        if messenger.sent:
            break
        await asyncio.sleep(0.02)

    loop_task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await loop_task

    assert len(messenger.sent) == 1
