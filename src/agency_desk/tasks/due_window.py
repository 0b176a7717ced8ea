# src/agency_desk/tasks/due_window.py

"""
Due-window selection.

A due window is the inclusive range [start-of-day(now), end-of-day(now + horizon)].
Selection keeps tasks whose status is active and whose due date falls inside the
window, ordered by due date (ties broken by task id). Capping is a separate step.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import TypeVar

from .task_models import ACTIVE_STATUSES, Task, TaskStatus

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class DueWindow:
    start: datetime
    end: datetime

    def contains(self, when: datetime | None) -> bool:
        if when is None:
            return False
        return self.start <= when <= self.end


def start_of_day(dt: datetime) -> datetime:
    return datetime.combine(dt.date(), time.min, tzinfo=dt.tzinfo)


def end_of_day(dt: datetime) -> datetime:
    return datetime.combine(dt.date(), time.max, tzinfo=dt.tzinfo)


def compute_due_window(now: datetime, horizon_days: int) -> DueWindow:
    """
    Days are calendar days in now's time zone (pass an aware datetime).
    horizon_days=0 means "today only".
    """
    if horizon_days < 0:
        raise ValueError("horizon_days must be >= 0")
    return DueWindow(
        start=start_of_day(now),
        end=end_of_day(now + timedelta(days=int(horizon_days))),
    )


def select_due_tasks(
    tasks: Iterable[Task],
    window: DueWindow,
    statuses: Collection[TaskStatus] = ACTIVE_STATUSES,
) -> list[Task]:
    matches = [t for t in tasks if t.status in statuses and window.contains(t.due_date)]
    # due_date is not None for every match (contains() rejects None).
    matches.sort(key=lambda t: (t.due_date, t.id))
    return matches


def cap_results(items: Sequence[T], limit: int | None) -> list[T]:
    """First `limit` items in input order; None means unbounded."""
    if limit is None:
        return list(items)
    if limit <= 0:
        return []
    return list(items[:limit])
