# src/agency_desk/notifications/center.py

"""
Notification state holder.

Session-scoped cache bridging the due-window selector to the notification
badge/list. Owned by AppState and passed explicitly to consumers; refresh()
and acknowledge() are the only mutators.

Contract:
- refresh() with no session clears everything.
- refresh() replaces results wholesale and sets unread_count = len(results).
- a failed fetch degrades to "no notifications" (results empty, unread 0),
  is logged, and is exposed through last_error rather than raised.
- acknowledge() zeroes unread_count and leaves results in place; nothing is
  persisted, so the next refresh() restores the count if the tasks still match.
- concurrent refresh() calls are not serialized, but only the newest request
  may publish its result (older responses are dropped).
- after close(), late responses do not touch state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Collection
from datetime import datetime

from ..core.ports import DueTaskSource
from ..core.session import Session
from ..tasks.task_models import ACTIVE_STATUSES, Task, TaskStatus

logger = logging.getLogger(__name__)

SessionProvider = Callable[[], Session | None]
Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


class NotificationCenter:
    def __init__(
        self,
        task_source: DueTaskSource,
        session_provider: SessionProvider,
        *,
        horizon_days: int = 1,
        statuses: Collection[TaskStatus] = ACTIVE_STATUSES,
        limit: int | None = None,
        clock: Clock = _local_now,
    ) -> None:
        if horizon_days < 0:
            raise ValueError("horizon_days must be >= 0")
        self._source = task_source
        self._session_provider = session_provider
        self._horizon_days = int(horizon_days)
        self._statuses = frozenset(statuses)
        self._limit = limit if limit else None
        self._clock = clock

        self._results: tuple[Task, ...] = ()
        self._unread_count = 0
        self._last_error: str | None = None

        self._seq = 0
        self._in_flight = 0
        self._closed = False

    # ---- read-only state ----

    @property
    def results(self) -> tuple[Task, ...]:
        return self._results

    @property
    def unread_count(self) -> int:
        return self._unread_count

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def closed(self) -> bool:
        return self._closed

    # ---- mutators ----

    def _publish(self, results: list[Task] | tuple[Task, ...], error: str | None) -> None:
        self._results = tuple(results)
        self._unread_count = len(self._results)
        self._last_error = error

    async def refresh(self) -> None:
        if self._closed:
            return

        self._seq += 1
        seq = self._seq

        if self._session_provider() is None:
            self._publish((), None)
            return

        self._in_flight += 1
        try:
            now = self._clock()
            fetched = await asyncio.to_thread(
                self._source.list_due_tasks,
                now=now,
                horizon_days=self._horizon_days,
                statuses=self._statuses,
                limit=self._limit,
            )
        except Exception as e:
            logger.exception("Error fetching notifications")
            if self._closed or seq != self._seq:
                return
            self._publish((), str(e) or e.__class__.__name__)
            return
        finally:
            self._in_flight -= 1

        if self._closed:
            logger.debug("Notification refresh #%s finished after close; dropped", seq)
            return
        if seq != self._seq:
            logger.debug("Stale notification refresh #%s dropped (latest=#%s)", seq, self._seq)
            return

        self._publish(fetched, None)
        logger.debug("Notifications refreshed: %d due", len(self._results))

    def acknowledge(self) -> None:
        self._unread_count = 0

    def close(self) -> None:
        self._closed = True
