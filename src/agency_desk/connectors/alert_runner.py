# src/agency_desk/connectors/alert_runner.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass

from ..cli.bootstrap import resolve_time_zone
from ..core.ports import OutboundMessenger
from ..core.state import AppState
from ..notifications.alerts import run_alert_loop

logger = logging.getLogger(__name__)


async def _run_alerts(state: AppState, messenger: OutboundMessenger, stop_event: asyncio.Event) -> None:
    tz = resolve_time_zone(state.settings)
    interval = float(getattr(state.settings, "alert_poll_seconds", 60.0))

    loop_task = asyncio.create_task(
        run_alert_loop(state.task_store, messenger, interval_seconds=interval, tz=tz),
        name="alert-loop",
    )
    logger.info("Alert loop started (interval=%.1fs).", interval)

    try:
        await stop_event.wait()
    finally:
        loop_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await loop_task
        logger.info("Alert loop stopped.")


@dataclass
class AlertBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal alert loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_alerts_in_background(
    state: AppState,
    messenger: OutboundMessenger,
) -> AlertBackgroundRunner | None:
    """
    Run the task-alert sweep in a background thread with its own event loop,
    so the blocking console REPL can run in parallel.
    """
    if not getattr(state.settings, "alerts_enabled", True):
        logger.info("Task alerts disabled, not starting.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_alerts(state, messenger, stop_event))
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="agency-alerts", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Alert thread did not initialize properly.")
        return None

    logger.info("Alert background thread started.")
    return AlertBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
