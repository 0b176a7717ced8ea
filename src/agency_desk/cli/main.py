# src/agency_desk/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the notification bell once, then starts:
- the task-alert sweep in a background thread (optional),
- the console REPL in the main thread (optional).
"""

from __future__ import annotations

import asyncio
import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.alert_runner import AlertBackgroundRunner, start_alerts_in_background
from ..connectors.console_connector import ConsoleMessenger, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state, alert_runner: AlertBackgroundRunner | None) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    if alert_runner is not None:
        alert_runner.stop()
        alert_runner.join(timeout=10.0)

    # Late refresh responses are discarded once the center is closed.
    state.notifications.close()
    state.documents.close()

    calendar = getattr(state, "calendar", None)
    if calendar is not None and hasattr(calendar, "close"):
        try:
            calendar.close()
        except Exception:
            logger.debug("Calendar client close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/agency")
    log_file = setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s... (log: %s)", getattr(settings, "app_name", "agency"), log_file)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    asyncio.run(state.notifications.refresh())

    alert_runner = start_alerts_in_background(state, ConsoleMessenger())

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
        if not settings.console_enabled:
            signal.signal(signal.SIGINT, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Some platforms may not support SIGTERM, etc.
        pass

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Running task alerts only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        _shutdown(state, alert_runner)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
