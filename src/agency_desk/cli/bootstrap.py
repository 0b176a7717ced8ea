# src/agency_desk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (store/LLM/tools/notifications/calendar).
"""

from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..assistant.tools import ToolContext, ToolRegistry, default_tools
from ..billing.invoice_store import InvoiceStore
from ..calendar_sync.google import build_calendar_gateway
from ..clients.client_store import ClientStore
from ..config import get_settings
from ..core.ports import LLMClient
from ..core.session import session_from_settings
from ..core.state import AppState
from ..llm.client import OpenRouterLLMClient
from ..llm.offline import OfflineLLMClient
from ..notifications.center import NotificationCenter
from ..store.documents import DocumentStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def resolve_time_zone(settings):
    name = str(getattr(settings, "time_zone", "") or "UTC")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone %r; falling back to UTC", name)
        return ZoneInfo("UTC")


def create_initial_state(*, settings=None, llm: LLMClient | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    tz = resolve_time_zone(settings)

    def clock() -> datetime:
        return datetime.now(tz)

    if llm is None:
        try:
            llm = OpenRouterLLMClient(settings)
        except Exception:
            # Fallback for demos / local runs without external services.
            logger.info("LLM not configured; using offline client.")
            llm = OfflineLLMClient()

    documents = DocumentStore(settings.store_db_path)
    task_store = TaskStore(documents)
    client_store = ClientStore(documents)
    invoice_store = InvoiceStore(documents)

    tools = ToolRegistry(
        ToolContext(
            tasks=task_store,
            clients=client_store,
            tz=tz,
            clock=clock,
            upcoming_horizon_days=int(getattr(settings, "upcoming_tool_horizon_days", 2)),
            upcoming_limit=int(getattr(settings, "upcoming_tool_limit", 5)),
        ),
        default_tools(),
    )

    # The session is read from `state` at refresh time (state is bound below).
    notifications = NotificationCenter(
        task_store,
        lambda: state.session,
        horizon_days=int(getattr(settings, "notification_horizon_days", 1)),
        limit=int(getattr(settings, "notification_limit", 0)) or None,
        clock=clock,
    )

    try:
        calendar = build_calendar_gateway(settings)
    except Exception:
        logger.exception("Calendar gateway setup failed; calendar sync disabled.")
        calendar = None

    state = AppState(
        settings=settings,
        llm=llm,
        documents=documents,
        task_store=task_store,
        client_store=client_store,
        invoice_store=invoice_store,
        notifications=notifications,
        tools=tools,
        session=session_from_settings(settings),
        calendar=calendar,
    )
    return state
