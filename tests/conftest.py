# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from agency_desk.assistant.tools import ToolContext, ToolRegistry, default_tools
from agency_desk.billing.invoice_store import InvoiceStore
from agency_desk.clients.client_store import ClientStore
from agency_desk.core.session import Session
from agency_desk.core.state import AppState
from agency_desk.notifications.center import NotificationCenter
from agency_desk.store.documents import DocumentStore
from agency_desk.tasks.task_store import TaskStore

from .fakes import FakeLLMClient

# Fixed "now" used across tests: Friday 2024-05-10 09:00 UTC.
NOW = datetime(2024, 5, 10, 9, 0, tzinfo=UTC)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="agency-test",
        time_zone="UTC",
        data_dir=tmp_path,
        store_db_path=tmp_path / "agency.sqlite3",
        session_user_id="u1",
        session_display_name="Dr. Test",
        llm_models=["test/model"],
        llm_max_tool_rounds=4,
        notification_horizon_days=1,
        notification_limit=0,
        upcoming_tool_horizon_days=2,
        upcoming_tool_limit=5,
        alert_poll_seconds=60.0,
        alerts_enabled=False,
        calendar_access_token=None,
        calendar_reminder_minutes=10,
    )


@pytest.fixture()
def documents(settings: SimpleNamespace) -> DocumentStore:
    return DocumentStore(settings.store_db_path, clock=lambda: NOW)


@pytest.fixture()
def task_store(documents: DocumentStore) -> TaskStore:
    return TaskStore(documents)


@pytest.fixture()
def client_store(documents: DocumentStore) -> ClientStore:
    return ClientStore(documents)


@pytest.fixture()
def invoice_store(documents: DocumentStore) -> InvoiceStore:
    return InvoiceStore(documents)


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    documents: DocumentStore,
    task_store: TaskStore,
    client_store: ClientStore,
    invoice_store: InvoiceStore,
) -> AppState:
    """
    AppState wired with deterministic fakes.

    NOTE: We keep the real SQLite document store here because its correctness
    is part of what we want to test.
    """
    tools = ToolRegistry(
        ToolContext(tasks=task_store, clients=client_store, tz=UTC, clock=lambda: NOW),
        default_tools(),
    )
    holder: dict[str, AppState] = {}
    notifications = NotificationCenter(
        task_store,
        lambda: holder["state"].session,
        horizon_days=1,
        clock=lambda: NOW,
    )
    app_state = AppState(
        settings=settings,
        llm=FakeLLMClient(),
        documents=documents,
        task_store=task_store,
        client_store=client_store,
        invoice_store=invoice_store,
        notifications=notifications,
        tools=tools,
        session=Session(user_id="u1", display_name="Dr. Test"),
    )
    holder["state"] = app_state
    return app_state
