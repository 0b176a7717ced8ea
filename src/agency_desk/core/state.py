# src/agency_desk/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .ports import ChatMessage, LLMClient
from .session import Session

if TYPE_CHECKING:
    from ..assistant.tools import ToolRegistry
    from ..billing.invoice_store import InvoiceStore
    from ..clients.client_store import ClientStore
    from ..notifications.center import NotificationCenter
    from ..store.documents import DocumentStore
    from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (Settings or a test SimpleNamespace).
    settings: Any

    llm: LLMClient
    documents: DocumentStore
    task_store: TaskStore
    client_store: ClientStore
    invoice_store: InvoiceStore
    notifications: NotificationCenter
    tools: ToolRegistry

    session: Session | None = None
    calendar: Any = None  # CalendarGateway | None

    conversation: list[ChatMessage] = field(default_factory=list)

    # Serializes console commands and chat turns.
    lock: threading.RLock = field(default_factory=threading.RLock)
