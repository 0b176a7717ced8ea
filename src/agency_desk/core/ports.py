# src/agency_desk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the store, LLM provider, calendar and connectors swappable
and makes testing easier.
"""

from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Protocol

ChatMessage = dict[str, Any]
# OpenAI-style chat messages: {"role": "...", "content": "...", ...}.


@dataclass(slots=True, frozen=True)
class ToolCall:
    id: str
    name: str
    arguments: str  # JSON text, as produced by the model


@dataclass(slots=True)
class ChatReply:
    content: str | None
    tool_calls: list[ToolCall] = field(default_factory=list)
    model: str | None = None


class LLMClient(Protocol):
    """Chat completion client (OpenAI/OpenRouter-compatible) with tool calling."""

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        tools: list[dict[str, Any]] | None = None,
    ) -> ChatReply: ...


class OutboundMessenger(Protocol):
    """
    Connector-side port: how background services (alert sweep) send text outward.

    The connector decides how to interpret to_user_id (can be None).
    """

    def send_text(
        self,
        *,
        text: str,
        to_user_id: str | None = None,
    ) -> Awaitable[None]: ...


class DueTaskSource(Protocol):
    """What the notification holder needs from task storage."""

    def list_due_tasks(
        self,
        *,
        now: datetime,
        horizon_days: int,
        statuses: Collection[Any],
        limit: int | None = None,
    ) -> list[Any]: ...


class CalendarGateway(Protocol):
    """Creates events in an external calendar; returns the created event resource."""

    def insert_event(self, event: dict[str, Any]) -> dict[str, Any]: ...
