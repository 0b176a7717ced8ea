# tests/fakes.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from agency_desk.core.ports import ChatMessage, ChatReply, OutboundMessenger


class FakeLLMClient:
    """
    Deterministic LLM client for unit tests.

    - Captures calls for assertions
    - Returns scripted replies in order, then a plain text reply
    """

    def __init__(self, replies: list[ChatReply] | None = None, next_text: str = "ok") -> None:
        self.replies = list(replies or [])
        self.next_text = next_text
        self.calls: list[tuple[list[ChatMessage], str, list[dict[str, Any]] | None]] = []

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        tools: list[dict[str, Any]] | None = None,
    ) -> ChatReply:
        self.calls.append((list(messages), system_prompt, tools))
        if self.replies:
            return self.replies.pop(0)
        return ChatReply(content=self.next_text, model="fake")


@dataclass(slots=True)
class SentMessage:
    text: str
    to_user_id: str | None


@dataclass(slots=True)
class FakeMessenger(OutboundMessenger):
    """
    Fake OutboundMessenger used by alert sweep tests.
    """

    sent: list[SentMessage] = field(default_factory=list)
    fail_times: int = 0

    async def send_text(self, *, text: str, to_user_id: str | None = None) -> None:
        if self.fail_times > 0:
            self.fail_times -= 1
            raise RuntimeError("send failed")
        self.sent.append(SentMessage(text=text, to_user_id=to_user_id))


class FakeDueTaskSource:
    """
    In-memory DueTaskSource for NotificationCenter tests.

    `gates` lets a test hold a call until it releases it (calls run in a worker thread).
    """

    def __init__(self, results: list[Any] | None = None, error: Exception | None = None) -> None:
        self.results = list(results or [])
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.gates: list[threading.Event] = []
        self.per_call: list[list[Any]] = []

    def list_due_tasks(
        self,
        *,
        now: datetime,
        horizon_days: int,
        statuses,
        limit: int | None = None,
    ) -> list[Any]:
        idx = len(self.calls)
        self.calls.append({"now": now, "horizon_days": horizon_days, "statuses": statuses, "limit": limit})
        if idx < len(self.gates):
            self.gates[idx].wait(timeout=5.0)
        if self.error is not None:
            raise self.error
        if idx < len(self.per_call):
            return list(self.per_call[idx])
        return list(self.results)
