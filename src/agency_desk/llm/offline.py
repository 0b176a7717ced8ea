# src/agency_desk/llm/offline.py

from __future__ import annotations

import json
from typing import Any

from ..core.ports import ChatMessage, ChatReply, ToolCall

_TASK_WORDS = ("tarea", "task", "vence", "due", "pendiente")
_CLIENT_COUNT_WORDS = ("cuántos clientes", "cuantos clientes", "how many clients", "client count")


def _offline_post(prompt: str) -> str:
    fields = {}
    for line in prompt.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    kind = fields.get("Content Type") or "post"
    profile = fields.get("Client Profile") or ""
    return f"(offline {kind}) {profile[:120]} #salud #agencia".strip()


class OfflineLLMClient:
    """
    Offline deterministic LLM client used for demos when no external API is configured.

    Behavior:
    - after a tool result -> echoes the tool's "summary" (or "message"/"count")
    - task questions -> calls getUpcomingTasksTool when it is offered
    - post-suggestion prompts -> a templated post built from the prompt fields
    - client-count questions -> calls getClientCountTool when it is offered
    - anything else -> a friendly offline demo response
    """

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        tools: list[dict[str, Any]] | None = None,
    ) -> ChatReply:
        last = messages[-1] if messages else {}

        if last.get("role") == "tool":
            try:
                payload = json.loads(last.get("content") or "{}")
            except ValueError:
                payload = {}
            if isinstance(payload, dict):
                for key in ("summary", "message", "count"):
                    if key in payload:
                        return ChatReply(content=str(payload[key]), model="offline")
            return ChatReply(content="(offline) Tool finished.", model="offline")

        user_text = ""
        for m in reversed(messages):
            if m.get("role") == "user":
                user_text = str(m.get("content") or "")
                break

        if user_text.rstrip().endswith("Suggested Post:"):
            return ChatReply(content=_offline_post(user_text), model="offline")

        offered = {
            (t.get("function") or {}).get("name")
            for t in (tools or [])
            if isinstance(t, dict)
        }
        low = user_text.lower()

        if "getClientCountTool" in offered and any(w in low for w in _CLIENT_COUNT_WORDS):
            return ChatReply(
                content=None,
                tool_calls=[ToolCall(id="offline-1", name="getClientCountTool", arguments="{}")],
                model="offline",
            )

        if "getUpcomingTasksTool" in offered and any(w in low for w in _TASK_WORDS):
            return ChatReply(
                content=None,
                tool_calls=[ToolCall(id="offline-1", name="getUpcomingTasksTool", arguments="{}")],
                model="offline",
            )

        return ChatReply(
            content=(
                "Offline demo mode: no external LLM is configured.\n"
                "Set AGENCY_OPENROUTER_API_KEY (and AGENCY_LLM_MODELS) to enable real responses.\n\n"
                f"You said: {user_text}"
            ),
            model="offline",
        )
