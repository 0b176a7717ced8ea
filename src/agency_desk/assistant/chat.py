# src/agency_desk/assistant/chat.py

"""
Agency chat orchestration.

Transport-agnostic: connectors pass the user's text in and print the reply.
The model may call tools (see tools.py); each call is executed through the
registry and fed back as a "tool" message until the model answers in text or
the tool-round budget runs out.

History is updated only after a reply was produced, and only with the user
message + the final assistant text (tool traffic stays out of history).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.ports import ChatMessage, ChatReply
from ..core.state import AppState
from .persona import FALLBACK_REPLY, get_system_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 4
MAX_HISTORY_MESSAGES = 40


def _assistant_tool_message(reply: ChatReply) -> ChatMessage:
    return {
        "role": "assistant",
        "content": reply.content,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments},
            }
            for call in reply.tool_calls
        ],
    }


def _tool_result_message(call_id: str, result: dict[str, Any]) -> ChatMessage:
    return {
        "role": "tool",
        "tool_call_id": call_id,
        "content": json.dumps(result, ensure_ascii=False, default=str),
    }


def agency_chat(state: AppState, user_text: str) -> str:
    """
    Answer one user message.

    LLM configuration/transport errors propagate as RuntimeError (connectors
    turn them into friendly messages); an empty model answer becomes FALLBACK_REPLY.
    """
    settings = state.settings
    max_rounds = max(0, int(getattr(settings, "llm_max_tool_rounds", DEFAULT_MAX_TOOL_ROUNDS)))
    display_name = state.session.display_name if state.session is not None else None
    system_prompt = get_system_prompt(display_name)

    history = state.conversation
    base: list[ChatMessage] = [*history, {"role": "user", "content": user_text}]
    turn: list[ChatMessage] = []
    tool_schemas = state.tools.schemas()

    text = ""
    rounds = 0
    while True:
        offer_tools = tool_schemas if rounds < max_rounds else None
        reply = state.llm.complete([*base, *turn], system_prompt, tools=offer_tools)

        if reply.tool_calls and rounds < max_rounds:
            rounds += 1
            turn.append(_assistant_tool_message(reply))
            for call in reply.tool_calls:
                logger.info("Tool call %s (round %d)", call.name, rounds)
                result = state.tools.invoke(call.name, call.arguments)
                turn.append(_tool_result_message(call.id, result))
            continue

        text = (reply.content or "").strip()
        break

    if not text:
        logger.info("Empty model reply; using fallback text.")
        text = FALLBACK_REPLY

    history.append({"role": "user", "content": user_text})
    history.append({"role": "assistant", "content": text})
    if len(history) > MAX_HISTORY_MESSAGES:
        del history[: len(history) - MAX_HISTORY_MESSAGES]

    return text
