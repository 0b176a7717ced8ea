# tests/test_chat.py

from __future__ import annotations

from datetime import timedelta

import pytest

from agency_desk.assistant.chat import agency_chat
from agency_desk.assistant.persona import FALLBACK_REPLY
from agency_desk.core.ports import ChatReply, ToolCall
from agency_desk.llm.offline import OfflineLLMClient

from .conftest import NOW
from .fakes import FakeLLMClient


def test_plain_reply_updates_history(state) -> None:
    state.llm = FakeLLMClient(next_text="Hola")

    assert agency_chat(state, "hola") == "Hola"
    assert state.conversation == [
        {"role": "user", "content": "hola"},
        {"role": "assistant", "content": "Hola"},
    ]
    _, system_prompt, tools = state.llm.calls[0]
    assert "Dr. Test" in system_prompt
    assert tools


def test_tool_call_round_trip(state) -> None:
    state.task_store.add_task(name="Informe", assigned_to="u1", due_date=NOW + timedelta(days=1))
    llm = FakeLLMClient(
        replies=[
            ChatReply(content=None, tool_calls=[ToolCall(id="c1", name="getUpcomingTasksTool", arguments="{}")]),
            ChatReply(content="Tienes 1 tarea."),
        ]
    )
    state.llm = llm

    assert agency_chat(state, "¿qué tareas tengo?") == "Tienes 1 tarea."

    second_messages = llm.calls[1][0]
    tool_msg = second_messages[-1]
    assert tool_msg["role"] == "tool"
    assert tool_msg["tool_call_id"] == "c1"
    assert "Informe" in tool_msg["content"]
    assert second_messages[-2]["tool_calls"][0]["function"]["name"] == "getUpcomingTasksTool"

    # Tool traffic stays out of history.
    assert [m["role"] for m in state.conversation] == ["user", "assistant"]


def test_tool_rounds_are_bounded(state) -> None:
    state.settings.llm_max_tool_rounds = 1
    looping = ChatReply(content=None, tool_calls=[ToolCall(id="c", name="getClientCountTool", arguments="{}")])
    state.llm = FakeLLMClient(replies=[looping, looping], next_text="fin")

    assert agency_chat(state, "x") == FALLBACK_REPLY
    assert state.llm.calls[1][2] is None


def test_empty_reply_uses_fallback(state) -> None:
    state.llm = FakeLLMClient(next_text="   ")
    assert agency_chat(state, "x") == FALLBACK_REPLY


def test_llm_runtime_error_propagates_and_history_untouched(state) -> None:
    class Boom:
        def complete(self, messages, system_prompt, tools=None):
            raise RuntimeError("401 invalid api key")

    state.llm = Boom()
    with pytest.raises(RuntimeError):
        agency_chat(state, "x")
    assert state.conversation == []


def test_offline_client_answers_task_questions_via_tool(state) -> None:
    state.llm = OfflineLLMClient()
    assert agency_chat(state, "¿Qué tareas vencen pronto?") == (
        "No hay tareas próximas con vencimiento en los siguientes 3 días."
    )
