# tests/test_llm_client.py

from __future__ import annotations

from types import SimpleNamespace

import httpx
import openai
import pytest

from agency_desk.llm.client import OpenRouterLLMClient, friendly_llm_error_message


def _status_error(cls, status: int):
    request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
    return cls("boom", response=httpx.Response(status, request=request), body=None)


def _completion(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeCompletions:
    def __init__(self, outcomes: dict) -> None:
        self.outcomes = outcomes
        self.models: list[str] = []

    def create(self, **kwargs):
        model = kwargs["model"]
        self.models.append(model)
        outcome = self.outcomes[model]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(outcomes: dict) -> tuple[OpenRouterLLMClient, FakeCompletions]:
    settings = SimpleNamespace(
        openrouter_api_key="k",
        openrouter_base_url="https://llm.test/v1",
        llm_models=list(outcomes),
        extra_headers={},
    )
    llm = OpenRouterLLMClient(settings)
    completions = FakeCompletions(outcomes)
    llm._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return llm, completions


def test_missing_key_raises_runtime_error() -> None:
    with pytest.raises(RuntimeError) as exc:
        OpenRouterLLMClient(SimpleNamespace(openrouter_api_key=None, openrouter_base_url="x"))
    assert "missing API key" in friendly_llm_error_message(exc.value)


def test_falls_back_and_parks_missing_model() -> None:
    llm, completions = _client({
        "gone/model": _status_error(openai.NotFoundError, 404),
        "ok/model": _completion(content="hola"),
    })

    assert llm.complete([], "sys").content == "hola"
    assert llm.complete([], "sys").content == "hola"
    assert completions.models == ["gone/model", "ok/model", "ok/model"]


def test_auth_error_fails_fast() -> None:
    llm, completions = _client({
        "a/model": _status_error(openai.AuthenticationError, 401),
        "b/model": _completion(content="never"),
    })

    with pytest.raises(RuntimeError, match="authentication"):
        llm.complete([], "sys")
    assert completions.models == ["a/model"]


def test_tool_calls_are_parsed() -> None:
    call = SimpleNamespace(id="c1", function=SimpleNamespace(name="getUpcomingTasksTool", arguments=""))
    llm, _ = _client({"m": _completion(tool_calls=[call])})

    reply = llm.complete([{"role": "user", "content": "x"}], "sys", tools=[{"type": "function"}])
    assert reply.content is None
    assert reply.model == "m"
    assert [(c.id, c.name, c.arguments) for c in reply.tool_calls] == [("c1", "getUpcomingTasksTool", "{}")]
