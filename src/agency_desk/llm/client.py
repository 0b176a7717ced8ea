# src/agency_desk/llm/client.py

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Optional

import httpx
import openai
from openai import OpenAI

from ..core.ports import ChatMessage, ChatReply, ToolCall

logger = logging.getLogger(__name__)

_BAD_MODEL_PARK_SECONDS = 3600.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    s = raw.strip()
    if not s:
        return default
    try:
        return float(s)
    except ValueError:
        return default


def _timeouts_from_env() -> dict[str, float]:
    """
    Timeouts are configurable via env to avoid "hanging forever" on slow models.

    Defaults:
    - connect timeout: 5s
    - read timeout: 45s (tool-calling replies are not streamed)
    """
    return {
        "read": _env_float("AGENCY_LLM_READ_TIMEOUT_SECONDS", 45.0),
        "connect": _env_float("AGENCY_LLM_CONNECT_TIMEOUT_SECONDS", 5.0),
    }


def _is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {"UnauthorizedError"}


def _is_rate_limit_error(exc: Exception) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    return exc.__class__.__name__ in {"TooManyRequestsError"}


def _is_connection_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException)):
        return True
    return exc.__class__.__name__ in {"Timeout", "ConnectTimeout", "ReadTimeout", "WriteTimeout"}


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set AGENCY_OPENROUTER_API_KEY in .env."
    if "LLM model list is empty" in msg:
        return "LLM is not configured (no models). Set AGENCY_LLM_MODELS in .env."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set AGENCY_OPENROUTER_BASE_URL in .env."
    return msg


def _parse_reply(completion: Any, model: str) -> ChatReply:
    choice0 = completion.choices[0]
    message = choice0.message
    calls: list[ToolCall] = []
    for tc in getattr(message, "tool_calls", None) or []:
        fn = getattr(tc, "function", None)
        if fn is None:
            continue
        calls.append(ToolCall(id=str(tc.id), name=str(fn.name), arguments=str(fn.arguments or "{}")))
    content = getattr(message, "content", None)
    return ChatReply(content=content if content else None, tool_calls=calls, model=model)


class OpenRouterLLMClient:
    """
    OpenAI-compatible chat completion client with ordered model fallback.

    Behavior:
    - Tries models in the order from settings (AGENCY_LLM_MODELS).
    - 404 (model not available) -> park the model for an hour, try next.
    - Rate limit / network issues -> try next.
    - Auth issues -> fail fast (no fallback across models).
    """

    def __init__(self, settings) -> None:
        api_key = getattr(settings, "openrouter_api_key", None)
        base_url = getattr(settings, "openrouter_base_url", "") or ""

        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set AGENCY_OPENROUTER_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set AGENCY_OPENROUTER_BASE_URL in your .env.")

        self._api_key = str(api_key)
        self._base_url = str(base_url)
        self._models: List[str] = [m.strip() for m in (getattr(settings, "llm_models", []) or []) if m and m.strip()]
        self._headers: Dict[str, str] = dict(getattr(settings, "extra_headers", {}) or {})
        self._bad_models: dict[str, float] = {}  # model -> retry_at (monotonic)
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        """
        Lazily create and cache the SDK client.

        Automatic retries are disabled to allow quick fallback across models.
        """
        if self._client is not None:
            return self._client

        t = _timeouts_from_env()
        self._client = OpenAI(
            base_url=self._base_url,
            api_key=self._api_key,
            timeout=httpx.Timeout(connect=t["connect"], read=t["read"], write=10.0, pool=t["connect"]),
            max_retries=0,
        )
        return self._client

    def complete(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        tools: list[dict[str, Any]] | None = None,
    ) -> ChatReply:
        if not self._models:
            raise RuntimeError("LLM model list is empty. Set AGENCY_LLM_MODELS in your .env.")

        client = self._get_client()
        last_error: Optional[Exception] = None
        now = time.monotonic()

        for model in self._models:
            retry_at = self._bad_models.get(model)
            if retry_at is not None and retry_at > now:
                continue

            logger.info("LLM: trying model=%s (tools=%d)", model, len(tools or []))
            t0 = time.monotonic()

            kwargs: dict[str, Any] = {
                "model": model,
                "messages": [{"role": "system", "content": system_prompt}, *messages],
                "extra_headers": self._headers or None,
            }
            if tools:
                kwargs["tools"] = tools

            try:
                completion = client.chat.completions.create(**kwargs)
                reply = _parse_reply(completion, model)
            except Exception as e:
                last_error = e

                if _is_auth_error(e):
                    raise RuntimeError(
                        "LLM authentication failed. Check your API key (AGENCY_OPENROUTER_API_KEY)."
                    ) from e

                if _is_not_found_error(e):
                    self._bad_models[model] = time.monotonic() + _BAD_MODEL_PARK_SECONDS
                    logger.info("LLM: model not available (404): %s", model)
                    continue

                if _is_rate_limit_error(e):
                    logger.info("LLM: rate-limited on model=%s, trying next", model)
                    continue

                if _is_connection_error(e):
                    logger.info("LLM: network/timeout error on model=%s, trying next", model)
                    continue

                logger.info("LLM: error on model=%s (%s), trying next", model, e.__class__.__name__)
                continue

            if reply.content or reply.tool_calls:
                logger.info("LLM: reply from model=%s (%.2fs)", model, time.monotonic() - t0)
                return reply

            last_error = RuntimeError(f"Model returned no content: {model}")

        if last_error is not None:
            if _is_rate_limit_error(last_error):
                raise RuntimeError("LLM is rate-limited. Try again later.") from last_error
            if _is_connection_error(last_error):
                raise RuntimeError("LLM network/timeout error. Try again later or change models.") from last_error
            raise RuntimeError("All LLM models failed.") from last_error

        raise RuntimeError("All LLM models failed.")
