# src/agency_desk/assistant/content.py

"""
Social media post suggestions from a client profile.

One-shot completion without tools and without touching the chat history.
LLM errors propagate as RuntimeError, as in agency_chat().
"""

from __future__ import annotations

import logging
from typing import Final

from ..clients.client_models import Client
from ..core.ports import LLMClient

logger = logging.getLogger(__name__)

SOCIAL_MEDIA_SYSTEM_PROMPT: Final[str] = (
    "You are a social media expert. Based on the client profile and content type provided, "
    "generate a social media post. Answer with the post text only."
)

POST_PROMPT_TEMPLATE: Final[str] = """Client Profile: {client_profile}
Content Type: {content_type}

Suggested Post:"""


def client_profile_text(client: Client) -> str | None:
    """Profile passed to the model: the stored summary plus the clinic name, if any."""
    if not client.profile_summary:
        return None
    if client.clinica:
        return f"{client.name} ({client.clinica}). {client.profile_summary}"
    return f"{client.name}. {client.profile_summary}"


def suggest_social_media_post(llm: LLMClient, *, client_profile: str, content_type: str) -> str:
    if not client_profile or not client_profile.strip():
        raise ValueError("client_profile is required")
    if not content_type or not content_type.strip():
        raise ValueError("content_type is required")

    prompt = POST_PROMPT_TEMPLATE.format(
        client_profile=client_profile.strip(),
        content_type=content_type.strip(),
    )
    reply = llm.complete([{"role": "user", "content": prompt}], SOCIAL_MEDIA_SYSTEM_PROMPT, tools=None)

    post = (reply.content or "").strip()
    if not post:
        raise RuntimeError("The model returned an empty post suggestion.")
    logger.info("Post suggestion generated (model=%s, chars=%d)", reply.model, len(post))
    return post
