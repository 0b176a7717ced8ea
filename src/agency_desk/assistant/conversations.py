# src/agency_desk/assistant/conversations.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.ports import ChatMessage
from ..core.results import ActionResult
from ..store.documents import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)

CONVERSATIONS_COLLECTION = "savedConversations"
TITLE_MAX = 70


def _build_title(messages: list[ChatMessage], custom_title: str | None, today: datetime) -> str:
    title = (custom_title or "").strip()
    if not title:
        first_user = next((m for m in messages if m.get("role") == "user"), None)
        if first_user is not None:
            text = str(first_user.get("content") or "")
            title = text[:TITLE_MAX]
            if len(text) > TITLE_MAX:
                title += "..."
        else:
            title = "Conversación Guardada"
    if not title.strip():
        title = f"Conversación Guardada el {today.strftime('%d/%m/%Y')}"
    return title


def save_conversation_action(
    documents: DocumentStore,
    messages: list[ChatMessage],
    user_id: str | None,
    custom_title: str | None = None,
    *,
    today: datetime | None = None,
) -> ActionResult:
    """Persist a chat transcript under savedConversations; returns the new document id."""
    if not user_id:
        return ActionResult.fail("User ID is required to save conversation.")
    if not messages:
        return ActionResult.fail("Cannot save an empty conversation.")

    title = _build_title(messages, custom_title, today or datetime.now().astimezone())
    data = {
        "userId": user_id,
        "title": title,
        "messages": [
            {
                "sender": "user" if m.get("role") == "user" else "ai",
                "text": str(m.get("content") or ""),
            }
            for m in messages
            if m.get("role") in ("user", "assistant")
        ],
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    }

    try:
        doc_id = documents.add(CONVERSATIONS_COLLECTION, data)
    except Exception as e:
        logger.exception("Error saving conversation")
        return ActionResult.fail(str(e) or "Failed to save conversation.")

    logger.info("Conversation saved id=%s user=%s", doc_id, user_id)
    return ActionResult.ok(title, id=doc_id)
