# tests/test_conversations.py

from __future__ import annotations

from datetime import UTC, datetime

from agency_desk.assistant.conversations import CONVERSATIONS_COLLECTION, save_conversation_action
from agency_desk.store.documents import DocumentStore

TODAY = datetime(2024, 5, 10, tzinfo=UTC)


def test_save_requires_user_and_messages(documents: DocumentStore) -> None:
    res = save_conversation_action(documents, [{"role": "user", "content": "hola"}], None)
    assert res.success is False
    assert res.error == "User ID is required to save conversation."

    res = save_conversation_action(documents, [], "u1")
    assert res.success is False
    assert res.error == "Cannot save an empty conversation."
    assert documents.count(CONVERSATIONS_COLLECTION) == 0


def test_title_from_first_user_message_is_truncated(documents: DocumentStore) -> None:
    long_text = "a" * 80
    res = save_conversation_action(
        documents,
        [{"role": "user", "content": long_text}, {"role": "assistant", "content": "ok"}],
        "u1",
        today=TODAY,
    )
    assert res.success is True
    assert res.message == "a" * 70 + "..."

    doc = documents.get(CONVERSATIONS_COLLECTION, res.id)
    assert doc.data["userId"] == "u1"
    assert doc.data["messages"] == [
        {"sender": "user", "text": long_text},
        {"sender": "ai", "text": "ok"},
    ]


def test_custom_title_and_fallbacks(documents: DocumentStore) -> None:
    res = save_conversation_action(documents, [{"role": "user", "content": "x"}], "u1", "  Mi chat ")
    assert res.message == "Mi chat"

    res = save_conversation_action(documents, [{"role": "assistant", "content": "x"}], "u1", today=TODAY)
    assert res.message == "Conversación Guardada"

    res = save_conversation_action(documents, [{"role": "user", "content": "   "}], "u1", today=TODAY)
    assert res.message == "Conversación Guardada el 10/05/2024"
