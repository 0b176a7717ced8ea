# src/agency_desk/core/session.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Session:
    """Authenticated user session, as handed over by the identity provider."""

    user_id: str
    display_name: str = ""


def session_from_settings(settings) -> Session | None:
    user_id = (getattr(settings, "session_user_id", None) or "").strip()
    if not user_id:
        return None
    return Session(user_id=user_id, display_name=str(getattr(settings, "session_display_name", "") or ""))
