# src/agency_desk/calendar_sync/google.py

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class CalendarError(RuntimeError):
    """The calendar API rejected the request (or could not be reached)."""


class GoogleCalendarClient:
    """
    Minimal Google Calendar v3 client: events.insert with a bearer token.

    Token acquisition/refresh is out of scope; pass a valid access token.
    """

    def __init__(
        self,
        access_token: str,
        *,
        calendar_id: str = "primary",
        base_url: str = "https://www.googleapis.com/calendar/v3",
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not access_token or not access_token.strip():
            raise ValueError("access_token is required")
        self._calendar_id = calendar_id
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {access_token.strip()}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def insert_event(self, event: dict[str, Any]) -> dict[str, Any]:
        path = f"/calendars/{quote(self._calendar_id, safe='')}/events"
        try:
            resp = self._http.post(path, json=event)
        except httpx.HTTPError as e:
            raise CalendarError(f"Calendar API unreachable: {e}") from e

        if resp.status_code >= 400:
            detail = ""
            try:
                detail = str(resp.json().get("error", {}).get("message", ""))
            except (ValueError, AttributeError):
                detail = resp.text[:200]
            raise CalendarError(f"Calendar API error {resp.status_code}: {detail}".rstrip(": "))

        data = resp.json()
        logger.info("Calendar event created: %s", data.get("htmlLink"))
        return data


def build_calendar_gateway(settings) -> GoogleCalendarClient | None:
    token = getattr(settings, "calendar_access_token", None)
    if not token:
        return None
    return GoogleCalendarClient(
        token,
        calendar_id=str(getattr(settings, "calendar_id", "primary") or "primary"),
        base_url=str(getattr(settings, "calendar_base_url", "") or "https://www.googleapis.com/calendar/v3"),
    )
