# tests/test_calendar.py

from __future__ import annotations

import json
from datetime import UTC, datetime

import httpx
import pytest

from agency_desk.calendar_sync.events import add_calendar_event_for_task_action, build_task_reminder_event
from agency_desk.calendar_sync.google import CalendarError, GoogleCalendarClient

ALERT = datetime(2024, 5, 10, 15, 0, tzinfo=UTC)


def test_event_payload_shape() -> None:
    event = build_task_reminder_event(name="Informe", description=None, alert_date=ALERT, time_zone="UTC")

    assert event["summary"] == "Recordatorio Tarea: Informe"
    assert event["description"] == "Recordatorio para la tarea: Informe"
    assert event["start"] == {"dateTime": "2024-05-10T15:00:00+00:00", "timeZone": "UTC"}
    assert event["end"] == {"dateTime": "2024-05-10T16:00:00+00:00", "timeZone": "UTC"}
    assert event["reminders"] == {"useDefault": False, "overrides": [{"method": "popup", "minutes": 10}]}


def _client(handler) -> GoogleCalendarClient:
    return GoogleCalendarClient("tok", transport=httpx.MockTransport(handler))


def test_insert_event_posts_with_bearer_token() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "e1", "htmlLink": "https://cal/e1"})

    res = add_calendar_event_for_task_action(
        _client(handler),
        name="Informe",
        description="d",
        alert_date=ALERT,
        time_zone="UTC",
    )

    assert res.success is True
    assert res.link == "https://cal/e1"
    assert seen["path"] == "/calendar/v3/calendars/primary/events"
    assert seen["auth"] == "Bearer tok"
    assert seen["body"]["description"] == "d"


def test_api_error_becomes_soft_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": {"message": "forbidden"}})

    client = _client(handler)
    with pytest.raises(CalendarError):
        client.insert_event({})

    res = add_calendar_event_for_task_action(client, name="x", description=None, alert_date=ALERT, time_zone="UTC")
    assert res.success is False
    assert "403" in (res.error or "")


def test_missing_alert_or_gateway_short_circuits() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    res = add_calendar_event_for_task_action(_client(handler), name="x", description=None, alert_date=None, time_zone="UTC")
    assert res.success is False
    assert calls == []

    res = add_calendar_event_for_task_action(None, name="x", description=None, alert_date=ALERT, time_zone="UTC")
    assert res.success is False
