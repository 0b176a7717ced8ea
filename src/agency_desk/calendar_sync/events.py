# src/agency_desk/calendar_sync/events.py

"""
Task reminder -> calendar event.

build_task_reminder_event() only shapes the payload (Google Calendar
events.insert resource); sending it is the gateway's job.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from ..core.ports import CalendarGateway
from ..core.results import ActionResult

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_MINUTES = 10
DEFAULT_DURATION_MINUTES = 60


def build_task_reminder_event(
    *,
    name: str,
    description: str | None,
    alert_date: datetime,
    time_zone: str,
    reminder_minutes: int = DEFAULT_REMINDER_MINUTES,
    duration_minutes: int = DEFAULT_DURATION_MINUTES,
) -> dict[str, Any]:
    """
    Event payload with start/end as ISO-8601 in the given IANA time zone and a
    single popup reminder override.
    """
    tz = ZoneInfo(time_zone)
    if alert_date.tzinfo is None:
        alert_date = alert_date.replace(tzinfo=tz)
    start = alert_date.astimezone(tz)
    end = start + timedelta(minutes=int(duration_minutes))

    return {
        "summary": f"Recordatorio Tarea: {name}",
        "description": description or f"Recordatorio para la tarea: {name}",
        "start": {"dateTime": start.isoformat(), "timeZone": time_zone},
        "end": {"dateTime": end.isoformat(), "timeZone": time_zone},
        "reminders": {
            "useDefault": False,
            "overrides": [{"method": "popup", "minutes": int(reminder_minutes)}],
        },
    }


def add_calendar_event_for_task_action(
    gateway: CalendarGateway | None,
    *,
    name: str,
    description: str | None,
    alert_date: datetime | None,
    time_zone: str,
    reminder_minutes: int = DEFAULT_REMINDER_MINUTES,
) -> ActionResult:
    if alert_date is None:
        return ActionResult.fail(
            "missing alert date",
            message="No se proporcionó fecha de alerta para el evento de calendario.",
        )
    if gateway is None:
        return ActionResult.fail(
            "calendar not configured",
            message="La integración de calendario no está configurada (falta el token de acceso).",
        )

    event = build_task_reminder_event(
        name=name,
        description=description,
        alert_date=alert_date,
        time_zone=time_zone,
        reminder_minutes=reminder_minutes,
    )

    try:
        created = gateway.insert_event(event)
    except Exception as e:
        logger.exception("Calendar event creation failed for task %r", name)
        return ActionResult.fail(
            str(e) or "Error desconocido al crear evento de calendario.",
            message="No se pudo crear el evento en el calendario.",
        )

    link = (created or {}).get("htmlLink")
    logger.info("Calendar event created for task %r link=%s", name, link)
    return ActionResult.ok("Evento de calendario creado exitosamente.", link=link)
