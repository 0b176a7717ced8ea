# src/agency_desk/assistant/tools.py

"""
Tools the chat assistant can call (OpenAI function-calling format).

Every handler returns a success-shaped dict, even on failure: the model is in
the middle of a generation and cannot handle raised errors, so failures are
described in the payload instead.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any

from ..clients.client_store import ClientStore
from ..tasks.due_window import cap_results
from ..tasks.task_models import ACTIVE_STATUSES
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

NO_UPCOMING_TASKS_SUMMARY = "No hay tareas próximas con vencimiento en los siguientes {days} días."
UNNAMED_TASK = "Tarea sin nombre"
PROFILE_SUMMARY_MAX = 150


@dataclass(slots=True)
class ToolContext:
    tasks: TaskStore
    clients: ClientStore
    tz: tzinfo
    clock: Callable[[], datetime]
    upcoming_horizon_days: int = 2
    upcoming_limit: int = 5

    def now(self) -> datetime:
        return self.clock().astimezone(self.tz)


def no_upcoming_tasks_summary(horizon_days: int) -> str:
    return NO_UPCOMING_TASKS_SUMMARY.format(days=horizon_days + 1)


ToolHandler = Callable[[ToolContext, dict[str, Any]], dict[str, Any]]


@dataclass(slots=True, frozen=True)
class AgencyTool:
    name: str
    description: str
    handler: ToolHandler
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def to_openai(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


# ---- handlers ----


def get_upcoming_tasks(ctx: ToolContext, args: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Pending / in-progress tasks due today or within the next upcoming_horizon_days days,
    earliest first, at most upcoming_limit of them.
    """
    try:
        found = ctx.tasks.list_due_tasks(
            now=ctx.now(),
            horizon_days=ctx.upcoming_horizon_days,
            statuses=ACTIVE_STATUSES,
            limit=ctx.upcoming_limit,
        )
        found = cap_results(found, ctx.upcoming_limit)

        items: list[dict[str, Any]] = []
        for task in found:
            item: dict[str, Any] = {
                "id": task.id,
                "name": task.name or UNNAMED_TASK,
            }
            if task.client_name:
                item["clientName"] = task.client_name
            item["dueDate"] = (
                task.due_date.astimezone(ctx.tz).strftime("%d/%m/%Y") if task.due_date else "Fecha N/A"
            )
            items.append(item)
    except Exception as e:
        logger.exception("getUpcomingTasksTool failed")
        return {
            "tasks": [],
            "summary": f"No pude obtener las tareas próximas debido a un error: {str(e) or 'Error desconocido'}.",
        }

    if not items:
        # The window counts today, so a 2-day horizon covers 3 days.
        return {"tasks": [], "summary": no_upcoming_tasks_summary(ctx.upcoming_horizon_days)}

    return {"tasks": items, "summary": f"{len(items)} tarea(s) próxima(s) encontrada(s)."}


def get_client_count(ctx: ToolContext, args: dict[str, Any] | None = None) -> dict[str, Any]:
    try:
        return {"count": ctx.clients.count_clients()}
    except Exception:
        logger.exception("getClientCountTool failed")
        return {"count": -1}


def get_client_details(ctx: ToolContext, args: dict[str, Any] | None = None) -> dict[str, Any]:
    name = str((args or {}).get("clientName") or "").strip()
    if not name:
        return {"message": "Se requiere el nombre exacto del cliente."}

    try:
        client = ctx.clients.find_by_name(name)
    except Exception as e:
        logger.exception("getClientDetailsTool failed")
        return {"message": f"Error al buscar cliente: {str(e) or 'Error desconocido'}."}

    if client is None:
        return {"message": f'Cliente con el nombre exacto "{name}" no encontrado.'}

    details: dict[str, Any] = {"id": client.id, "name": client.name}
    for key, value in (("email", client.email), ("telefono", client.telefono), ("clinica", client.clinica)):
        if value:
            details[key] = value

    if client.profile_summary:
        summary = client.profile_summary[:PROFILE_SUMMARY_MAX]
        if len(client.profile_summary) > PROFILE_SUMMARY_MAX:
            summary += "..."
        details["profileSummary"] = summary

    details["contractedServicesCount"] = len(client.contracted_services)
    if client.contracted_services:
        details["contractedServicesSummary"] = [
            {"serviceName": s.service_name, "price": s.price, "paymentModality": s.payment_modality}
            for s in client.contracted_services
        ]
    if client.pagado is not None:
        details["pagado"] = client.pagado

    return {"client": details, "message": "Cliente encontrado exitosamente."}


UPCOMING_TASKS_TOOL = AgencyTool(
    name="getUpcomingTasksTool",
    description=(
        "Obtiene un resumen de las tareas pendientes o en progreso que vencen hoy "
        "o en los próximos 2 días (total 3 días incluyendo hoy)."
    ),
    handler=get_upcoming_tasks,
)

CLIENT_COUNT_TOOL = AgencyTool(
    name="getClientCountTool",
    description="Devuelve el número total de clientes activos registrados en la agencia.",
    handler=get_client_count,
)

CLIENT_DETAILS_TOOL = AgencyTool(
    name="getClientDetailsTool",
    description="Busca y devuelve detalles de un cliente específico por su nombre exacto.",
    handler=get_client_details,
    parameters={
        "type": "object",
        "properties": {
            "clientName": {"type": "string", "description": "El nombre exacto del cliente a buscar."},
        },
        "required": ["clientName"],
    },
)


class ToolRegistry:
    """Name -> tool map; invoke() never raises."""

    def __init__(self, context: ToolContext, tools: list[AgencyTool] | None = None) -> None:
        self._context = context
        self._tools: dict[str, AgencyTool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: AgencyTool) -> None:
        self._tools[tool.name] = tool

    def names(self) -> list[str]:
        return list(self._tools)

    def schemas(self) -> list[dict[str, Any]]:
        return [t.to_openai() for t in self._tools.values()]

    def invoke(self, name: str, arguments: str | dict[str, Any] | None = None) -> dict[str, Any]:
        tool = self._tools.get(name)
        if tool is None:
            return {"error": f"Unknown tool: {name}"}

        if isinstance(arguments, dict):
            args = arguments
        else:
            try:
                parsed = json.loads(arguments or "{}")
            except ValueError:
                return {"error": f"Invalid JSON arguments for {name}."}
            args = parsed if isinstance(parsed, dict) else {}

        try:
            return tool.handler(self._context, args)
        except Exception as e:
            logger.exception("Tool %s crashed", name)
            return {"error": str(e) or e.__class__.__name__}


def default_tools() -> list[AgencyTool]:
    return [CLIENT_COUNT_TOOL, UPCOMING_TASKS_TOOL, CLIENT_DETAILS_TOOL]
