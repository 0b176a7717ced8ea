# src/agency_desk/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from datetime import datetime, time
from pathlib import Path
from typing import cast

from ..assistant.content import client_profile_text, suggest_social_media_post
from ..assistant.conversations import save_conversation_action
from ..assistant.tools import UPCOMING_TASKS_TOOL
from ..billing.invoice_api import create_invoice_action, edit_invoice_action, update_invoice_status_action
from ..billing.invoice_models import Invoice, InvoiceDraft, InvoiceItem, InvoiceStatus
from ..calendar_sync.events import add_calendar_event_for_task_action
from ..clients.client_api import (
    add_client_action,
    delete_client_action,
    update_client_action,
    update_profile_icon_action,
)
from ..core.session import Session
from ..core.state import AppState
from ..llm.client import friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..tasks.task_api import create_task_action, edit_task_action, update_task_status_action
from ..tasks.task_models import ACTIVE_STATUSES, Task, TaskEdit, TaskStatus
from .bootstrap import resolve_time_zone

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /due, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

MAX_DUE_DAYS = 3650
DUE_USAGE = f"Usage: /due [days] (0-{MAX_DUE_DAYS})"


def _fmt_date(dt: datetime | None, tz) -> str:
    if dt is None:
        return "-"
    return dt.astimezone(tz).strftime("%d/%m/%Y")


def _parse_day(raw: str, tz) -> datetime:
    """Accept YYYY-MM-DD or DD/MM/YYYY; returns start of that day in tz."""
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            day = datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
        return datetime.combine(day, time.min, tzinfo=tz)
    raise ValueError(f"bad date: {raw!r} (use YYYY-MM-DD or DD/MM/YYYY)")


def _task_line(task: Task, tz) -> str:
    client = f" [{task.client_name}]" if task.client_name else ""
    alert = f" alert={_fmt_date(task.alert_date, tz)}" if task.alert_date else ""
    return (
        f"  {task.id[:8]}  {_fmt_date(task.due_date, tz)}  {task.status.value:<11}  "
        f"{task.priority.value:<6}  {task.name}{client}{alert}"
    )


def _resolve_task_id(state: AppState, prefix: str) -> str | None:
    """Full id from a unique id prefix (the CLI shows 8-char prefixes)."""
    if not prefix:
        return None
    if state.task_store.get_task(prefix) is not None:
        return prefix
    matches = [t.id for t in state.task_store.list_tasks() if t.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def _resolve_client_id(state: AppState, prefix: str) -> str | None:
    if not prefix:
        return None
    if state.client_store.get_client(prefix) is not None:
        return prefix
    matches = [c.id for c in state.client_store.list_clients() if c.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.settings
    mode = "OFFLINE (demo)" if isinstance(state.llm, OfflineLLMClient) else "ONLINE"
    models = ", ".join(list(getattr(s, "llm_models", []) or []))
    who = state.session.user_id if state.session else "(no session)"
    calendar = "ON" if state.calendar is not None else "OFF"
    return (
        "Status:\n"
        f"  LLM: {mode}\n"
        f"  Models (priority -> fallback): {models}\n"
        f"  Session: {who}\n"
        f"  Time zone: {getattr(s, 'time_zone', 'UTC')}\n"
        f"  Calendar sync: {calendar}\n"
        f"  Tasks: {state.task_store.count_tasks()}  Clients: {state.client_store.count_clients()}  "
        f"Invoices: {state.invoice_store.count_invoices()}"
    )


def cmd_whoami(state: AppState, args: list[str]) -> str:
    if state.session is None:
        return "No active session. Use /login <user_id> [display name]."
    name = f" ({state.session.display_name})" if state.session.display_name else ""
    return f"Signed in as {state.session.user_id}{name}."


def cmd_login(state: AppState, args: list[str]) -> str:
    """Switch the injected session (identity itself is handled by the provider)."""
    if not args:
        return "Usage: /login <user_id> [display name]"
    state.session = Session(user_id=args[0], display_name=" ".join(args[1:]))
    asyncio.run(state.notifications.refresh())
    return f"Session: {args[0]}. {state.notifications.unread_count} notification(s)."


def cmd_logout(state: AppState, args: list[str]) -> str:
    state.session = None
    asyncio.run(state.notifications.refresh())
    return "Session closed."


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks          -> all tasks
    /tasks active   -> pending + in progress
    /tasks <status> -> tasks with that status
    """
    tz = resolve_time_zone(state.settings)
    statuses = None
    if args:
        if args[0].lower() == "active":
            statuses = ACTIVE_STATUSES
        else:
            try:
                statuses = {TaskStatus.parse(" ".join(args))}
            except ValueError as e:
                return str(e)

    tasks = state.task_store.list_tasks(statuses=statuses)
    if not tasks:
        return "No tasks."
    return "\n".join(["Tasks:", *(_task_line(t, tz) for t in tasks)])


def cmd_add_task(state: AppState, args: list[str]) -> str:
    """/add-task <due YYYY-MM-DD> <name...>"""
    if len(args) < 2:
        return "Usage: /add-task <due YYYY-MM-DD> <name...>"
    tz = resolve_time_zone(state.settings)
    try:
        due = _parse_day(args[0], tz)
    except ValueError as e:
        return str(e)

    assigned = (state.session.display_name or state.session.user_id) if state.session else ""
    result = create_task_action(
        state.task_store,
        name=" ".join(args[1:]),
        assigned_to=assigned,
        due_date=due,
        clients=state.client_store,
    )
    if not result.success:
        return f"Could not create task: {result.error}"
    return f"Task created: {result.id}"


def cmd_task_status(state: AppState, args: list[str]) -> str:
    """/task-status <id> <pending|in_progress|completed>"""
    if len(args) < 2:
        return "Usage: /task-status <id> <pending|in_progress|completed>"
    try:
        status = TaskStatus.parse(" ".join(args[1:]))
    except ValueError as e:
        return str(e)

    task_id = _resolve_task_id(state, args[0])
    if task_id is None:
        return f"Task {args[0]} not found (or ambiguous prefix)."

    result = update_task_status_action(state.task_store, task_id, status)
    if not result.success:
        return f"Status update failed: {result.error}"
    return f"Task {task_id[:8]} -> {status.value}"


def cmd_alert(state: AppState, args: list[str]) -> str:
    """
    /alert <id> <YYYY-MM-DD> [HH:MM] -> set or move the task alert
    /alert <id> none                 -> clear it
    """
    if len(args) < 2:
        return "Usage: /alert <id> <YYYY-MM-DD> [HH:MM] | /alert <id> none"
    task_id = _resolve_task_id(state, args[0])
    task = state.task_store.get_task(task_id) if task_id else None
    if task is None:
        return f"Task {args[0]} not found (or ambiguous prefix)."
    if task.due_date is None:
        return f"Task {task.id[:8]} has no due date; edit it first."

    tz = resolve_time_zone(state.settings)
    alert_date = None
    if args[1].lower() != "none":
        try:
            alert_date = _parse_day(args[1], tz)
            if len(args) > 2:
                hh, mm = args[2].split(":", 1)
                alert_date = alert_date.replace(hour=int(hh), minute=int(mm))
        except ValueError as e:
            return str(e)

    edit = TaskEdit(
        name=task.name,
        assigned_to=task.assigned_to,
        due_date=task.due_date,
        priority=task.priority,
        status=task.status,
        description=task.description,
        client_id=task.client_id,
        client_name=task.client_name,
        alert_date=alert_date,
    )
    result = edit_task_action(state.task_store, task.id, edit, clients=state.client_store)
    if not result.success:
        return f"Alert update failed: {result.error}"
    if alert_date is None:
        return f"Alert cleared for {task.id[:8]}."
    return f"Alert for {task.id[:8]} set to {alert_date.strftime('%d/%m/%Y %H:%M')}."


def cmd_due(state: AppState, args: list[str]) -> str:
    """/due [days] -> active tasks due from today through today+days (default 1)"""
    days = 1
    if args:
        try:
            days = int(args[0])
        except ValueError:
            return DUE_USAGE
        if not 0 <= days <= MAX_DUE_DAYS:
            return DUE_USAGE

    tz = resolve_time_zone(state.settings)
    tasks = state.task_store.list_due_tasks(now=datetime.now(tz), horizon_days=days)
    if not tasks:
        return f"No active tasks due in the next {days} day(s)."
    return "\n".join([f"Due within {days} day(s):", *(_task_line(t, tz) for t in tasks)])


def cmd_upcoming(state: AppState, args: list[str]) -> str:
    """Same answer the assistant's getUpcomingTasksTool gives."""
    out = state.tools.invoke(UPCOMING_TASKS_TOOL.name, {})
    if "error" in out:
        return f"Upcoming tasks unavailable: {out['error']}"
    lines = [str(out.get("summary", ""))]
    for t in out.get("tasks", []):
        client = f" ({t['clientName']})" if t.get("clientName") else ""
        lines.append(f"  - {t['name']}{client} vence el {t['dueDate']}")
    return "\n".join(lines)


def cmd_notifications(state: AppState, args: list[str]) -> str:
    center = state.notifications
    tz = resolve_time_zone(state.settings)
    if center.last_error:
        return f"Notifications unavailable: {center.last_error}"
    if not center.results:
        return "No notifications."
    header = f"Notifications ({center.unread_count} unread):"
    return "\n".join([header, *(_task_line(t, tz) for t in center.results)])


def cmd_refresh(state: AppState, args: list[str]) -> str:
    asyncio.run(state.notifications.refresh())
    return f"{state.notifications.unread_count} notification(s)."


def cmd_ack(state: AppState, args: list[str]) -> str:
    state.notifications.acknowledge()
    return "Notifications marked as read."


def cmd_clients(state: AppState, args: list[str]) -> str:
    clients = state.client_store.list_clients()
    if not clients:
        return "No clients."
    lines = ["Clients:"]
    for c in clients:
        paid = "" if c.pagado is None else (" paid" if c.pagado else " UNPAID")
        lines.append(f"  {c.id[:8]}  {c.name}  services={len(c.contracted_services)}{paid}")
    return "\n".join(lines)


# /edit-client field name -> update_client keyword
CLIENT_EDIT_FIELDS = {
    "name": "name",
    "email": "email",
    "telefono": "telefono",
    "phone": "telefono",
    "clinica": "clinica",
    "profile": "profile_summary",
    "avatar": "avatar_url",
    "pagado": "pagado",
    "paid": "pagado",
}


def cmd_add_client(state: AppState, args: list[str]) -> str:
    """/add-client <name...>"""
    if not args:
        return "Usage: /add-client <name...>"
    result = add_client_action(state.client_store, name=" ".join(args))
    if not result.success:
        return result.error or "Could not add client."
    return f"{result.message} ({result.id})"


def cmd_edit_client(state: AppState, args: list[str]) -> str:
    """
    /edit-client <id> <field> <value...>
    /edit-client <id> <field>            -> clear an optional field
    """
    fields = "|".join(sorted(set(CLIENT_EDIT_FIELDS)))
    if len(args) < 2:
        return f"Usage: /edit-client <id> <{fields}> [value...]"
    key = CLIENT_EDIT_FIELDS.get(args[1].lower())
    if key is None:
        return f"Unknown client field: {args[1]} (use {fields})"

    client_id = _resolve_client_id(state, args[0])
    if client_id is None:
        return f"Client {args[0]} not found (or ambiguous prefix)."

    raw = " ".join(args[2:])
    value: object = raw
    if key == "pagado":
        if raw.lower() in ("yes", "si", "sí", "true", "1"):
            value = True
        elif raw.lower() in ("no", "false", "0"):
            value = False
        else:
            value = None

    result = update_client_action(state.client_store, client_id, **{key: value})
    if not result.success:
        return result.error or "Could not update client."
    return result.message or "Client updated."


def cmd_delete_client(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete-client <id>"
    client_id = _resolve_client_id(state, args[0])
    if client_id is None:
        return f"Client {args[0]} not found (or ambiguous prefix)."
    result = delete_client_action(state.client_store, client_id)
    return (result.message if result.success else result.error) or ""


def cmd_client_icon(state: AppState, args: list[str]) -> str:
    """/client-icon <id> <path to .svg>"""
    if len(args) < 2:
        return "Usage: /client-icon <id> <file.svg>"
    client_id = _resolve_client_id(state, args[0])
    if client_id is None:
        return f"Client {args[0]} not found (or ambiguous prefix)."
    try:
        svg = Path(" ".join(args[1:])).expanduser().read_text(encoding="utf-8")
    except OSError as e:
        return f"Cannot read icon: {e}"
    result = update_profile_icon_action(state.client_store, client_id, svg)
    return (result.message if result.success else result.error) or ""


def _invoice_line(inv: Invoice, tz, now: datetime) -> str:
    who = inv.client_name or inv.client_id or "-"
    late = " (past due)" if inv.is_past_due(now) else ""
    return (
        f"  {inv.id[:8]}  {_fmt_date(inv.issued_date, tz)}  {_fmt_date(inv.due_date, tz)}  "
        f"{inv.status.value:<9}  {inv.total_amount:>10.2f}  {who}{late}"
    )


def _resolve_invoice_id(state: AppState, prefix: str) -> str | None:
    if not prefix:
        return None
    if state.invoice_store.get_invoice(prefix) is not None:
        return prefix
    matches = [i.id for i in state.invoice_store.list_invoices() if i.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def _parse_item(raw: str, description: str) -> InvoiceItem:
    """Item from "2x50" or "1x49.90" plus a description."""
    qty, sep, price = raw.lower().partition("x")
    if not sep:
        raise ValueError(f"bad item: {raw!r} (use <qty>x<unit price>)")
    return InvoiceItem(description=description, quantity=int(qty), unit_price=float(price))


def _draft_from_invoice(inv: Invoice) -> InvoiceDraft:
    return InvoiceDraft(
        client_id=inv.client_id,
        issued_date=inv.issued_date,
        due_date=inv.due_date,
        items=list(inv.items),
        status=inv.status,
        tax_rate=inv.tax_rate,
        notes=inv.notes,
    )


def cmd_invoices(state: AppState, args: list[str]) -> str:
    """/invoices [status] -> newest first"""
    status = None
    if args:
        try:
            status = InvoiceStatus.parse(" ".join(args))
        except ValueError as e:
            return str(e)

    tz = resolve_time_zone(state.settings)
    invoices = state.invoice_store.list_invoices(status=status)
    if not invoices:
        return "No invoices."
    now = datetime.now(tz)
    return "\n".join(["Invoices:", *(_invoice_line(i, tz, now) for i in invoices)])


def cmd_add_invoice(state: AppState, args: list[str]) -> str:
    """/add-invoice <client id> <due YYYY-MM-DD> <qty>x<unit price> <description...>"""
    usage = "Usage: /add-invoice <client id> <due YYYY-MM-DD> <qty>x<unit price> <description...>"
    if len(args) < 4:
        return usage
    client_id = _resolve_client_id(state, args[0])
    if client_id is None:
        return f"Client {args[0]} not found (or ambiguous prefix)."

    tz = resolve_time_zone(state.settings)
    try:
        due = _parse_day(args[1], tz)
        item = _parse_item(args[2], " ".join(args[3:]))
    except ValueError as e:
        return str(e)

    today = datetime.combine(datetime.now(tz).date(), time.min, tzinfo=tz)
    draft = InvoiceDraft(client_id=client_id, issued_date=today, due_date=due, items=[item])
    result = create_invoice_action(state.invoice_store, draft, clients=state.client_store)
    if not result.success:
        return f"Could not create invoice: {result.error}"
    return f"{result.message} ({result.id})"


def cmd_edit_invoice(state: AppState, args: list[str]) -> str:
    """
    /edit-invoice <id> tax <rate %>
    /edit-invoice <id> due <YYYY-MM-DD>
    /edit-invoice <id> notes [text...]           -> empty clears the notes
    /edit-invoice <id> item <qty>x<price> <text> -> append a line item
    """
    usage = "Usage: /edit-invoice <id> <tax|due|notes|item> [value...]"
    if len(args) < 2:
        return usage
    invoice_id = _resolve_invoice_id(state, args[0])
    invoice = state.invoice_store.get_invoice(invoice_id) if invoice_id else None
    if invoice is None:
        return f"Invoice {args[0]} not found (or ambiguous prefix)."

    draft = _draft_from_invoice(invoice)
    what, rest = args[1].lower(), args[2:]
    try:
        if what == "tax" and rest:
            draft.tax_rate = float(rest[0])
        elif what == "due" and rest:
            draft.due_date = _parse_day(rest[0], resolve_time_zone(state.settings))
        elif what == "notes":
            draft.notes = " ".join(rest) or None
        elif what == "item" and len(rest) >= 2:
            draft.items.append(_parse_item(rest[0], " ".join(rest[1:])))
        else:
            return usage
    except ValueError as e:
        return str(e)

    result = edit_invoice_action(state.invoice_store, invoice.id, draft, clients=state.client_store)
    if not result.success:
        return f"Could not update invoice: {result.error}"
    updated = state.invoice_store.get_invoice(invoice.id)
    total = f" Total: {updated.total_amount:.2f}" if updated else ""
    return f"{result.message}{total}"


def cmd_invoice_status(state: AppState, args: list[str]) -> str:
    """/invoice-status <id> <pagada|no_pagada|vencida>"""
    if len(args) < 2:
        return "Usage: /invoice-status <id> <pagada|no_pagada|vencida>"
    try:
        status = InvoiceStatus.parse(" ".join(args[1:]))
    except ValueError as e:
        return str(e)

    invoice_id = _resolve_invoice_id(state, args[0])
    if invoice_id is None:
        return f"Invoice {args[0]} not found (or ambiguous prefix)."

    result = update_invoice_status_action(state.invoice_store, invoice_id, status)
    if not result.success:
        return f"Status update failed: {result.error}"
    return f"Invoice {invoice_id[:8]} -> {status.value}"


def cmd_suggest(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """/suggest <client id> <content type...> -> social media post draft for the client"""
    if len(args) < 2:
        return "Usage: /suggest <client id> <content type, e.g. Instagram post>"
    client_id = _resolve_client_id(state, args[0])
    client = state.client_store.get_client(client_id) if client_id else None
    if client is None:
        return f"Client {args[0]} not found (or ambiguous prefix)."

    profile = client_profile_text(client)
    if profile is None:
        return (
            f"Client {client.name} has no profile summary. "
            f"Add one with /edit-client {client.id[:8]} profile <text>."
        )

    if emit is not None:
        emit("[LLM] Generating post suggestion...")
    try:
        return suggest_social_media_post(state.llm, client_profile=profile, content_type=" ".join(args[1:]))
    except RuntimeError as e:
        logger.info("Post suggestion failed: %s", e)
        return f"[LLM] {friendly_llm_error_message(e)}"


def cmd_save(state: AppState, args: list[str]) -> str:
    user_id = state.session.user_id if state.session else None
    result = save_conversation_action(
        state.documents,
        list(state.conversation),
        user_id,
        " ".join(args) or None,
    )
    if not result.success:
        return f"Not saved: {result.error}"
    return f"Conversation saved: {result.message} ({result.id})"


def cmd_remind(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """/remind <task id> -> push the task's alert to the calendar"""
    if not args:
        return "Usage: /remind <task id>"
    task_id = _resolve_task_id(state, args[0])
    task = state.task_store.get_task(task_id) if task_id else None
    if task is None:
        return f"Task {args[0]} not found (or ambiguous prefix)."

    if emit is not None and state.calendar is not None:
        emit("[CALENDAR] Creating event...")

    result = add_calendar_event_for_task_action(
        state.calendar,
        name=task.name,
        description=task.description,
        alert_date=task.alert_date,
        time_zone=str(getattr(state.settings, "time_zone", "UTC")),
        reminder_minutes=int(getattr(state.settings, "calendar_reminder_minutes", 10)),
    )
    if not result.success:
        return result.message or result.error or "Calendar event failed."
    return f"{result.message} {result.link or ''}".rstrip()


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show current settings (LLM/session/counts).")
registry.register("whoami", cmd_whoami, help_text="Show the current session.")
registry.register("login", cmd_login, help_text="Switch session: /login <user_id> [display name].")
registry.register("logout", cmd_logout, help_text="Close the current session.")
registry.register("tasks", cmd_tasks, help_text="List tasks: /tasks [active|<status>].")
registry.register("add-task", cmd_add_task, help_text="Create a task: /add-task <YYYY-MM-DD> <name>.")
registry.register("task-status", cmd_task_status, help_text="Change status: /task-status <id> <status>.")
registry.register("alert", cmd_alert, help_text="Set/clear a task alert: /alert <id> <YYYY-MM-DD> [HH:MM] | none.")
registry.register("due", cmd_due, help_text="Active tasks due soon: /due [days].")
registry.register("upcoming", cmd_upcoming, help_text="Upcoming-tasks summary (assistant tool).")
registry.register("notifications", cmd_notifications, help_text="Show notifications.", aliases=["n"])
registry.register("refresh", cmd_refresh, help_text="Refresh notifications.")
registry.register("ack", cmd_ack, help_text="Mark notifications as read.")
registry.register("clients", cmd_clients, help_text="List clients.")
registry.register("add-client", cmd_add_client, help_text="Add a client: /add-client <name>.")
registry.register("edit-client", cmd_edit_client, help_text="Edit a client field: /edit-client <id> <field> [value].")
registry.register("delete-client", cmd_delete_client, help_text="Delete a client: /delete-client <id>.")
registry.register("client-icon", cmd_client_icon, help_text="Set a client profile icon: /client-icon <id> <file.svg>.")
registry.register("invoices", cmd_invoices, help_text="List invoices: /invoices [status].")
registry.register(
    "add-invoice",
    cmd_add_invoice,
    help_text="Create an invoice: /add-invoice <client id> <due YYYY-MM-DD> <qty>x<price> <description>.",
)
registry.register("edit-invoice", cmd_edit_invoice, help_text="Edit an invoice: /edit-invoice <id> <tax|due|notes|item> [value].")
registry.register("invoice-status", cmd_invoice_status, help_text="Change invoice status: /invoice-status <id> <status>.")
registry.register("suggest", cmd_suggest, help_text="Suggest a social media post: /suggest <client id> <content type>.")
registry.register("save", cmd_save, help_text="Save this conversation: /save [title].")
registry.register("remind", cmd_remind, help_text="Push a task alert to the calendar: /remind <id>.")
