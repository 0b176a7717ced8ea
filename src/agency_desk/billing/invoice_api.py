# src/agency_desk/billing/invoice_api.py

from __future__ import annotations

import logging

from ..clients.client_store import ClientStore
from ..core.results import ActionResult
from ..store.documents import DocumentNotFound
from .invoice_models import InvoiceDraft, InvoiceStatus
from .invoice_store import InvoiceStore

logger = logging.getLogger(__name__)

SAVE_FAILED = "Hubo un problema al guardar la factura. Por favor, intenta de nuevo."


def _client_name(clients: ClientStore | None, client_id: str | None) -> str | None:
    if not client_id or clients is None:
        return None
    try:
        client = clients.get_client(client_id)
    except Exception:
        logger.exception("Client lookup failed client_id=%s", client_id)
        return None
    return client.name if client else None


def create_invoice_action(
    invoices: InvoiceStore,
    draft: InvoiceDraft,
    *,
    clients: ClientStore | None = None,
) -> ActionResult:
    error = draft.validation_error()
    if error:
        return ActionResult.fail(error)

    client_name = _client_name(clients, draft.client_id)
    try:
        invoice_id = invoices.add_invoice(draft, client_name=client_name)
    except Exception:
        logger.exception("create_invoice_action failed")
        return ActionResult.fail(SAVE_FAILED)

    logger.info("Invoice created id=%s", invoice_id)
    return ActionResult.ok(
        f"La factura para {client_name or 'el cliente seleccionado'} ha sido creada.",
        id=invoice_id,
    )


def edit_invoice_action(
    invoices: InvoiceStore,
    invoice_id: str,
    draft: InvoiceDraft,
    *,
    clients: ClientStore | None = None,
) -> ActionResult:
    if not invoice_id:
        return ActionResult.fail("Invoice ID is required.")
    error = draft.validation_error()
    if error:
        return ActionResult.fail(error)

    client_name = _client_name(clients, draft.client_id)
    try:
        invoices.update_invoice(invoice_id, draft, client_name=client_name)
    except DocumentNotFound:
        return ActionResult.fail("Factura no Encontrada")
    except Exception:
        logger.exception("edit_invoice_action failed invoice_id=%s", invoice_id)
        return ActionResult.fail(SAVE_FAILED)

    logger.info("Invoice %s updated", invoice_id)
    return ActionResult.ok(
        f'La factura "{invoice_id[:8].upper()}" para {client_name or "el cliente seleccionado"} '
        "ha sido actualizada.",
        id=invoice_id,
    )


def update_invoice_status_action(
    invoices: InvoiceStore,
    invoice_id: str,
    status: InvoiceStatus | None,
) -> ActionResult:
    if not invoice_id or not status:
        return ActionResult.fail("Invoice ID and new status are required.")

    try:
        invoices.update_invoice_status(invoice_id, status)
    except DocumentNotFound:
        return ActionResult.fail("Factura no Encontrada")
    except Exception as e:
        logger.exception("update_invoice_status_action failed invoice_id=%s", invoice_id)
        return ActionResult.fail(str(e) or SAVE_FAILED)

    logger.info("Invoice %s status -> %s", invoice_id, status)
    return ActionResult.ok(id=invoice_id)
