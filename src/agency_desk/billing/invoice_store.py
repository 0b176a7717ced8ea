# src/agency_desk/billing/invoice_store.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from ..store.documents import DELETE_FIELD, SERVER_TIMESTAMP, DocumentStore
from .invoice_models import Invoice, InvoiceDraft, InvoiceStatus, compute_totals

logger = logging.getLogger(__name__)

INVOICES_COLLECTION = "invoices"


class InvoiceStore:
    """
    Invoices over the "invoices" document collection.

    Totals are always recomputed from the items on write; stored totals are
    never taken from the caller.
    """

    def __init__(self, documents: DocumentStore) -> None:
        self._docs = documents

    # ---- reads ----

    def count_invoices(self) -> int:
        return self._docs.count(INVOICES_COLLECTION)

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        doc = self._docs.get(INVOICES_COLLECTION, invoice_id)
        return Invoice.from_document(doc.id, doc.data) if doc else None

    def list_invoices(self, *, status: InvoiceStatus | None = None) -> list[Invoice]:
        """Newest first (createdAt desc); records without createdAt go last."""
        if status is None:
            docs = self._docs.query(INVOICES_COLLECTION)
        else:
            docs = self._docs.query(INVOICES_COLLECTION, equals={"status": str(status)})
        invoices = [Invoice.from_document(d.id, d.data) for d in docs]
        invoices.sort(key=lambda i: (i.created_at is not None, i.created_at or datetime.min, i.id), reverse=True)
        return invoices

    # ---- writes ----

    def _form_fields(self, draft: InvoiceDraft) -> dict[str, Any]:
        error = draft.validation_error()
        if error:
            raise ValueError(error)
        totals = compute_totals(draft.items, draft.tax_rate)
        return {
            "clientId": draft.client_id,
            "issuedDate": draft.issued_date,
            "dueDate": draft.due_date,
            "status": str(draft.status),
            "items": [item.to_record() for item in draft.items],
            "taxRate": draft.tax_rate or 0.0,
            "taxAmount": totals.tax_amount,
            "totalAmount": totals.total_amount,
        }

    def add_invoice(self, draft: InvoiceDraft, *, client_name: str | None = None) -> str:
        data = self._form_fields(draft)
        if client_name:
            data["clientName"] = client_name
        if draft.notes and draft.notes.strip():
            data["notes"] = draft.notes.strip()
        data["createdAt"] = SERVER_TIMESTAMP
        data["updatedAt"] = SERVER_TIMESTAMP

        invoice_id = self._docs.add(INVOICES_COLLECTION, data)
        logger.debug("Invoice added id=%s client=%s total=%.2f", invoice_id, draft.client_id, data["totalAmount"])
        return invoice_id

    def update_invoice(self, invoice_id: str, draft: InvoiceDraft, *, client_name: str | None = None) -> None:
        """
        Apply an edit-form submission.

        clientName and notes are removed when empty. Raises DocumentNotFound
        when the invoice does not exist.
        """
        fields = self._form_fields(draft)
        fields["clientName"] = client_name if client_name else DELETE_FIELD
        fields["notes"] = draft.notes.strip() if draft.notes and draft.notes.strip() else DELETE_FIELD
        fields["updatedAt"] = SERVER_TIMESTAMP

        self._docs.update(INVOICES_COLLECTION, invoice_id, fields)
        logger.debug("Invoice updated id=%s total=%.2f", invoice_id, fields["totalAmount"])

    def update_invoice_status(self, invoice_id: str, status: InvoiceStatus) -> None:
        self._docs.update(
            INVOICES_COLLECTION,
            invoice_id,
            {"status": str(status), "updatedAt": SERVER_TIMESTAMP},
        )
