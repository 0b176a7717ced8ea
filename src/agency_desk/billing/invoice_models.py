# src/agency_desk/billing/invoice_models.py

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..store.timestamps import convert_timestamps


class InvoiceStatus(StrEnum):
    UNPAID = "No Pagada"
    PAID = "Pagada"
    OVERDUE = "Vencida"

    @classmethod
    def from_db(cls, raw: str | None) -> InvoiceStatus:
        if not raw:
            return cls.UNPAID
        try:
            return cls(raw)
        except ValueError:
            pass
        # Early records used English status names.
        legacy = {"Paid": cls.PAID, "Unpaid": cls.UNPAID, "Overdue": cls.OVERDUE}
        return legacy.get(raw, cls.UNPAID)

    @classmethod
    def parse(cls, raw: str) -> InvoiceStatus:
        """Lenient user input: "pagada", "paid", "no_pagada", "unpaid", "vencida", "overdue"."""
        key = (raw or "").strip().lower().replace("_", " ").replace("-", " ")
        for status in cls:
            if key in (status.value.lower(), status.name.lower()):
                return status
        raise ValueError(f"unknown invoice status: {raw!r}")


@dataclass(slots=True, frozen=True)
class InvoiceItem:
    description: str
    quantity: int
    unit_price: float

    @property
    def amount(self) -> float:
        return self.quantity * self.unit_price

    @classmethod
    def from_record(cls, d: Mapping[str, Any]) -> InvoiceItem:
        try:
            quantity = int(d.get("quantity") or 0)
        except (TypeError, ValueError):
            quantity = 0
        try:
            unit_price = float(d.get("unitPrice") or 0.0)
        except (TypeError, ValueError):
            unit_price = 0.0
        return cls(description=str(d.get("description") or ""), quantity=quantity, unit_price=unit_price)

    def to_record(self) -> dict[str, Any]:
        return {"description": self.description.strip(), "quantity": self.quantity, "unitPrice": self.unit_price}


@dataclass(slots=True, frozen=True)
class InvoiceTotals:
    subtotal: float
    tax_amount: float
    total_amount: float


def compute_totals(items: Iterable[InvoiceItem], tax_rate: float = 0.0) -> InvoiceTotals:
    """tax_rate is a percentage (21 means 21%)."""
    subtotal = sum(item.amount for item in items)
    tax_amount = subtotal * (tax_rate or 0.0) / 100
    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total_amount=subtotal + tax_amount)


@dataclass(slots=True)
class InvoiceDraft:
    """
    Create/edit form submission.

    client_name is resolved from client_id by the actions; it is not user input.
    """

    client_id: str | None
    issued_date: datetime | None
    due_date: datetime | None
    items: list[InvoiceItem] = field(default_factory=list)
    status: InvoiceStatus = InvoiceStatus.UNPAID
    tax_rate: float = 0.0
    notes: str | None = None

    def validation_error(self) -> str | None:
        if not self.client_id:
            return "Debe seleccionar un cliente."
        if self.issued_date is None:
            return "La fecha de emisión es obligatoria."
        if self.due_date is None:
            return "La fecha de vencimiento es obligatoria."
        if not self.items:
            return "Debe agregar al menos un ítem a la factura."
        for item in self.items:
            if not item.description or not item.description.strip():
                return "La descripción es obligatoria."
            if item.quantity < 1:
                return "Cantidad debe ser al menos 1."
            if item.unit_price < 0:
                return "El precio no puede ser negativo."
        if self.tax_rate < 0:
            return "La tasa no puede ser negativa."
        return None


def _opt_dt(value: Any) -> datetime | None:
    return value if isinstance(value, datetime) else None


def _float(value: Any) -> float:
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(slots=True)
class Invoice:
    id: str
    client_id: str
    client_name: str | None
    issued_date: datetime | None
    due_date: datetime | None
    status: InvoiceStatus
    items: list[InvoiceItem]
    tax_rate: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def subtotal(self) -> float:
        return sum(item.amount for item in self.items)

    def is_past_due(self, now: datetime) -> bool:
        return self.status is not InvoiceStatus.PAID and self.due_date is not None and self.due_date < now

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Invoice:
        # Invoices are read schema-free: dates may sit at any level.
        d = convert_timestamps(data)
        items = [InvoiceItem.from_record(i) for i in d.get("items") or [] if isinstance(i, Mapping)]
        notes = d.get("notes")
        return cls(
            id=str(doc_id),
            client_id=str(d.get("clientId") or ""),
            client_name=d.get("clientName") or None,
            issued_date=_opt_dt(d.get("issuedDate")),
            due_date=_opt_dt(d.get("dueDate")),
            status=InvoiceStatus.from_db(d.get("status")),
            items=items,
            tax_rate=_float(d.get("taxRate")),
            tax_amount=_float(d.get("taxAmount")),
            # Records without a stored total fall back to the item sum.
            total_amount=_float(d["totalAmount"]) if "totalAmount" in d else sum(i.amount for i in items),
            notes=notes.strip() if isinstance(notes, str) and notes.strip() else None,
            created_at=_opt_dt(d.get("createdAt")),
            updated_at=_opt_dt(d.get("updatedAt")),
        )
