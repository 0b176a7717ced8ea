# src/agency_desk/clients/client_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..store.timestamps import RecordSchema, as_datetime, list_of

SERVICE_SCHEMA = RecordSchema(fields={"startDate": as_datetime, "endDate": as_datetime})

CLIENT_SCHEMA = RecordSchema(
    fields={
        "contractStartDate": as_datetime,
        "nextBillingDate": as_datetime,
        "createdAt": as_datetime,
        "updatedAt": as_datetime,
        "contractedServices": list_of(SERVICE_SCHEMA),
    }
)


@dataclass(slots=True)
class ContractedService:
    service_name: str
    price: float
    payment_modality: str
    start_date: datetime | None = None

    @classmethod
    def from_record(cls, d: Mapping[str, Any]) -> ContractedService:
        try:
            price = float(d.get("price") or 0.0)
        except (TypeError, ValueError):
            price = 0.0
        start = d.get("startDate")
        return cls(
            service_name=str(d.get("serviceName") or ""),
            price=price,
            payment_modality=str(d.get("paymentModality") or ""),
            start_date=start if isinstance(start, datetime) else None,
        )

    def to_record(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "serviceName": self.service_name,
            "price": self.price,
            "paymentModality": self.payment_modality,
        }
        if self.start_date is not None:
            out["startDate"] = self.start_date
        return out


@dataclass(slots=True)
class Client:
    id: str
    name: str
    email: str | None = None
    telefono: str | None = None
    clinica: str | None = None
    profile_summary: str | None = None
    contracted_services: list[ContractedService] = field(default_factory=list)
    pagado: bool | None = None
    avatar_url: str | None = None
    profile_icon: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Client:
        d = CLIENT_SCHEMA.decode(data)
        services_raw = d.get("contractedServices") or []
        services = [
            ContractedService.from_record(s) for s in services_raw if isinstance(s, Mapping)
        ]
        pagado = d.get("pagado")
        created = d.get("createdAt")
        updated = d.get("updatedAt")
        return cls(
            id=str(doc_id),
            name=str(d.get("name") or ""),
            email=d.get("email") or None,
            telefono=d.get("telefono") or None,
            clinica=d.get("clinica") or None,
            profile_summary=d.get("profileSummary") or None,
            contracted_services=services,
            pagado=pagado if isinstance(pagado, bool) else None,
            avatar_url=d.get("avatarUrl") or None,
            profile_icon=d.get("profileIcon") or None,
            created_at=created if isinstance(created, datetime) else None,
            updated_at=updated if isinstance(updated, datetime) else None,
        )
