# src/agency_desk/clients/client_store.py

from __future__ import annotations

import logging
from typing import Any

from ..store.documents import DELETE_FIELD, SERVER_TIMESTAMP, DocumentStore
from .client_models import Client, ContractedService

logger = logging.getLogger(__name__)

CLIENTS_COLLECTION = "clients"

# Keyword -> wire field accepted by update_client().
EDITABLE_FIELDS = {
    "name": "name",
    "email": "email",
    "telefono": "telefono",
    "clinica": "clinica",
    "profile_summary": "profileSummary",
    "avatar_url": "avatarUrl",
    "contracted_services": "contractedServices",
    "pagado": "pagado",
}

# Blank values remove these fields instead of storing "".
CLEARABLE_STRINGS = frozenset({"telefono", "clinica", "profile_summary", "avatar_url"})


class ClientStore:
    """Client records over the "clients" document collection."""

    def __init__(self, documents: DocumentStore) -> None:
        self._docs = documents

    def count_clients(self) -> int:
        return self._docs.count(CLIENTS_COLLECTION)

    def add_client(
        self,
        *,
        name: str,
        email: str | None = None,
        telefono: str | None = None,
        clinica: str | None = None,
        profile_summary: str | None = None,
        contracted_services: list[ContractedService] | None = None,
        pagado: bool | None = None,
    ) -> str:
        if not name or not name.strip():
            raise ValueError("name is required")

        data: dict[str, Any] = {
            "name": name.strip(),
            "contractedServices": [s.to_record() for s in (contracted_services or [])],
            "createdAt": SERVER_TIMESTAMP,
            "updatedAt": SERVER_TIMESTAMP,
        }
        for key, value in (
            ("email", email),
            ("telefono", telefono),
            ("clinica", clinica),
            ("profileSummary", profile_summary),
        ):
            if value:
                data[key] = value
        if pagado is not None:
            data["pagado"] = bool(pagado)

        client_id = self._docs.add(CLIENTS_COLLECTION, data)
        logger.debug("Client added id=%s name=%s", client_id, data["name"])
        return client_id

    def get_client(self, client_id: str) -> Client | None:
        doc = self._docs.get(CLIENTS_COLLECTION, client_id)
        return Client.from_document(doc.id, doc.data) if doc else None

    def find_by_name(self, name: str) -> Client | None:
        """Exact-name lookup; the first match wins."""
        if not name:
            return None
        docs = self._docs.query(CLIENTS_COLLECTION, equals={"name": name}, limit=1)
        return Client.from_document(docs[0].id, docs[0].data) if docs else None

    def list_clients(self) -> list[Client]:
        clients = [Client.from_document(d.id, d.data) for d in self._docs.stream(CLIENTS_COLLECTION)]
        clients.sort(key=lambda c: (c.name.lower(), c.id))
        return clients

    # ---- edits ----

    def update_client(self, client_id: str, **changes: Any) -> None:
        """
        Apply an edit-form submission; only the given fields change.

        - None removes the field
        - blank telefono/clinica/profile_summary/avatar_url remove the field
        - an empty contracted_services list removes the field
        Raises DocumentNotFound when the client does not exist.
        """
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise TypeError(f"unknown client field(s): {', '.join(unknown)}")

        fields: dict[str, Any] = {"updatedAt": SERVER_TIMESTAMP}
        for key, value in changes.items():
            wire = EDITABLE_FIELDS[key]
            if key == "name":
                if not value or not str(value).strip():
                    raise ValueError("name is required")
                fields[wire] = str(value).strip()
            elif value is None:
                fields[wire] = DELETE_FIELD
            elif key == "contracted_services":
                fields[wire] = [s.to_record() for s in value] if value else DELETE_FIELD
            elif key == "pagado":
                fields[wire] = bool(value)
            elif isinstance(value, str) and not value.strip() and key in CLEARABLE_STRINGS:
                fields[wire] = DELETE_FIELD
            else:
                fields[wire] = value.strip() if isinstance(value, str) else value

        self._docs.update(CLIENTS_COLLECTION, client_id, fields)
        logger.debug("Client updated id=%s fields=%s", client_id, sorted(fields))

    def update_profile_icon(self, client_id: str, icon_svg: str) -> None:
        self._docs.update(CLIENTS_COLLECTION, client_id, {"profileIcon": icon_svg})

    def delete_client(self, client_id: str) -> bool:
        deleted = self._docs.delete(CLIENTS_COLLECTION, client_id)
        logger.debug("Client delete id=%s deleted=%s", client_id, deleted)
        return deleted
