# tests/test_clients.py

from __future__ import annotations

import pytest

from agency_desk.cli.commands import registry
from agency_desk.clients.client_api import (
    add_client_action,
    delete_client_action,
    update_client_action,
    update_profile_icon_action,
)
from agency_desk.clients.client_models import ContractedService
from agency_desk.clients.client_store import CLIENTS_COLLECTION, ClientStore
from agency_desk.store.documents import DocumentNotFound, DocumentStore

from .conftest import NOW


class ExplodingStore:
    def __getattr__(self, name):
        raise AssertionError(f"store must not be touched ({name})")


def test_update_client_clears_blank_optional_fields(client_store: ClientStore, documents: DocumentStore) -> None:
    client_id = client_store.add_client(
        name="Clínica Sol",
        telefono="600 000 000",
        clinica="Sol",
        profile_summary="Dental",
        contracted_services=[ContractedService("SEO", 300.0, "Mensual")],
    )

    client_store.update_client(client_id, telefono=" ", clinica=None, contracted_services=[], name=" Clínica Luna ")

    raw = documents.get(CLIENTS_COLLECTION, client_id).data
    assert raw["name"] == "Clínica Luna"
    assert "telefono" not in raw
    assert "clinica" not in raw
    assert "contractedServices" not in raw
    assert raw["profileSummary"] == "Dental"

    client = client_store.get_client(client_id)
    assert client.contracted_services == []
    assert client.updated_at == NOW


def test_update_client_rejects_bad_input(client_store: ClientStore) -> None:
    client_id = client_store.add_client(name="A")
    with pytest.raises(ValueError):
        client_store.update_client(client_id, name="")
    with pytest.raises(TypeError):
        client_store.update_client(client_id, nickname="x")
    with pytest.raises(DocumentNotFound):
        client_store.update_client("missing", email="a@b.c")


def test_client_actions(client_store: ClientStore) -> None:
    res = add_client_action(client_store, name="Clínica Sol", email="sol@example.com")
    assert (res.success, res.message) == (True, "Client added successfully!")
    client_id = res.id

    assert add_client_action(client_store, name=" ").error == "Error adding client: name is required"

    res = update_client_action(client_store, client_id, pagado=True)
    assert res.message == "Client updated successfully!"
    assert client_store.get_client(client_id).pagado is True
    assert update_client_action(client_store, "missing", pagado=True).error == "Client missing not found."

    res = update_profile_icon_action(client_store, client_id, "<svg/>")
    assert res.success is True
    assert client_store.get_client(client_id).profile_icon == "<svg/>"

    res = delete_client_action(client_store, client_id)
    assert (res.success, res.message) == (True, "Cliente eliminado exitosamente.")
    assert client_store.get_client(client_id) is None
    assert delete_client_action(client_store, client_id).success is False


def test_client_actions_require_id() -> None:
    assert update_client_action(ExplodingStore(), "", name="x").error == "Client ID is required for an update."
    assert delete_client_action(ExplodingStore(), "").error == "Client ID is required to delete a client."
    assert update_profile_icon_action(ExplodingStore(), "c1", " ").success is False


def test_client_commands(state, tmp_path) -> None:
    out = registry.handle(state, "/add-client Clínica Sol")
    assert out.startswith("Client added successfully!")
    client = state.client_store.find_by_name("Clínica Sol")
    prefix = client.id[:8]

    assert registry.handle(state, f"/edit-client {prefix} telefono 600 111 222") == "Client updated successfully!"
    assert state.client_store.get_client(client.id).telefono == "600 111 222"

    registry.handle(state, f"/edit-client {prefix} telefono")
    assert state.client_store.get_client(client.id).telefono is None

    registry.handle(state, f"/edit-client {prefix} paid no")
    assert state.client_store.get_client(client.id).pagado is False
    assert "UNPAID" in registry.handle(state, "/clients")

    assert registry.handle(state, f"/edit-client {prefix} colour red").startswith("Unknown client field")

    icon = tmp_path / "icon.svg"
    icon.write_text("<svg><circle r='4'/></svg>", encoding="utf-8")
    assert registry.handle(state, f"/client-icon {prefix} {icon}") == "Profile icon updated."

    assert registry.handle(state, f"/delete-client {prefix}") == "Cliente eliminado exitosamente."
    assert registry.handle(state, "/clients") == "No clients."
