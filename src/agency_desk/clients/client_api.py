# src/agency_desk/clients/client_api.py

"""
Result-shaped client actions (add / update / delete / profile icon).

Same contract as tasks.task_api: validation happens before store access and
store failures come back as ActionResult(success=False, ...).
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.results import ActionResult
from ..store.documents import DocumentNotFound
from .client_store import ClientStore

logger = logging.getLogger(__name__)


def add_client_action(clients: ClientStore, **fields: Any) -> ActionResult:
    try:
        client_id = clients.add_client(**fields)
    except Exception as e:
        logger.exception("add_client_action failed")
        return ActionResult.fail(f"Error adding client: {str(e) or 'Unknown error'}")

    logger.info("Client added id=%s", client_id)
    return ActionResult.ok("Client added successfully!", id=client_id)


def update_client_action(clients: ClientStore, client_id: str, **changes: Any) -> ActionResult:
    if not client_id:
        return ActionResult.fail("Client ID is required for an update.")

    try:
        clients.update_client(client_id, **changes)
    except DocumentNotFound:
        return ActionResult.fail(f"Client {client_id} not found.")
    except Exception as e:
        logger.exception("update_client_action failed client_id=%s", client_id)
        return ActionResult.fail(f"Error updating client: {str(e) or 'Unknown error'}")

    logger.info("Client %s updated (%s)", client_id, ", ".join(sorted(changes)) or "timestamp only")
    return ActionResult.ok("Client updated successfully!", id=client_id)


def delete_client_action(clients: ClientStore, client_id: str) -> ActionResult:
    if not client_id:
        return ActionResult.fail("Client ID is required to delete a client.")

    try:
        deleted = clients.delete_client(client_id)
    except Exception as e:
        logger.exception("delete_client_action failed client_id=%s", client_id)
        return ActionResult.fail(f"Error al eliminar el cliente: {str(e) or 'Error desconocido'}.")

    if not deleted:
        return ActionResult.fail(f"Client {client_id} not found.")
    logger.info("Client %s deleted", client_id)
    return ActionResult.ok("Cliente eliminado exitosamente.", id=client_id)


def update_profile_icon_action(clients: ClientStore, client_id: str, icon_svg: str) -> ActionResult:
    if not client_id:
        return ActionResult.fail("Client ID is required to update profile icon.")
    if not icon_svg or not icon_svg.strip():
        return ActionResult.fail("Profile icon is empty.")

    try:
        clients.update_profile_icon(client_id, icon_svg)
    except DocumentNotFound:
        return ActionResult.fail(f"Client {client_id} not found.")
    except Exception as e:
        logger.exception("update_profile_icon_action failed client_id=%s", client_id)
        return ActionResult.fail(f"Failed to update profile icon: {str(e) or 'Unknown error'}")

    logger.info("Profile icon updated for client %s", client_id)
    return ActionResult.ok("Profile icon updated.", id=client_id)
