# =============================================================================
# core/services/ticket_service.py - Ticket Business Logic
# =============================================================================
# Handles support tickets. Only technicians (role_id = 2) can be assigned.
# =============================================================================

import logging
from typing import Any

from app.exceptions import NotFoundError, ValidationError
from core.models.common import RoleId
from core.models.ticket import DEFAULT_PRIORITY, TicketCreate, TicketStatus, TicketUpdate
from core.validation import is_uuid, optional_text, provided_fields, require_int, require_text
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now

logger = logging.getLogger(__name__)

TICKET_SELECT = (
    "id, title, description, status, priority, created_at, updated_at, "
    "asset_id, reported_by, assigned_to, "
    "assets(id, name, serial_number, asset_types(name)), "
    "reported_by_profile:profiles!tickets_reported_by_fkey(id, full_name), "
    "assigned_to_profile:profiles!tickets_assigned_to_fkey(id, full_name)"
)

TICKET_UPDATE_FIELDS = [
    "title",
    "description",
    "status",
    "priority",
    "asset_id",
    "assigned_to",
]


class TicketService:
    """Service for ticket operations."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def list_tickets(self) -> list[dict[str, Any]]:
        """List tickets newest first with asset and people details."""
        response = self.db.execute(
            self.db.table("tickets")
            .select(TICKET_SELECT)
            .order("created_at", desc=True),
            "list tickets",
        )
        return response.data or []

    def get_ticket(self, ticket_id: int) -> dict[str, Any]:
        """
        Get one ticket.

        Raises:
            NotFoundError: If the ticket doesn't exist
        """
        ticket = self.db.fetch_one("tickets", TICKET_SELECT, id=ticket_id)
        if not ticket:
            raise NotFoundError("Ticket no encontrado", resource_id=ticket_id)
        return ticket

    def create_ticket(self, body: TicketCreate, reporter_id: str) -> dict[str, Any]:
        """
        Open a ticket.

        Args:
            body: Ticket fields; only title is required
            reporter_id: Used as reported_by when the body doesn't name one

        Raises:
            ValidationError: Missing title, unknown asset or reporter, or a
                non-technician assignee
        """
        title = require_text(body.title, "El título es obligatorio", field="title")

        asset_id = None
        if body.asset_id is not None:
            asset_id = self._validate_asset(body.asset_id)

        if body.assigned_to:
            self._ensure_technician(body.assigned_to)

        if body.reported_by:
            self._ensure_profile(body.reported_by)

        data = {
            "title": title,
            "description": optional_text(body.description),
            "priority": body.priority or DEFAULT_PRIORITY,
            "status": body.status or TicketStatus.OPEN.value,
            "asset_id": asset_id,
            "assigned_to": body.assigned_to or None,
            "reported_by": body.reported_by or reporter_id,
        }

        response = self.db.execute(
            self.db.table("tickets").insert(data),
            "create ticket",
        )
        created = response.data[0]
        logger.info(f"Created ticket: {created['id']}")
        return self.get_ticket(created["id"])

    def update_ticket(self, ticket_id: int, body: TicketUpdate) -> dict[str, Any]:
        """
        Update the fields present in the body.

        An assignee in the body is checked before anything is written,
        whatever else the request changes.

        Raises:
            ValidationError: Non-technician assignee or unknown asset
            NotFoundError: If the ticket doesn't exist
        """
        data = provided_fields(body, TICKET_UPDATE_FIELDS)

        if data.get("assigned_to") is not None:
            self._ensure_technician(data["assigned_to"])

        if data.get("asset_id") is not None:
            data["asset_id"] = self._validate_asset(data["asset_id"])

        data["updated_at"] = utc_now().isoformat()

        response = self.db.execute(
            self.db.table("tickets").update(data).eq("id", ticket_id),
            "update ticket",
        )
        if not response.data:
            raise NotFoundError("Ticket no encontrado", resource_id=ticket_id)

        logger.info(f"Updated ticket: {ticket_id}")
        return self.get_ticket(ticket_id)

    def _ensure_technician(self, profile_id: str) -> dict[str, Any]:
        """Raise unless the profile exists and has the technician role."""
        profile = None
        if is_uuid(profile_id):
            profile = self.db.fetch_one("profiles", "id, full_name, role_id", id=profile_id)

        if not profile:
            raise ValidationError("Usuario asignado no encontrado", field="assigned_to")

        if profile.get("role_id") != RoleId.TECHNICIAN:
            logger.info(
                f"Rejected assignment to {profile_id}: role_id={profile.get('role_id')}"
            )
            raise ValidationError(
                "Solo los técnicos (role_id = 2) pueden ser asignados a tickets",
                field="assigned_to",
            )

        return profile

    def _ensure_profile(self, profile_id: str) -> None:
        if not is_uuid(profile_id) or not self.db.fetch_one("profiles", "id", id=profile_id):
            raise ValidationError("Usuario reportante no encontrado", field="reported_by")

    def _validate_asset(self, value: Any) -> int:
        asset_id = require_int(value, "ID de equipo inválido", field="asset_id")
        if not self.db.fetch_one("assets", "id", id=asset_id):
            raise ValidationError("Equipo no encontrado", field="asset_id")
        return asset_id
