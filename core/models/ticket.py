# =============================================================================
# core/models/ticket.py - Ticket Schemas
# =============================================================================
# These models define the API contract for support tickets:
# - TicketStatus: Workflow states (Spanish values stored in the table)
# - TicketCreate / TicketUpdate: Request bodies
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TicketStatus(str, Enum):
    """
    Possible states for a ticket.

    Flow: abierto -> en_progreso -> resuelto -> cerrado
    """
    OPEN = "abierto"
    IN_PROGRESS = "en_progreso"
    RESOLVED = "resuelto"
    CLOSED = "cerrado"


DEFAULT_PRIORITY = "media"


class TicketCreate(BaseModel):
    """
    Body for POST /tickets.

    Example:
        {
            "title": "Pantalla parpadea",
            "priority": "alta",
            "asset_id": 12
        }
    """
    title: str | None = Field(default=None, examples=["Pantalla parpadea"])
    description: str | None = Field(default=None, examples=["La pantalla parpadea al encender"])
    priority: str | None = Field(default=None, examples=["alta"])
    status: str | None = Field(default=None, examples=["abierto"])
    asset_id: Any = Field(default=None, examples=[12])
    assigned_to: str | None = Field(default=None, examples=["660e8400-e29b-41d4-a716-446655440001"])
    reported_by: str | None = Field(default=None, examples=["550e8400-e29b-41d4-a716-446655440000"])


class TicketUpdate(BaseModel):
    """
    Body for PATCH /tickets/{id}.

    Only fields present in the body are written.
    """
    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    asset_id: Any = None
    assigned_to: str | None = None
