# =============================================================================
# app/routers/tickets.py - Ticket Endpoints
# =============================================================================
# Handles support tickets. All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.ticket import TicketCreate, TicketUpdate
from core.services.ticket_service import TicketService

router = APIRouter()


@router.get("/tickets")
async def list_tickets(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """List tickets, newest first, with asset, reporter and assignee."""
    return TicketService(db).list_tickets()


@router.get("/tickets/{ticket_id}")
async def get_ticket(
    db: SupabaseDep,
    ticket_id: Annotated[int, Path(description="Ticket id")],
    user: AuthUser = Depends(get_current_user),
):
    """Get one ticket."""
    return TicketService(db).get_ticket(ticket_id)


@router.post("/tickets", status_code=201)
async def create_ticket(
    db: SupabaseDep,
    body: TicketCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Open a ticket.

    reported_by defaults to the caller; assigned_to must be a technician.
    """
    return TicketService(db).create_ticket(body, reporter_id=user.id)


@router.patch("/tickets/{ticket_id}")
async def update_ticket(
    db: SupabaseDep,
    ticket_id: Annotated[int, Path(description="Ticket id")],
    body: TicketUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Update the fields present in the body."""
    return TicketService(db).update_ticket(ticket_id, body)
