# =============================================================================
# app/routers/prestamos.py - Loan (Préstamo) Endpoints
# =============================================================================
# Handles equipment loans. All endpoints require authentication.
# Every loan returned carries derived_status.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.loan import LoanCreate, LoanUpdate
from core.services.loan_service import LoanService

router = APIRouter()


@router.get("/prestamos")
async def list_loans(
    db: SupabaseDep,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
    search: Annotated[
        str | None,
        Query(description="Matches notes, asset name or borrower name"),
    ] = None,
    status: Annotated[
        str | None,
        Query(description="Comma-separated stored statuses, or 'all'"),
    ] = None,
    user: AuthUser = Depends(get_current_user),
):
    """
    List loans with pagination, newest checkout first.

    Returns {data, pagination: {page, limit, total, totalPages}}.
    """
    return LoanService(db).list_loans(page=page, limit=limit, search=search, status=status)


@router.get("/prestamos/{loan_id}")
async def get_loan(
    db: SupabaseDep,
    loan_id: Annotated[int, Path(description="Loan id")],
    user: AuthUser = Depends(get_current_user),
):
    """Get one loan with asset and borrower details."""
    return LoanService(db).get_loan(loan_id)


@router.post("/prestamos", status_code=201)
async def create_loan(
    db: SupabaseDep,
    body: LoanCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Lend an asset.

    The asset must be available and have no active loan.
    """
    return LoanService(db).create_loan(body)


@router.patch("/prestamos/{loan_id}")
async def update_loan(
    db: SupabaseDep,
    loan_id: Annotated[int, Path(description="Loan id")],
    body: LoanUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Update the fields present in the body (e.g. record a return)."""
    return LoanService(db).update_loan(loan_id, body)
