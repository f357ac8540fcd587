# =============================================================================
# core/models/loan.py - Loan (Préstamo) Schemas & Status Derivation
# =============================================================================
# These models define the API contract for loans:
# - LoanStatus: Stored/derived loan states
# - LoanCreate / LoanUpdate: Request bodies
# - derive_loan_status(): The one rule that decides what a loan's status
#   really is, applied everywhere a loan is returned
#
# The stored status is not trusted on its own: a loan whose expected return
# date has passed is overdue no matter what the row says.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from lib.utils import parse_timestamp, utc_now


class LoanStatus(str, Enum):
    """
    Possible states for a loan.

    - pending: Registered but not yet confirmed (reported as active)
    - active: Asset is out with the borrower
    - overdue: Expected return date has passed
    - returned: Asset came back (actual_checkin_date is set)
    """
    PENDING = "pending"
    ACTIVE = "active"
    OVERDUE = "overdue"
    RETURNED = "returned"


# Stored statuses that make a loan count as the asset's current loan
ACTIVE_LOAN_STATUSES = [
    LoanStatus.ACTIVE.value,
    LoanStatus.OVERDUE.value,
    LoanStatus.PENDING.value,
]


def derive_loan_status(loan: dict[str, Any], now: datetime | None = None) -> str | None:
    """
    Compute the status a loan should be displayed with.

    Rules, in order:
    1. actual_checkin_date set            -> "returned"
    2. now > expected_checkin_date        -> "overdue"
    3. stored status empty or "pending"   -> "active"
    4. otherwise                          -> stored status unchanged

    Args:
        loan: Loan row (needs status, expected_checkin_date, actual_checkin_date)
        now: Reference time (defaults to the current UTC time)

    Returns:
        The derived status string

    Example:
        derive_loan_status({"status": "pending", "expected_checkin_date": "2099-01-01"})
        # "active"
    """
    if loan.get("actual_checkin_date"):
        return LoanStatus.RETURNED.value

    reference = parse_timestamp(now) if now is not None else utc_now()
    expected = parse_timestamp(loan.get("expected_checkin_date"))
    if expected is not None and reference > expected:
        return LoanStatus.OVERDUE.value

    status = loan.get("status")
    if not status or status == LoanStatus.PENDING.value:
        return LoanStatus.ACTIVE.value

    return status


def with_derived_status(loan: dict[str, Any], now: datetime | None = None) -> dict[str, Any]:
    """Return a copy of the loan row with derived_status filled in."""
    return {**loan, "derived_status": derive_loan_status(loan, now=now)}


class LoanCreate(BaseModel):
    """
    Body for POST /prestamos.

    Example:
        {
            "asset_id": 12,
            "user_id": "550e8400-e29b-41d4-a716-446655440000",
            "expected_checkin_date": "2024-02-01",
            "notes": "Para la feria de ciencias"
        }
    """
    asset_id: Any = Field(default=None, examples=[12])
    user_id: str | None = Field(default=None, examples=["550e8400-e29b-41d4-a716-446655440000"])
    checkout_date: str | None = Field(default=None, examples=["2024-01-15T09:00:00Z"])
    expected_checkin_date: str | None = Field(default=None, examples=["2024-02-01"])
    status: str | None = Field(default=None, examples=["active"])
    notes: str | None = Field(default=None, examples=["Para la feria de ciencias"])


class LoanUpdate(BaseModel):
    """
    Body for PATCH /prestamos/{id}.

    Only fields present in the body are written; an explicit null clears
    the column.
    """
    asset_id: Any = None
    user_id: str | None = None
    checkout_date: str | None = None
    expected_checkin_date: str | None = None
    actual_checkin_date: str | None = None
    status: str | None = None
    notes: str | None = None
