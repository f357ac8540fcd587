# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: Role ids, pagination and message envelopes
# - asset.py: Asset schemas and status ids (incl. virtual "En Préstamo")
# - loan.py: Loan schemas and derive_loan_status()
# - ticket.py: Ticket schemas and statuses
# - user.py: User management and auth session schemas
# - faq.py: FAQ schema
# - dashboard.py: Dashboard response models
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Common Models
# -----------------------------------------------------------------------------
from .common import (
    MessageResponse,
    Pagination,
    RoleId,
)

# -----------------------------------------------------------------------------
# Asset Models - Equipment inventory
# -----------------------------------------------------------------------------
from .asset import (
    ON_LOAN_STATUS,
    AssetStatusId,
    AssetTypeCreate,
    AssetWrite,
    status_ids_from_names,
)

# -----------------------------------------------------------------------------
# Loan Models - Préstamos and status derivation
# -----------------------------------------------------------------------------
from .loan import (
    ACTIVE_LOAN_STATUSES,
    LoanCreate,
    LoanStatus,
    LoanUpdate,
    derive_loan_status,
    with_derived_status,
)

# -----------------------------------------------------------------------------
# Ticket Models
# -----------------------------------------------------------------------------
from .ticket import (
    DEFAULT_PRIORITY,
    TicketCreate,
    TicketStatus,
    TicketUpdate,
)

# -----------------------------------------------------------------------------
# User & Auth Models
# -----------------------------------------------------------------------------
from .user import (
    LoginRequest,
    LoginResponse,
    SessionUser,
    UserCreate,
    UserUpdate,
    ValidateResponse,
)

# -----------------------------------------------------------------------------
# FAQ & Dashboard Models
# -----------------------------------------------------------------------------
from .faq import FAQWrite
from .dashboard import (
    ActivityItem,
    DashboardStats,
    StatusSlice,
    TypeBar,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Common
    "MessageResponse",
    "Pagination",
    "RoleId",
    # Asset
    "ON_LOAN_STATUS",
    "AssetStatusId",
    "AssetTypeCreate",
    "AssetWrite",
    "status_ids_from_names",
    # Loan
    "ACTIVE_LOAN_STATUSES",
    "LoanCreate",
    "LoanStatus",
    "LoanUpdate",
    "derive_loan_status",
    "with_derived_status",
    # Ticket
    "DEFAULT_PRIORITY",
    "TicketCreate",
    "TicketStatus",
    "TicketUpdate",
    # User
    "LoginRequest",
    "LoginResponse",
    "SessionUser",
    "UserCreate",
    "UserUpdate",
    "ValidateResponse",
    # FAQ
    "FAQWrite",
    # Dashboard
    "ActivityItem",
    "DashboardStats",
    "StatusSlice",
    "TypeBar",
]
