# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .asset_service import AssetService
from .auth_service import AuthService
from .dashboard_service import DashboardService
from .faq_service import FAQService
from .loan_service import LoanService
from .lookup_service import LookupService
from .ticket_service import TicketService
from .user_service import UserService

__all__ = [
    "AssetService",
    "AuthService",
    "DashboardService",
    "FAQService",
    "LoanService",
    "LookupService",
    "TicketService",
    "UserService",
]
