# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoint
# - assets.py: Equipment inventory endpoints
# - prestamos.py: Loan endpoints
# - tickets.py: Support ticket endpoints
# - users.py: User management endpoints
# - lookups.py: Roles, asset statuses/types and assignable profiles
# - faqs.py: FAQ endpoints
# - dashboard.py: Dashboard statistics and activity feed
#
# Each router is mounted in main.py under the route prefix.
# =============================================================================

from . import assets
from . import dashboard
from . import faqs
from . import health
from . import lookups
from . import prestamos
from . import tickets
from . import users

__all__ = [
    "assets",
    "dashboard",
    "faqs",
    "health",
    "lookups",
    "prestamos",
    "tickets",
    "users",
]
