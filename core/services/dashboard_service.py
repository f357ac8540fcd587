# =============================================================================
# core/services/dashboard_service.py - Dashboard Aggregation
# =============================================================================
# Builds the numbers and feeds shown on the admin dashboard:
# - get_stats(): ten exact counts, issued concurrently
# - asset_status_distribution() / asset_type_distribution(): chart feeds
# - recent_activity(): merged loan/ticket feed with relative timestamps
#
# The Supabase client is synchronous, so each count runs in a worker thread
# and the ten threads are awaited together with asyncio.gather().
# =============================================================================

import asyncio
import logging
from datetime import datetime
from typing import Any

from core.models.asset import AssetStatusId
from core.models.dashboard import ActivityItem, DashboardStats, StatusSlice, TypeBar
from core.models.loan import ACTIVE_LOAN_STATUSES
from core.models.ticket import TicketStatus
from lib.supabase_client import SupabaseClient
from lib.utils import format_time_ago, parse_timestamp, utc_now

logger = logging.getLogger(__name__)

# Number of loans and of tickets pulled into the activity feed
RECENT_SOURCE_LIMIT = 5
# Maximum entries returned by the activity feed
RECENT_ACTIVITY_LIMIT = 10

UNKNOWN_LABEL = "Unknown"


class DashboardService:
    """
    Service for dashboard statistics and feeds.

    Example:
        service = DashboardService(db)
        stats = await service.get_stats()
        stats.model_dump(by_alias=True)["loanedAssets"]  # 2
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    async def get_stats(self) -> DashboardStats:
        """
        Count assets per status, active loans and tickets per status.

        All counts are issued at once; the first failure propagates.
        """
        (
            total_assets,
            available_assets,
            in_use_assets,
            maintenance_assets,
            retired_assets,
            loaned_assets,
            total_tickets,
            open_tickets,
            in_progress_tickets,
            resolved_tickets,
        ) = await asyncio.gather(
            asyncio.to_thread(self.db.count_rows, "assets"),
            asyncio.to_thread(self.db.count_rows, "assets", status_id=AssetStatusId.AVAILABLE.value),
            asyncio.to_thread(self.db.count_rows, "assets", status_id=AssetStatusId.IN_USE.value),
            asyncio.to_thread(self.db.count_rows, "assets", status_id=AssetStatusId.MAINTENANCE.value),
            asyncio.to_thread(self.db.count_rows, "assets", status_id=AssetStatusId.RETIRED.value),
            asyncio.to_thread(self._count_active_loans),
            asyncio.to_thread(self.db.count_rows, "tickets"),
            asyncio.to_thread(self.db.count_rows, "tickets", status=TicketStatus.OPEN.value),
            asyncio.to_thread(self.db.count_rows, "tickets", status=TicketStatus.IN_PROGRESS.value),
            asyncio.to_thread(self._count_resolved_tickets),
        )

        stats = DashboardStats(
            total_assets=total_assets,
            available_assets=available_assets,
            in_use_assets=in_use_assets,
            loaned_assets=loaned_assets,
            maintenance_assets=maintenance_assets,
            retired_assets=retired_assets,
            total_tickets=total_tickets,
            open_tickets=open_tickets,
            in_progress_tickets=in_progress_tickets,
            resolved_tickets=resolved_tickets,
        )
        logger.debug(f"Dashboard stats: {stats.model_dump()}")
        return stats

    def _count_active_loans(self) -> int:
        return self.db.count(
            self.db.table("loans")
            .select("id", count="exact", head=True)
            .is_("actual_checkin_date", "null")
            .in_("status", ACTIVE_LOAN_STATUSES),
            "count active loans",
        )

    def _count_resolved_tickets(self) -> int:
        # Closed tickets count as resolved on the dashboard
        return self.db.count(
            self.db.table("tickets")
            .select("id", count="exact", head=True)
            .in_("status", [TicketStatus.RESOLVED.value, TicketStatus.CLOSED.value]),
            "count resolved tickets",
        )

    # -------------------------------------------------------------------------
    # Charts
    # -------------------------------------------------------------------------

    def asset_status_distribution(self) -> list[StatusSlice]:
        """Assets per status name, in first-seen order."""
        response = self.db.execute(
            self.db.table("assets").select("status_id, asset_status(name)"),
            "fetch asset status distribution",
        )
        counts = _group_by_joined_name(response.data or [], "asset_status")
        return [StatusSlice(name=name, value=count) for name, count in counts.items()]

    def asset_type_distribution(self) -> list[TypeBar]:
        """Assets per type name, in first-seen order."""
        response = self.db.execute(
            self.db.table("assets").select("type_id, asset_types(name)"),
            "fetch asset type distribution",
        )
        counts = _group_by_joined_name(response.data or [], "asset_types")
        return [TypeBar(name=name, cantidad=count) for name, count in counts.items()]

    # -------------------------------------------------------------------------
    # Activity Feed
    # -------------------------------------------------------------------------

    def recent_activity(self, now: datetime | None = None) -> list[ActivityItem]:
        """
        Latest loans, returns and new tickets, newest first.

        Args:
            now: Reference time for the relative timestamps

        Returns:
            Up to 10 items with timestamps such as "hace 2 horas"
        """
        now = now or utc_now()

        loans = self.db.execute(
            self.db.table("loans")
            .select("id, checkout_date, actual_checkin_date, status, assets(name), profiles(full_name)")
            .order("checkout_date", desc=True)
            .limit(RECENT_SOURCE_LIMIT),
            "fetch recent loans",
        ).data or []

        tickets = self.db.execute(
            self.db.table("tickets")
            .select("id, title, created_at, status, assets(name)")
            .order("created_at", desc=True)
            .limit(RECENT_SOURCE_LIMIT),
            "fetch recent tickets",
        ).data or []

        # (raw timestamp, item) pairs; sorted before the timestamp is reworded
        entries: list[tuple[Any, dict[str, Any]]] = []

        for loan in loans:
            asset_name = _joined_name(loan, "assets")
            user_name = _joined_name(loan, "profiles", key="full_name")
            if loan.get("actual_checkin_date"):
                entries.append((loan["actual_checkin_date"], {
                    "id": f"loan-return-{loan['id']}",
                    "type": "return",
                    "message": f"Equipo devuelto: {asset_name} por {user_name}",
                    "user": user_name,
                }))
            else:
                entries.append((loan.get("checkout_date"), {
                    "id": f"loan-{loan['id']}",
                    "type": "loan",
                    "message": f"Préstamo iniciado: {asset_name} a {user_name}",
                    "user": user_name,
                }))

        for ticket in tickets:
            entries.append((ticket.get("created_at"), {
                "id": f"ticket-{ticket['id']}",
                "type": "ticket",
                "message": f"Ticket creado: {ticket.get('title')} para {_joined_name(ticket, 'assets')}",
            }))

        entries.sort(key=lambda entry: _sort_key(entry[0]), reverse=True)

        return [
            ActivityItem(timestamp=format_time_ago(raw, now=now), **item)
            for raw, item in entries[:RECENT_ACTIVITY_LIMIT]
        ]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _joined_name(row: dict[str, Any], relation: str, key: str = "name") -> str | None:
    """Read a field from an embedded (joined) relation, if present."""
    joined = row.get(relation)
    if isinstance(joined, dict):
        return joined.get(key)
    return None


def _group_by_joined_name(rows: list[dict[str, Any]], relation: str) -> dict[str, int]:
    counts: dict[str, int] = {}
    for row in rows:
        name = _joined_name(row, relation) or UNKNOWN_LABEL
        counts[name] = counts.get(name, 0) + 1
    return counts


def _sort_key(raw: Any) -> float:
    # Unparseable timestamps sort last
    parsed = parse_timestamp(raw)
    return parsed.timestamp() if parsed else float("-inf")
