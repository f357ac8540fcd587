# =============================================================================
# core/services/loan_service.py - Loan (Préstamo) Business Logic
# =============================================================================
# Handles loan listing with search/pagination, lookup, creation and updates.
# Every loan leaving this service carries derived_status.
#
# "At most one active loan per asset" is checked before inserting, and the
# store's partial unique index on loans(asset_id) for active rows is the
# backstop: its unique violation is reported with the same message.
# =============================================================================

import logging
import re
from datetime import datetime
from typing import Any

from app.exceptions import ConflictError, NotFoundError, ValidationError
from core.models.asset import AssetStatusId
from core.models.common import Pagination
from core.models.loan import (
    ACTIVE_LOAN_STATUSES,
    LoanCreate,
    LoanStatus,
    LoanUpdate,
    with_derived_status,
)
from core.validation import (
    is_uuid,
    optional_text,
    provided_fields,
    require_int,
    require_text,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import utc_now

logger = logging.getLogger(__name__)

LOAN_SELECT = (
    "id, asset_id, user_id, checkout_date, expected_checkin_date, "
    "actual_checkin_date, status, notes, "
    "assets(id, name, serial_number, description, asset_types(name)), "
    "profiles(id, full_name)"
)

LOAN_UPDATE_FIELDS = [
    "asset_id",
    "user_id",
    "checkout_date",
    "expected_checkin_date",
    "actual_checkin_date",
    "status",
    "notes",
]

REQUIRED_FIELDS_MESSAGE = (
    "Los campos asset_id, user_id y expected_checkin_date son obligatorios"
)
ACTIVE_LOAN_MESSAGE = "El equipo ya tiene un préstamo activo"

# Characters with meaning inside a PostgREST or=(...) filter
_FILTER_RESERVED = re.compile(r"[,()]")


class LoanService:
    """
    Service for loan operations.

    Example:
        service = LoanService(db)
        page = service.list_loans(page=2, limit=10, search="laptop")
        page["pagination"]  # {"page": 2, "limit": 10, "total": 23, "totalPages": 3}
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_loans(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        status: str | None = None,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        List loans with pagination, newest checkout first.

        Args:
            page: Page number (1-indexed)
            limit: Items per page
            search: Case-insensitive match on notes, asset name or user name
            status: Comma-separated stored statuses; "all" disables the filter
            now: Reference time for status derivation

        Returns:
            {"data": [...], "pagination": {page, limit, total, totalPages}}
        """
        count_query = self.db.table("loans").select("id", count="exact", head=True)
        data_query = self.db.table("loans").select(LOAN_SELECT)

        statuses = self._parse_statuses(status)
        if statuses:
            count_query = count_query.in_("status", statuses)
            data_query = data_query.in_("status", statuses)

        search_filter = self._search_filter(search)
        if search_filter:
            count_query = count_query.or_(search_filter)
            data_query = data_query.or_(search_filter)

        total = self.db.count(count_query, "count loans")
        pagination = Pagination.build(page=page, limit=limit, total=total)

        offset = pagination.offset()
        response = self.db.execute(
            data_query
            .order("checkout_date", desc=True)
            .range(offset, offset + limit - 1),
            "list loans",
        )
        loans = response.data or []

        logger.debug(f"Retrieved {len(loans)} loans ({total} total), page {page}")
        return {
            "data": [with_derived_status(loan, now=now) for loan in loans],
            "pagination": pagination.model_dump(by_alias=True),
        }

    def get_loan(self, loan_id: int, now: datetime | None = None) -> dict[str, Any]:
        """
        Get one loan with asset and borrower details.

        Raises:
            NotFoundError: If the loan doesn't exist
        """
        loan = self.db.fetch_one("loans", LOAN_SELECT, id=loan_id)
        if not loan:
            raise NotFoundError("Préstamo no encontrado", resource_id=loan_id)
        return with_derived_status(loan, now=now)

    @staticmethod
    def _parse_statuses(status: str | None) -> list[str]:
        if not status or status.strip().lower() == "all":
            return []
        return [value.strip() for value in status.split(",") if value.strip()]

    def _search_filter(self, search: str | None) -> str | None:
        """
        Build an or=(...) filter matching notes, asset name or borrower name.

        Asset and profile names live in other tables, so matching ids are
        looked up first and folded into the filter.
        """
        if not search:
            return None

        term = _FILTER_RESERVED.sub(" ", search).strip()
        if not term:
            return None

        pattern = f"%{term}%"
        assets = self.db.execute(
            self.db.table("assets").select("id").ilike("name", pattern),
            "search assets",
        ).data or []
        profiles = self.db.execute(
            self.db.table("profiles").select("id").ilike("full_name", pattern),
            "search profiles",
        ).data or []

        clauses = [f"notes.ilike.{pattern}"]
        if assets:
            clauses.append(f"asset_id.in.({','.join(str(a['id']) for a in assets)})")
        if profiles:
            clauses.append(f"user_id.in.({','.join(str(p['id']) for p in profiles)})")
        return ",".join(clauses)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_loan(self, body: LoanCreate, now: datetime | None = None) -> dict[str, Any]:
        """
        Lend an available asset to a user.

        Raises:
            ValidationError: Missing fields, unknown asset/user, or the asset
                isn't available
            ConflictError: If the asset already has an active loan
        """
        asset_id = require_int(body.asset_id, REQUIRED_FIELDS_MESSAGE, field="asset_id")
        user_id = require_text(body.user_id, REQUIRED_FIELDS_MESSAGE, field="user_id")
        expected_checkin_date = require_text(
            body.expected_checkin_date,
            REQUIRED_FIELDS_MESSAGE,
            field="expected_checkin_date",
        )

        asset = self.db.fetch_one("assets", "id, name, status_id", id=asset_id)
        if not asset:
            raise ValidationError("Equipo no encontrado", field="asset_id")

        if asset.get("status_id") != AssetStatusId.AVAILABLE:
            raise ValidationError("El equipo no está disponible para préstamo", field="asset_id")

        if self._has_active_loan(asset_id):
            raise ConflictError(ACTIVE_LOAN_MESSAGE)

        user = self._fetch_profile(user_id)
        if not user:
            raise ValidationError("Usuario no encontrado", field="user_id")

        data = {
            "asset_id": asset_id,
            "user_id": user_id,
            "checkout_date": body.checkout_date or (now or utc_now()).isoformat(),
            "expected_checkin_date": expected_checkin_date,
            "status": body.status or LoanStatus.ACTIVE.value,
            "notes": optional_text(body.notes),
        }

        try:
            response = self.db.execute(
                self.db.table("loans").insert(data),
                "create loan",
            )
        except SupabaseClientError as e:
            if e.is_unique_violation:
                raise ConflictError(ACTIVE_LOAN_MESSAGE) from e
            raise

        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="INSERT_NO_DATA")

        created = response.data[0]
        logger.info(
            f"Created loan: {created['id']} - asset {asset.get('name')} "
            f"to user {user.get('full_name')}"
        )
        return self.get_loan(created["id"], now=now)

    def update_loan(
        self,
        loan_id: int,
        body: LoanUpdate,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Update the fields present in the body.

        Raises:
            ValidationError: Nothing to update, or unknown asset/user
            ConflictError: If the change gives the asset a second active loan
            NotFoundError: If the loan doesn't exist
        """
        data = provided_fields(body, LOAN_UPDATE_FIELDS)
        if not data:
            raise ValidationError("No hay campos para actualizar")

        if data.get("asset_id") is not None:
            asset_id = require_int(data["asset_id"], "ID de equipo inválido", field="asset_id")
            if not self.db.fetch_one("assets", "id", id=asset_id):
                raise ValidationError("Equipo no encontrado", field="asset_id")
            data["asset_id"] = asset_id

        if data.get("user_id") is not None and not self._fetch_profile(data["user_id"]):
            raise ValidationError("Usuario no encontrado", field="user_id")

        try:
            response = self.db.execute(
                self.db.table("loans").update(data).eq("id", loan_id),
                "update loan",
            )
        except SupabaseClientError as e:
            if e.is_unique_violation:
                raise ConflictError(ACTIVE_LOAN_MESSAGE) from e
            raise

        if not response.data:
            raise NotFoundError("Préstamo no encontrado", resource_id=loan_id)

        logger.info(f"Updated loan: {loan_id} ({', '.join(sorted(data))})")
        return self.get_loan(loan_id, now=now)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _has_active_loan(self, asset_id: int) -> bool:
        response = self.db.execute(
            self.db.table("loans")
            .select("id")
            .eq("asset_id", asset_id)
            .is_("actual_checkin_date", "null")
            .in_("status", ACTIVE_LOAN_STATUSES)
            .limit(1),
            "check active loan",
        )
        return bool(response.data)

    def _fetch_profile(self, user_id: str) -> dict[str, Any] | None:
        if not is_uuid(user_id):
            return None
        return self.db.fetch_one("profiles", "id, full_name", id=user_id)
