# =============================================================================
# core/services/asset_service.py - Asset Business Logic
# =============================================================================
# Handles asset (equipment) listing, lookup, creation and updates.
#
# Listing annotates each asset with its current loan: while an asset has an
# active loan its status is reported as the virtual "En Préstamo" status
# (id 99), which is never stored.
# =============================================================================

import logging
import uuid
from datetime import datetime
from typing import Any

from app.exceptions import ConflictError, NotFoundError, ValidationError
from core.models.asset import ON_LOAN_STATUS, AssetWrite, status_ids_from_names
from core.models.loan import ACTIVE_LOAN_STATUSES, with_derived_status
from core.validation import optional_text, require_int, require_text
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import utc_now

logger = logging.getLogger(__name__)

ASSET_COLUMNS = (
    "id, name, qr_code, serial_number, description, purchase_date, "
    "status_id, type_id, created_at"
)

ASSET_DETAIL_SELECT = (
    f"{ASSET_COLUMNS}, "
    "asset_types(id, name, description), "
    "asset_status(id, name)"
)

CURRENT_LOAN_SELECT = (
    "id, asset_id, user_id, checkout_date, expected_checkin_date, "
    "actual_checkin_date, status, profiles(full_name)"
)

SERIAL_CONFLICT_MESSAGE = "El número de serie ya existe. Debe ser único."


class AssetService:
    """
    Service for asset operations.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_assets(
        self,
        status: str | None = None,
        now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """
        List assets, newest first, each with its current loan.

        Args:
            status: Comma-separated status names (available, in_use,
                maintenance, retired). Unknown names are ignored.
            now: Reference time for loan status derivation

        Returns:
            Asset rows with asset_types, asset_status and current_loan
        """
        query = self.db.table("assets").select(ASSET_DETAIL_SELECT)

        status_ids = status_ids_from_names(status)
        if status_ids:
            query = query.in_("status_id", status_ids)

        response = self.db.execute(
            query.order("created_at", desc=True),
            "list assets",
        )
        assets = response.data or []
        logger.debug(f"Fetched {len(assets)} assets (status filter: {status_ids or 'none'})")

        return self._attach_current_loans(assets, now=now)

    def get_asset(self, asset_id: int, now: datetime | None = None) -> dict[str, Any]:
        """
        Get one asset with its current loan.

        Raises:
            NotFoundError: If the asset doesn't exist
        """
        asset = self.db.fetch_one("assets", ASSET_DETAIL_SELECT, id=asset_id)
        if not asset:
            raise NotFoundError("Equipo no encontrado", resource_id=asset_id)

        return self._attach_current_loans([asset], now=now)[0]

    def _attach_current_loans(
        self,
        assets: list[dict[str, Any]],
        now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Annotate assets with current_loan, fetching all active loans in one query."""
        if not assets:
            return []

        asset_ids = [asset["id"] for asset in assets]
        response = self.db.execute(
            self.db.table("loans")
            .select(CURRENT_LOAN_SELECT)
            .in_("asset_id", asset_ids)
            .is_("actual_checkin_date", "null")
            .in_("status", ACTIVE_LOAN_STATUSES)
            .order("checkout_date", desc=True),
            "fetch current loans",
        )

        # Ordered newest first, so the first loan seen per asset wins
        current_loans: dict[Any, dict[str, Any]] = {}
        for loan in response.data or []:
            current_loans.setdefault(loan["asset_id"], loan)

        annotated = []
        for asset in assets:
            loan = current_loans.get(asset["id"])
            row = {**asset, "current_loan": None}
            if loan:
                row["current_loan"] = with_derived_status(loan, now=now)
                row["asset_status"] = dict(ON_LOAN_STATUS)
            annotated.append(row)
        return annotated

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_asset(self, body: AssetWrite) -> dict[str, Any]:
        """
        Create an asset with a freshly generated QR code.

        Raises:
            ValidationError: If a required field is missing or a referenced
                status/type doesn't exist
            ConflictError: If the serial number is already taken
        """
        data = self._validate(body)
        data["qr_code"] = str(uuid.uuid4())
        data["created_at"] = utc_now().isoformat()

        try:
            response = self.db.execute(
                self.db.table("assets").insert(data),
                "create asset",
            )
        except SupabaseClientError as e:
            self._raise_serial_conflict(e)
            raise

        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="INSERT_NO_DATA")

        asset = response.data[0]
        logger.info(f"Created asset: {asset['id']} ({asset.get('serial_number')})")
        return asset

    def update_asset(self, asset_id: int, body: AssetWrite) -> dict[str, Any]:
        """
        Replace an asset's editable fields.

        Raises:
            ValidationError: Same rules as create_asset
            ConflictError: If the serial number is already taken
            NotFoundError: If the asset doesn't exist
        """
        data = self._validate(body)

        try:
            response = self.db.execute(
                self.db.table("assets").update(data).eq("id", asset_id),
                "update asset",
            )
        except SupabaseClientError as e:
            self._raise_serial_conflict(e)
            raise

        if not response.data:
            raise NotFoundError("Equipo no encontrado", resource_id=asset_id)

        logger.info(f"Updated asset: {asset_id}")
        return response.data[0]

    def _validate(self, body: AssetWrite) -> dict[str, Any]:
        """Check required fields and foreign keys, returning the row to write."""
        name = require_text(body.name, "El nombre es obligatorio", field="name")
        serial_number = require_text(
            body.serial_number,
            "El número de serie es obligatorio",
            field="serial_number",
        )
        status_id = require_int(
            body.status_id,
            "El estado es obligatorio y debe ser un número entero",
            field="status_id",
        )
        type_id = require_int(
            body.type_id,
            "El tipo de equipo es obligatorio y debe ser un número entero",
            field="type_id",
        )

        if not self.db.fetch_one("asset_status", "id", id=status_id):
            raise ValidationError("El estado especificado no existe", field="status_id")

        if not self.db.fetch_one("asset_types", "id", id=type_id):
            raise ValidationError("El tipo de equipo especificado no existe", field="type_id")

        return {
            "name": name,
            "serial_number": serial_number,
            "description": optional_text(body.description),
            "purchase_date": body.purchase_date or None,
            "status_id": status_id,
            "type_id": type_id,
        }

    @staticmethod
    def _raise_serial_conflict(error: SupabaseClientError) -> None:
        """Translate a unique violation on serial_number into ConflictError."""
        if error.is_unique_violation and "serial_number" in error.message:
            raise ConflictError(SERIAL_CONFLICT_MESSAGE) from error
