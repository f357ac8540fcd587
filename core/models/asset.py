# =============================================================================
# core/models/asset.py - Asset Schemas
# =============================================================================
# These models define the API contract for equipment (assets):
# - AssetStatusId: Stored status ids plus the virtual "on loan" id
# - AssetWrite: Body for creating or replacing an asset
# - AssetTypeCreate: Body for creating an asset type
#
# Fields are typed loosely on purpose: presence and integer checks are done
# by the service so every rule produces its own message.
# =============================================================================

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class AssetStatusId(IntEnum):
    """
    Rows of the asset_status lookup table.

    ON_LOAN is never stored: it is reported in place of the stored status
    while the asset has an active loan.
    """
    AVAILABLE = 1
    IN_USE = 2
    MAINTENANCE = 3
    RETIRED = 4
    ON_LOAN = 99


ON_LOAN_STATUS = {"id": AssetStatusId.ON_LOAN.value, "name": "En Préstamo"}

# Query-string status names accepted by GET /assets?status=...
STATUS_NAME_TO_ID: dict[str, int] = {
    "available": AssetStatusId.AVAILABLE.value,
    "in_use": AssetStatusId.IN_USE.value,
    "maintenance": AssetStatusId.MAINTENANCE.value,
    "retired": AssetStatusId.RETIRED.value,
}


def status_ids_from_names(raw: str | None) -> list[int]:
    """
    Map a comma-separated list of status names to status ids.

    Unknown names are ignored, order is preserved and duplicates dropped.

    Example:
        status_ids_from_names("available,Retired,bogus")  # [1, 4]
    """
    if not raw:
        return []

    ids: list[int] = []
    for name in raw.split(","):
        status_id = STATUS_NAME_TO_ID.get(name.strip().lower())
        if status_id is not None and status_id not in ids:
            ids.append(status_id)
    return ids


class AssetWrite(BaseModel):
    """
    Body for POST /assets and PATCH /assets/{id}.

    Example:
        {
            "name": "Laptop Dell Latitude",
            "serial_number": "DL-5540-001",
            "status_id": 1,
            "type_id": 2
        }
    """
    name: str | None = Field(default=None, examples=["Laptop Dell Latitude"])
    serial_number: str | None = Field(default=None, examples=["DL-5540-001"])
    description: str | None = Field(default=None, examples=["14 pulgadas, 16GB RAM"])
    purchase_date: str | None = Field(default=None, examples=["2024-03-01"])
    status_id: Any = Field(default=None, examples=[1])
    type_id: Any = Field(default=None, examples=[2])


class AssetTypeCreate(BaseModel):
    """Body for POST /asset-types."""
    name: str | None = Field(default=None, examples=["Proyector"])
    description: str | None = Field(default=None, examples=["Proyectores portátiles"])
