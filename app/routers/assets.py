# =============================================================================
# app/routers/assets.py - Asset (Equipo) Endpoints
# =============================================================================
# Handles equipment listing, lookup, creation and updates.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.asset import AssetWrite
from core.services.asset_service import AssetService

router = APIRouter()


@router.get("/assets")
async def list_assets(
    db: SupabaseDep,
    status: Annotated[
        str | None,
        Query(description="Comma-separated: available, in_use, maintenance, retired"),
    ] = None,
    user: AuthUser = Depends(get_current_user),
):
    """
    List assets, newest first.

    Each asset carries current_loan; assets on loan report the
    "En Préstamo" status (id 99).
    """
    return AssetService(db).list_assets(status=status)


@router.get("/assets/{asset_id}")
async def get_asset(
    db: SupabaseDep,
    asset_id: Annotated[int, Path(description="Asset id")],
    user: AuthUser = Depends(get_current_user),
):
    """Get one asset with its current loan."""
    return AssetService(db).get_asset(asset_id)


@router.post("/assets", status_code=201)
async def create_asset(
    db: SupabaseDep,
    body: AssetWrite,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create an asset.

    name, serial_number, status_id and type_id are required; a QR code
    is generated. Serial numbers must be unique.
    """
    return AssetService(db).create_asset(body)


@router.patch("/assets/{asset_id}")
async def update_asset(
    db: SupabaseDep,
    asset_id: Annotated[int, Path(description="Asset id")],
    body: AssetWrite,
    user: AuthUser = Depends(get_current_user),
):
    """Update an asset. Same validation as create."""
    return AssetService(db).update_asset(asset_id, body)
