# =============================================================================
# app/routers/lookups.py - Lookup Table Endpoints
# =============================================================================
# Roles, asset statuses, asset types and assignable profiles.
# All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.asset import AssetTypeCreate
from core.services.lookup_service import LookupService

router = APIRouter()


@router.get("/roles")
async def list_roles(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """List roles with a display description."""
    return LookupService(db).list_roles()


@router.get("/asset-status")
async def list_asset_statuses(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """List asset statuses ordered by id."""
    return LookupService(db).list_asset_statuses()


@router.get("/asset-types")
async def list_asset_types(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """List asset types ordered by name."""
    return LookupService(db).list_asset_types()


@router.post("/asset-types", status_code=201)
async def create_asset_type(
    db: SupabaseDep,
    body: AssetTypeCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Create an asset type. Names must be unique."""
    return LookupService(db).create_asset_type(body)


@router.get("/profiles")
async def list_profiles(
    db: SupabaseDep,
    for_assignment: Annotated[
        bool,
        Query(description="Only technicians (assignable to tickets)"),
    ] = False,
    user: AuthUser = Depends(get_current_user),
):
    """List profiles with role name, ordered by full name."""
    return LookupService(db).list_profiles(for_assignment=for_assignment)
