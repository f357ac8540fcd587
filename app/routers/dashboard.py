# =============================================================================
# app/routers/dashboard.py - Dashboard Endpoints
# =============================================================================
# Aggregated numbers and feeds for the admin dashboard.
# All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.dashboard import ActivityItem, DashboardStats, StatusSlice, TypeBar
from core.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard")


@router.get("/stats", response_model=DashboardStats, response_model_by_alias=True)
async def get_stats(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """Asset, loan and ticket counts for the dashboard cards."""
    return await DashboardService(db).get_stats()


@router.get("/asset-status", response_model=list[StatusSlice])
async def asset_status_distribution(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """Assets per status: [{name, value}]."""
    return DashboardService(db).asset_status_distribution()


@router.get("/asset-types", response_model=list[TypeBar])
async def asset_type_distribution(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """Assets per type: [{name, cantidad}]."""
    return DashboardService(db).asset_type_distribution()


@router.get("/recent-activity", response_model=list[ActivityItem])
async def recent_activity(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """Latest loans, returns and tickets with relative timestamps."""
    return DashboardService(db).recent_activity()
