# =============================================================================
# core/models/dashboard.py - Dashboard Schemas
# =============================================================================
# Response models for the dashboard aggregation endpoints. Field names are
# snake_case in Python and camelCase on the wire to match the frontend.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class DashboardStats(BaseModel):
    """
    Counts shown on the dashboard cards.

    Example:
        {
            "totalAssets": 6, "availableAssets": 3, "inUseAssets": 1,
            "loanedAssets": 2, "maintenanceAssets": 0, "retiredAssets": 2,
            "totalTickets": 4, "openTickets": 2, "inProgressTickets": 1,
            "resolvedTickets": 1
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    total_assets: int = Field(default=0, alias="totalAssets")
    available_assets: int = Field(default=0, alias="availableAssets")
    in_use_assets: int = Field(default=0, alias="inUseAssets")
    loaned_assets: int = Field(default=0, alias="loanedAssets")
    maintenance_assets: int = Field(default=0, alias="maintenanceAssets")
    retired_assets: int = Field(default=0, alias="retiredAssets")
    total_tickets: int = Field(default=0, alias="totalTickets")
    open_tickets: int = Field(default=0, alias="openTickets")
    in_progress_tickets: int = Field(default=0, alias="inProgressTickets")
    resolved_tickets: int = Field(default=0, alias="resolvedTickets")


class StatusSlice(BaseModel):
    """One slice of the asset status pie chart."""
    name: str
    value: int


class TypeBar(BaseModel):
    """One bar of the asset type chart."""
    name: str
    cantidad: int


class ActivityItem(BaseModel):
    """
    One entry of the recent activity feed.

    type is "loan", "return" or "ticket"; timestamp is relative text
    such as "hace 2 horas".
    """
    id: str
    type: str
    message: str
    timestamp: str
    user: str | None = None
