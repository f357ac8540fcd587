# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Provides an unauthenticated health check for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.utils import utc_now

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    server: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status; never touches the database.
    """
    return HealthResponse(
        status="ok",
        timestamp=utc_now().isoformat(),
        server=settings.SERVER_NAME,
    )
