# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated caller resolved by the identity provider.

    Attached to request.state.user by get_current_user. The raw token is
    kept so handlers can act on behalf of the caller.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
    token: str
