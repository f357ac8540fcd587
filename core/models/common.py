# =============================================================================
# core/models/common.py - Shared Schemas & Constants
# =============================================================================
# Role identifiers, the pagination envelope and the plain message envelope
# shared by every resource.
# =============================================================================

import math
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class RoleId(IntEnum):
    """
    Well-known rows of the roles lookup table.

    - ADMIN: required to log into the admin application
    - TECHNICIAN: the only role that can be assigned to tickets
    """
    ADMIN = 1
    TECHNICIAN = 2


class Pagination(BaseModel):
    """
    Pagination block of a paginated list response.

    Example:
        {"page": 3, "limit": 10, "total": 23, "totalPages": 3}
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., ge=1, description="Current page number (1-indexed)")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(default=0, ge=0, description="Total matching rows")
    total_pages: int = Field(default=0, ge=0, alias="totalPages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """Compute totalPages as ceil(total / limit)."""
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )

    def offset(self) -> int:
        """Zero-based index of the first row on this page."""
        return (self.page - 1) * self.limit


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
