# =============================================================================
# core/models/user.py - User, Profile & Auth Schemas
# =============================================================================
# A user is an identity-provider account plus a row in the profiles table
# sharing the same id. These models cover user management and the
# authenticated session responses.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """
    Body for POST /users.

    Example:
        {
            "email": "tecnico@example.com",
            "password": "s3cret-pass",
            "full_name": "Ana Técnica",
            "role_id": 2
        }
    """
    email: str | None = Field(default=None, examples=["tecnico@example.com"])
    password: str | None = Field(default=None, examples=["s3cret-pass"])
    full_name: str | None = Field(default=None, examples=["Ana Técnica"])
    role_id: Any = Field(default=None, examples=[2])
    active: bool | None = Field(default=None, examples=[True])


class UserUpdate(BaseModel):
    """Body for PUT /users/{id}. The password is only changed when given."""
    email: str | None = None
    password: str | None = None
    full_name: str | None = None
    role_id: Any = None
    active: bool | None = None


class LoginRequest(BaseModel):
    """Body for POST /auth/login."""
    access_token: str | None = Field(default=None, description="Access token issued by Supabase Auth")


class SessionUser(BaseModel):
    """
    Authenticated admin returned by /auth/login and /auth/me.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "admin@example.com",
            "full_name": "Admin",
            "role_id": 1,
            "role_name": "admin"
        }
    """
    id: str
    email: str | None = None
    full_name: str | None = None
    role_id: int | None = None
    role_name: str | None = None


class LoginResponse(BaseModel):
    """Response of POST /auth/login."""
    user: SessionUser


class ValidateResponse(BaseModel):
    """Response of GET /auth/validate."""
    valid: bool
    user_id: str
    email: str | None = None
    timestamp: str
