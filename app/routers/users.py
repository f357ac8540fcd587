# =============================================================================
# app/routers/users.py - User Management Endpoints
# =============================================================================
# Handles users (identity account + profile). All endpoints require
# authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.common import MessageResponse
from core.models.user import UserCreate, UserUpdate
from core.services.user_service import UserService

router = APIRouter()


@router.get("/users")
async def list_users(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """List users with email and last sign-in, newest first."""
    return UserService(db).list_users()


@router.get("/users/{user_id}")
async def get_user(
    db: SupabaseDep,
    user_id: Annotated[str, Path(description="User UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Get one user."""
    return UserService(db).get_user(user_id)


@router.post("/users", status_code=201)
async def create_user(
    db: SupabaseDep,
    body: UserCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a user.

    Creates the identity account first; if the profile can't be written
    the account is removed again.
    """
    return UserService(db).create_user(body)


@router.put("/users/{user_id}")
async def update_user(
    db: SupabaseDep,
    user_id: Annotated[str, Path(description="User UUID")],
    body: UserUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Update a user's account and profile. Password only changes when sent."""
    return UserService(db).update_user(user_id, body)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    db: SupabaseDep,
    user_id: Annotated[str, Path(description="User UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a user (the profile is removed with the account)."""
    return UserService(db).delete_user(user_id)
