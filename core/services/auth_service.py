# =============================================================================
# core/services/auth_service.py - Admin Session Logic
# =============================================================================
# Resolves an authenticated identity into the admin session shown by the
# admin application. Only role_id = 1 may log in.
# =============================================================================

import logging

from app.exceptions import ForbiddenError, NotFoundError
from core.models.common import RoleId
from core.models.user import SessionUser
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

ADMIN_ONLY_MESSAGE = "Acceso denegado. Solo los administradores pueden acceder al sistema."


class AuthService:
    """Service for admin session checks."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def admin_session(self, user_id: str, email: str | None) -> SessionUser:
        """
        Load the caller's profile and require the admin role.

        Args:
            user_id: Identity-provider user id
            email: Email reported by the identity provider

        Returns:
            SessionUser with profile and role name

        Raises:
            NotFoundError: If the user has no profile
            ForbiddenError: If the user isn't an admin
        """
        profile = self.db.fetch_one(
            "profiles",
            "id, full_name, role_id, roles(name)",
            id=user_id,
        )
        if not profile:
            raise NotFoundError("Perfil de usuario no encontrado", resource_id=user_id)

        if profile.get("role_id") != RoleId.ADMIN:
            logger.info(f"Denied admin session to {user_id} (role_id={profile.get('role_id')})")
            raise ForbiddenError(ADMIN_ONLY_MESSAGE)

        role = profile.get("roles")
        return SessionUser(
            id=str(profile["id"]),
            email=email,
            full_name=profile.get("full_name"),
            role_id=profile.get("role_id"),
            role_name=role.get("name") if isinstance(role, dict) else None,
        )
