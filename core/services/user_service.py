# =============================================================================
# core/services/user_service.py - User Management Business Logic
# =============================================================================
# A user is an identity-provider account plus a profiles row with the same id.
#
# Creation is two steps: create the account, then insert the profile. If the
# profile insert fails the account is deleted again. That cleanup is
# best-effort: if the delete fails too, the orphaned account is logged.
# =============================================================================

import logging
from typing import Any

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from core.models.user import UserCreate, UserUpdate
from core.validation import coerce_int, is_uuid, require_text
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

PROFILE_SELECT = "id, full_name, role_id, active, created_at, roles(id, name, permissions)"

CREATE_REQUIRED_MESSAGE = "Email, password, full_name y role_id son requeridos"
UPDATE_REQUIRED_MESSAGE = "Email, full_name y role_id son requeridos"


def _auth_status(error: Exception) -> int | None:
    """HTTP status reported by a GoTrue error, if any."""
    status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


class UserService:
    """Service for user (account + profile) operations."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_users(self) -> list[dict[str, Any]]:
        """List users newest first, each with account email and last sign-in."""
        response = self.db.execute(
            self.db.table("profiles")
            .select(PROFILE_SELECT)
            .order("created_at", desc=True),
            "list profiles",
        )
        return [self._with_account(profile) for profile in response.data or []]

    def get_user(self, user_id: str) -> dict[str, Any]:
        """
        Get one user.

        Raises:
            NotFoundError: If no profile exists for the id
        """
        profile = self.db.fetch_one("profiles", PROFILE_SELECT, id=user_id)
        if not profile:
            raise NotFoundError("Usuario no encontrado", resource_id=user_id)
        return self._with_account(profile)

    def _with_account(self, profile: dict[str, Any]) -> dict[str, Any]:
        """Merge identity-provider account fields into a profile row."""
        try:
            response = self.db.auth.admin.get_user_by_id(profile["id"])
        except Exception as e:
            logger.warning(f"Could not fetch account for profile {profile['id']}: {e}")
            return self._user_response(profile, email="Error obteniendo email", active=False)

        account = getattr(response, "user", None)
        return self._user_response(
            profile,
            email=getattr(account, "email", None) or "Sin email",
            last_sign_in_at=getattr(account, "last_sign_in_at", None),
        )

    @staticmethod
    def _user_response(
        profile: dict[str, Any],
        email: str | None,
        last_sign_in_at: Any = None,
        active: bool | None = None,
    ) -> dict[str, Any]:
        if active is None:
            active = profile.get("active") if profile.get("active") is not None else True
        if last_sign_in_at is not None and not isinstance(last_sign_in_at, str):
            last_sign_in_at = last_sign_in_at.isoformat()
        return {
            "id": profile["id"],
            "email": email,
            "full_name": profile.get("full_name"),
            "role_id": profile.get("role_id"),
            "active": active,
            "created_at": profile.get("created_at"),
            "last_sign_in_at": last_sign_in_at,
            "roles": profile.get("roles"),
        }

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_user(self, body: UserCreate) -> dict[str, Any]:
        """
        Create the account, then the profile.

        Raises:
            ValidationError: Missing fields, unknown role, or the provider
                rejected the account
            DatabaseError: The profile insert failed (account was rolled back)
        """
        email = require_text(body.email, CREATE_REQUIRED_MESSAGE, field="email")
        password = require_text(body.password, CREATE_REQUIRED_MESSAGE, field="password")
        full_name = require_text(body.full_name, CREATE_REQUIRED_MESSAGE, field="full_name")
        role_id = coerce_int(body.role_id, CREATE_REQUIRED_MESSAGE, field="role_id")
        self._ensure_role(role_id)

        try:
            response = self.db.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": {"full_name": full_name},
            })
        except Exception as e:
            self._raise_account_error(e, "Error creando usuario", "create account")

        account = response.user
        profile_data = {
            "id": account.id,
            "full_name": full_name,
            "role_id": role_id,
            "active": body.active if body.active is not None else True,
        }

        try:
            self.db.execute(
                self.db.table("profiles").insert(profile_data),
                "create profile",
            )
        except SupabaseClientError as e:
            logger.error(f"Profile creation failed for account {account.id}: {e}")
            self._delete_orphaned_account(account.id)
            raise DatabaseError("create profile") from e

        profile = self.db.fetch_one("profiles", PROFILE_SELECT, id=account.id) or profile_data
        logger.info(f"Created user: {account.id} ({full_name})")
        return self._user_response(profile, email=account.email or email)

    def update_user(self, user_id: str, body: UserUpdate) -> dict[str, Any]:
        """
        Update the account (email, name, optional password) and the profile.

        The profile and role are checked before the account is touched.

        Raises:
            ValidationError: Missing fields, unknown role, or the provider
                rejected the change
            NotFoundError: If the user doesn't exist
        """
        email = require_text(body.email, UPDATE_REQUIRED_MESSAGE, field="email")
        full_name = require_text(body.full_name, UPDATE_REQUIRED_MESSAGE, field="full_name")
        role_id = coerce_int(body.role_id, UPDATE_REQUIRED_MESSAGE, field="role_id")

        if not is_uuid(user_id) or not self.db.fetch_one("profiles", "id", id=user_id):
            raise NotFoundError("Usuario no encontrado", resource_id=user_id)
        self._ensure_role(role_id)

        attributes: dict[str, Any] = {
            "email": email,
            "user_metadata": {"full_name": full_name},
        }
        if body.password:
            attributes["password"] = body.password

        try:
            self.db.auth.admin.update_user_by_id(user_id, attributes)
        except Exception as e:
            if _auth_status(e) == 404:
                raise NotFoundError("Usuario no encontrado", resource_id=user_id) from e
            self._raise_account_error(e, "Error actualizando usuario", "update account")

        response = self.db.execute(
            self.db.table("profiles")
            .update({
                "full_name": full_name,
                "role_id": role_id,
                "active": body.active if body.active is not None else True,
            })
            .eq("id", user_id),
            "update profile",
        )
        if not response.data:
            raise NotFoundError("Usuario no encontrado", resource_id=user_id)

        profile = self.db.fetch_one("profiles", PROFILE_SELECT, id=user_id) or response.data[0]
        logger.info(f"Updated user: {user_id}")
        return self._user_response(profile, email=email)

    def delete_user(self, user_id: str) -> dict[str, str]:
        """
        Delete the account; the profile row goes with it (FK cascade).

        Raises:
            NotFoundError: If the account doesn't exist
        """
        try:
            self.db.auth.admin.delete_user(user_id)
        except Exception as e:
            if _auth_status(e) == 404:
                raise NotFoundError("Usuario no encontrado", resource_id=user_id) from e
            logger.error(f"Failed to delete account {user_id}: {e}")
            raise DatabaseError("delete account") from e

        logger.info(f"Deleted user: {user_id}")
        return {"message": "Usuario eliminado exitosamente"}

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _ensure_role(self, role_id: int) -> None:
        if not self.db.fetch_one("roles", "id", id=role_id):
            raise ValidationError("El rol especificado no existe", field="role_id")

    def _delete_orphaned_account(self, account_id: str) -> None:
        try:
            self.db.auth.admin.delete_user(account_id)
            logger.info(f"Rolled back account {account_id} after profile failure")
        except Exception as e:
            logger.error(f"Orphaned account {account_id}: rollback delete failed: {e}")

    @staticmethod
    def _raise_account_error(error: Exception, message: str, operation: str) -> None:
        """
        Map an identity-provider failure.

        4xx errors (duplicate email, weak password) are the caller's to fix
        and keep the provider's message; anything else is opaque.
        """
        status = _auth_status(error)
        if status is not None and 400 <= status < 500:
            detail = getattr(error, "message", None) or str(error)
            raise ValidationError(f"{message}: {detail}") from error
        logger.error(f"Identity provider failed to {operation}: {error}")
        raise DatabaseError(operation) from error
