# =============================================================================
# core/services/lookup_service.py - Lookup Tables
# =============================================================================
# Read access to the small reference tables the frontend uses to fill
# dropdowns (roles, asset statuses, asset types, profiles), plus creation
# of asset types.
# =============================================================================

import logging
from typing import Any

from app.exceptions import ValidationError
from core.models.asset import AssetTypeCreate
from core.models.common import RoleId
from core.validation import optional_text, require_text
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class LookupService:
    """Service for lookup tables."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def list_roles(self) -> list[dict[str, Any]]:
        """
        List roles ordered by id.

        description comes from permissions.description, falling back to
        "Rol: <name>".
        """
        response = self.db.execute(
            self.db.table("roles").select("id, name, permissions").order("id"),
            "list roles",
        )
        roles = []
        for role in response.data or []:
            permissions = role.get("permissions")
            description = None
            if isinstance(permissions, dict):
                description = permissions.get("description")
            roles.append({
                "id": role["id"],
                "name": role.get("name"),
                "description": description or f"Rol: {role.get('name')}",
                "permissions": permissions,
            })
        return roles

    def list_asset_statuses(self) -> list[dict[str, Any]]:
        response = self.db.execute(
            self.db.table("asset_status").select("id, name").order("id"),
            "list asset statuses",
        )
        return response.data or []

    def list_asset_types(self) -> list[dict[str, Any]]:
        response = self.db.execute(
            self.db.table("asset_types").select("id, name, description").order("name"),
            "list asset types",
        )
        return response.data or []

    def create_asset_type(self, body: AssetTypeCreate) -> dict[str, Any]:
        """
        Create an asset type with a unique name.

        Raises:
            ValidationError: Missing name or a type with that name exists
        """
        name = require_text(
            body.name,
            "El nombre del tipo de equipo es obligatorio",
            field="name",
        )

        if self.db.fetch_one("asset_types", "id", name=name):
            raise ValidationError(
                f'Ya existe un tipo de equipo con el nombre "{name}"',
                field="name",
            )

        response = self.db.execute(
            self.db.table("asset_types").insert({
                "name": name,
                "description": optional_text(body.description),
            }),
            "create asset type",
        )
        asset_type = response.data[0]
        logger.info(f"Created asset type: {asset_type['id']} ({name})")
        return asset_type

    def list_profiles(self, for_assignment: bool = False) -> list[dict[str, Any]]:
        """
        List profiles with their role name, ordered by full_name.

        Args:
            for_assignment: Only technicians (the roles tickets can go to)
        """
        query = self.db.table("profiles").select("id, full_name, role_id, roles(name)")
        if for_assignment:
            query = query.eq("role_id", RoleId.TECHNICIAN.value)

        response = self.db.execute(query.order("full_name"), "list profiles")
        return response.data or []
