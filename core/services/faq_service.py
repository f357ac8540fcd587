# =============================================================================
# core/services/faq_service.py - FAQ Business Logic
# =============================================================================

import logging
from typing import Any

from app.exceptions import NotFoundError, ValidationError
from core.models.faq import FAQWrite
from core.validation import require_int, require_text
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

FAQ_SELECT = (
    "*, "
    "profiles:created_by(full_name), "
    "assets:asset_id(name, serial_number, asset_types(name))"
)

REQUIRED_MESSAGE = "La pregunta y respuesta son obligatorias"


class FAQService:
    """Service for FAQ operations."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def list_faqs(self) -> list[dict[str, Any]]:
        response = self.db.execute(
            self.db.table("faqs").select(FAQ_SELECT).order("created_at", desc=True),
            "list faqs",
        )
        return response.data or []

    def get_faq(self, faq_id: int) -> dict[str, Any]:
        """
        Get one FAQ with creator and asset details.

        Raises:
            NotFoundError: If the FAQ doesn't exist
        """
        faq = self.db.fetch_one("faqs", FAQ_SELECT, id=faq_id)
        if not faq:
            raise NotFoundError("FAQ no encontrada", resource_id=faq_id)
        return faq

    def create_faq(self, body: FAQWrite, created_by: str) -> dict[str, Any]:
        """
        Create a FAQ owned by the caller.

        Raises:
            ValidationError: If question or answer is missing, or the asset
                doesn't exist
        """
        data = self._validate(body)
        data["created_by"] = created_by

        response = self.db.execute(
            self.db.table("faqs").insert(data),
            "create faq",
        )
        created = response.data[0]
        logger.info(f"Created FAQ: {created['id']}")
        return self.get_faq(created["id"])

    def update_faq(self, faq_id: int, body: FAQWrite) -> dict[str, Any]:
        """
        Replace a FAQ's content.

        Raises:
            ValidationError: If question or answer is missing, or the asset
                doesn't exist
            NotFoundError: If the FAQ doesn't exist
        """
        data = self._validate(body)

        response = self.db.execute(
            self.db.table("faqs").update(data).eq("id", faq_id),
            "update faq",
        )
        if not response.data:
            raise NotFoundError("FAQ no encontrada", resource_id=faq_id)

        logger.info(f"Updated FAQ: {faq_id}")
        return self.get_faq(faq_id)

    def delete_faq(self, faq_id: int) -> dict[str, str]:
        """
        Delete a FAQ.

        Raises:
            NotFoundError: If the FAQ doesn't exist
        """
        response = self.db.execute(
            self.db.table("faqs").delete().eq("id", faq_id),
            "delete faq",
        )
        if not response.data:
            raise NotFoundError("FAQ no encontrada", resource_id=faq_id)

        logger.info(f"Deleted FAQ: {faq_id}")
        return {"message": "FAQ eliminada exitosamente"}

    def _validate(self, body: FAQWrite) -> dict[str, Any]:
        # Optional fields: empty values are stored as null
        data = {
            "question": require_text(body.question, REQUIRED_MESSAGE, field="question"),
            "answer": require_text(body.answer, REQUIRED_MESSAGE, field="answer"),
            "category": body.category or None,
            "manual_md": body.manual_md or None,
            "references_links": body.references_links or None,
            "video_urls": body.video_urls or None,
            "asset_id": None,
        }
        if body.asset_id:
            data["asset_id"] = require_int(body.asset_id, "ID de equipo inválido", field="asset_id")
            if not self.db.fetch_one("assets", "id", id=data["asset_id"]):
                raise ValidationError("Equipo no encontrado", field="asset_id")
        return data
