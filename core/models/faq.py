# =============================================================================
# core/models/faq.py - FAQ Schemas
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class FAQWrite(BaseModel):
    """
    Body for POST /faqs and PUT /faqs/{id}.

    question and answer are required; everything else is optional and
    stored as null when empty.
    """
    question: str | None = Field(default=None, examples=["¿Cómo solicito un equipo?"])
    answer: str | None = Field(default=None, examples=["Desde la sección Préstamos."])
    category: str | None = Field(default=None, examples=["Préstamos"])
    manual_md: str | None = None
    references_links: Any = None
    video_urls: Any = None
    asset_id: Any = None
