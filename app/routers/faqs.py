# =============================================================================
# app/routers/faqs.py - FAQ Endpoints
# =============================================================================
# Handles frequently asked questions. All endpoints require authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import SupabaseDep
from core.models.common import MessageResponse
from core.models.faq import FAQWrite
from core.services.faq_service import FAQService

router = APIRouter()


@router.get("/faqs")
async def list_faqs(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """List FAQs, newest first, with creator and asset."""
    return FAQService(db).list_faqs()


@router.get("/faqs/{faq_id}")
async def get_faq(
    db: SupabaseDep,
    faq_id: Annotated[int, Path(description="FAQ id")],
    user: AuthUser = Depends(get_current_user),
):
    """Get one FAQ."""
    return FAQService(db).get_faq(faq_id)


@router.post("/faqs", status_code=201)
async def create_faq(
    db: SupabaseDep,
    body: FAQWrite,
    user: AuthUser = Depends(get_current_user),
):
    """Create a FAQ owned by the caller. question and answer are required."""
    return FAQService(db).create_faq(body, created_by=user.id)


@router.put("/faqs/{faq_id}")
async def update_faq(
    db: SupabaseDep,
    faq_id: Annotated[int, Path(description="FAQ id")],
    body: FAQWrite,
    user: AuthUser = Depends(get_current_user),
):
    """Replace a FAQ's content."""
    return FAQService(db).update_faq(faq_id, body)


@router.delete("/faqs/{faq_id}", response_model=MessageResponse)
async def delete_faq(
    db: SupabaseDep,
    faq_id: Annotated[int, Path(description="FAQ id")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a FAQ."""
    return FAQService(db).delete_faq(faq_id)
