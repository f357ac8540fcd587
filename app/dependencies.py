# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from lib.supabase_client import SupabaseClient


def get_supabase_client(request: Request) -> SupabaseClient:
    """
    Get the Supabase client instance.

    The client is created once in the application lifespan and stored
    on app.state; tests replace this dependency with a fake.
    """
    return request.app.state.supabase


# Type alias for dependency injection
SupabaseDep = Annotated[SupabaseClient, Depends(get_supabase_client)]
