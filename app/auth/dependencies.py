# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Tokens are not verified locally: every request asks the identity provider
# (Supabase Auth) who the token belongs to. Before that call, requests
# carrying the project's anonymous key are turned away, since that key is
# public and identifies nobody.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from jose import JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings
from app.dependencies import SupabaseDep
from app.exceptions import AuthInvalidError, AuthMissingError
from core.models.user import SessionUser
from core.services.auth_service import AuthService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token of an "Authorization: Bearer <token>" header.

    Returns None when the header is missing or isn't exactly that shape.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    if not token or " " in token:
        return None
    return token


def is_anonymous_token(token: str) -> bool:
    """
    True for the project's anon key, or any JWT whose role claim is "anon".

    Claims are read without verifying the signature; this only decides
    whether to bother the identity provider.
    """
    if token == settings.SUPABASE_ANON_KEY:
        return True
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        # Not a JWT; the identity provider decides
        return False
    return claims.get("role") == "anon"


def validate_token(db: SupabaseClient, token: Optional[str]) -> AuthUser:
    """
    Resolve a bearer token into the user it belongs to.

    Raises:
        AuthMissingError: No token, or the anonymous key
        AuthInvalidError: The identity provider rejects the token
    """
    if not token or is_anonymous_token(token):
        raise AuthMissingError()

    try:
        response = db.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token rejected by identity provider: {e}")
        raise AuthInvalidError() from e

    user = getattr(response, "user", None) if response else None
    if not user:
        logger.warning("Identity provider returned no user for token")
        raise AuthInvalidError()

    logger.debug(f"Authenticated user: {user.id}")
    return AuthUser(id=str(user.id), email=getattr(user, "email", None), token=token)


async def get_current_user(request: Request, db: SupabaseDep) -> AuthUser:
    """
    Authenticate the request's bearer token.

    This dependency:
    1. Extracts the token from the Authorization header
    2. Rejects missing, malformed and anonymous tokens (401)
    3. Asks the identity provider for the user (401 if rejected)
    4. Attaches the AuthUser to request.state.user

    Raises:
        AuthMissingError: 401 AUTH_REQUIRED
        AuthInvalidError: 401 AUTH_INVALID
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    user = validate_token(db, token)
    request.state.user = user
    return user


async def require_admin(
    db: SupabaseDep,
    user: AuthUser = Depends(get_current_user),
) -> SessionUser:
    """
    Authenticate the caller and require the admin role.

    Raises:
        NotFoundError: 404 if the caller has no profile
        ForbiddenError: 403 if the caller isn't an admin
    """
    return AuthService(db).admin_session(user.id, user.email)
