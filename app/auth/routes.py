# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual sign-in is handled by Supabase Auth client-side. These routes
# check the resulting token and decide whether the caller may use the
# admin application.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.auth.dependencies import extract_bearer_token, require_admin, validate_token
from app.dependencies import SupabaseDep
from app.exceptions import EquiposException, ValidationError
from core.models.user import LoginRequest, LoginResponse, SessionUser, ValidateResponse
from core.services.auth_service import AuthService
from lib.utils import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    db: SupabaseDep,
    body: LoginRequest | None = None,
) -> LoginResponse:
    """
    Start an admin session.

    The access token is read from the body, falling back to the
    Authorization header.

    Raises:
        400: If no token was sent
        401: If the token is anonymous or rejected
        404: If the user has no profile
        403: If the user isn't an admin
    """
    token = (body.access_token if body else None) or extract_bearer_token(
        request.headers.get("Authorization")
    )
    if not token:
        raise ValidationError("Token de acceso requerido", field="access_token")

    user = validate_token(db, token)
    session = AuthService(db).admin_session(user.id, user.email)
    logger.info(f"Admin login: {session.id}")
    return LoginResponse(user=session)


@router.get("/me", response_model=SessionUser)
async def get_current_user_info(
    session: SessionUser = Depends(require_admin),
) -> SessionUser:
    """
    Get the current admin's profile.

    Raises:
        401: If not authenticated
        403: If the user isn't an admin
    """
    return session


@router.get("/validate", response_model=ValidateResponse)
async def validate(request: Request, db: SupabaseDep):
    """
    Verify that the current token is valid.

    Any valid non-anonymous token passes, whatever the caller's role.

    Returns:
        {valid, user_id, email, timestamp}; 401 with {valid: false, error}
        if the token is missing or rejected
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    try:
        user = validate_token(db, token)
    except EquiposException as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"valid": False, "error": e.message},
        )

    return ValidateResponse(
        valid=True,
        user_id=user.id,
        email=user.email,
        timestamp=utc_now().isoformat(),
    )
