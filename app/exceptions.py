# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error leaves the API in the same envelope:
#   {"error": "<human readable message>", "code": "<MACHINE_CODE>"}
#
# Database and unexpected errors are logged with full detail on the server
# and returned to the client as an opaque message.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class EquiposException(Exception):
    """
    Base exception for the Equipos API.

    All custom exceptions inherit from this class and carry the HTTP status
    they map to.
    """

    def __init__(
        self,
        message: str,
        code: str = "EQUIPOS_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "error": self.message,
            "code": self.code,
        }


# =============================================================================
# Authentication Exceptions
# =============================================================================

class AuthMissingError(EquiposException):
    """Raised when no usable bearer token was sent."""

    def __init__(self, message: str = "Token de autenticación requerido"):
        super().__init__(message=message, code="AUTH_REQUIRED", status_code=401)


class AuthInvalidError(EquiposException):
    """Raised when the identity provider rejects the token."""

    def __init__(self, message: str = "Token inválido o expirado"):
        super().__init__(message=message, code="AUTH_INVALID", status_code=401)


class ForbiddenError(EquiposException):
    """Raised when a valid user lacks the required role."""

    def __init__(self, message: str):
        super().__init__(message=message, code="FORBIDDEN", status_code=403)


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationError(EquiposException):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"field": field} if field else None,
        )


class ConflictError(EquiposException):
    """Raised when a write collides with an existing row."""

    def __init__(self, message: str):
        super().__init__(message=message, code="CONFLICT", status_code=400)


class NotFoundError(EquiposException):
    """Raised when the targeted row does not exist."""

    def __init__(self, message: str, resource_id: Any = None):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details={"id": str(resource_id)} if resource_id is not None else None,
        )


class DatabaseError(EquiposException):
    """Raised when a store operation fails in a way the client can't fix."""

    def __init__(self, operation: str):
        super().__init__(
            message=INTERNAL_ERROR_MESSAGE,
            code="DATABASE_ERROR",
            status_code=500,
            details={"operation": operation},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def equipos_exception_handler(
    request: Request,
    exc: EquiposException
) -> JSONResponse:
    """Convert EquiposException to the JSON error envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """
    Handle store errors that no service translated.

    The raw store message stays in the server log; the client only sees
    an opaque message.
    """
    logger.error(f"{request.method} {request.url.path} store error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE, "code": exc.code},
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic request validation errors.

    Malformed bodies and path parameters are client errors (400).
    """
    errors = exc.errors()
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in errors]
    logger.info(f"Request validation failed on {request.url.path}: {fields}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Datos de la solicitud inválidos",
            "code": "VALIDATION_ERROR",
            "fields": fields,
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (404 route, 405 method) in the error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )
