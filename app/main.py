# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Equipos API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    EquiposException,
    equipos_exception_handler,
    http_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.middleware import RequestLoggingMiddleware
from app.routers import assets, dashboard, faqs, health, lookups, prestamos, tickets, users
from lib.supabase_client import SupabaseClient, SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the Supabase client from settings and keep it on app.state
    - Shutdown: Log
    """
    logger.info(f"Starting Equipos API in {settings.ENVIRONMENT} mode")
    logger.info(f"Routes mounted under '{settings.route_prefix}'")

    app.state.supabase = SupabaseClient.from_settings(settings)

    yield

    logger.info("Shutting down Equipos API")


# Create FastAPI application
app = FastAPI(
    title="Equipos API",
    description="""
## Equipment Loan Tracking API

Backend for the equipment administration app: assets (equipos), loans
(préstamos), support tickets, users, FAQs and dashboard statistics.

All routes except the health check require an `Authorization: Bearer <token>`
header carrying a Supabase Auth access token.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Admin login and token checks"},
        {"name": "Assets", "description": "Equipment inventory"},
        {"name": "Loans", "description": "Equipment loans (préstamos)"},
        {"name": "Tickets", "description": "Support tickets"},
        {"name": "Users", "description": "User accounts and profiles"},
        {"name": "Lookups", "description": "Roles, statuses, types and profiles"},
        {"name": "FAQs", "description": "Frequently asked questions"},
        {"name": "Dashboard", "description": "Statistics and activity feed"},
        {"name": "Health", "description": "API health check"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Length", "X-Total-Count"],
    max_age=86400,
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(EquiposException, equipos_exception_handler)
app.add_exception_handler(SupabaseClientError, supabase_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": INTERNAL_ERROR_MESSAGE,
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

prefix = settings.route_prefix

# Health check (no authentication)
app.include_router(health.router, prefix=prefix, tags=["Health"])

# Authentication endpoints
app.include_router(auth_routes.router, prefix=prefix, tags=["Auth"])

# Domain endpoints
app.include_router(assets.router, prefix=prefix, tags=["Assets"])
app.include_router(prestamos.router, prefix=prefix, tags=["Loans"])
app.include_router(tickets.router, prefix=prefix, tags=["Tickets"])
app.include_router(users.router, prefix=prefix, tags=["Users"])
app.include_router(lookups.router, prefix=prefix, tags=["Lookups"])
app.include_router(faqs.router, prefix=prefix, tags=["FAQs"])
app.include_router(dashboard.router, prefix=prefix, tags=["Dashboard"])
