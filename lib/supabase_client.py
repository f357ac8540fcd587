# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a thin typed wrapper around the Supabase client.
#
# One instance is built at application startup from settings and injected
# into request handlers (see app/dependencies.py). The wrapper owns:
# - Executing PostgREST queries and turning failures into SupabaseClientError
# - Single-row lookups that return None instead of raising
# - Exact row counts
# - Access to the identity provider (auth) API
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   db = SupabaseClient.from_settings(settings)
#   asset = db.fetch_one("assets", "id, name", id=12)
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from supabase import Client, create_client

if TYPE_CHECKING:
    from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres error code for unique constraint violations
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries the Postgres/PostgREST error code (pg_code) when the store
    reported one, so callers can translate specific failures.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        pg_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.pg_code = pg_code
        self.details = details or {}

    @property
    def is_unique_violation(self) -> bool:
        return self.pg_code == UNIQUE_VIOLATION

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.pg_code:
            result += f" (pg_code={self.pg_code})"
        return result


class SupabaseClient:
    """
    Wrapper for Supabase database and auth operations.

    Example:
        db = SupabaseClient(create_client(url, key))

        # Look up one row by equality filters
        status = db.fetch_one("asset_status", "id", id=1)

        # Run an arbitrary query
        response = db.execute(
            db.table("assets").select("*").order("created_at", desc=True),
            "list assets",
        )
    """

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseClient:
        """
        Build a client from application settings.

        Uses the service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_KEY
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
            ) from e
        logger.info("Supabase client initialized successfully")
        return cls(client)

    # -------------------------------------------------------------------------
    # Raw Access
    # -------------------------------------------------------------------------

    def table(self, name: str):
        """Start a PostgREST query on a table."""
        return self._client.table(name)

    @property
    def auth(self):
        """Identity provider (GoTrue) API."""
        return self._client.auth

    # -------------------------------------------------------------------------
    # Query Execution
    # -------------------------------------------------------------------------

    def execute(self, query, operation: str):
        """
        Execute a query builder and return the response.

        Args:
            query: A PostgREST request builder
            operation: Short description used in logs and errors

        Raises:
            SupabaseClientError: If the store rejects the request
        """
        try:
            return query.execute()
        except Exception as e:
            pg_code = getattr(e, "code", None)
            logger.warning(f"Supabase {operation} failed: {e}")
            raise SupabaseClientError(
                message=f"Failed to {operation}: {e}",
                code="QUERY_FAILED",
                pg_code=str(pg_code) if pg_code is not None else None,
                details={"operation": operation},
            ) from e

    def fetch_one(
        self,
        table: str,
        columns: str = "*",
        **filters: Any,
    ) -> dict[str, Any] | None:
        """
        Fetch the first row matching all equality filters.

        Returns:
            Row dict, or None if nothing matched

        Raises:
            SupabaseClientError: If query fails
        """
        query = self.table(table).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)

        response = self.execute(query.limit(1), f"fetch {table}")
        rows = response.data or []
        return rows[0] if rows else None

    def count(self, query, operation: str) -> int:
        """
        Execute a count query (built with count="exact") and return the count.

        A missing count is reported as 0.
        """
        response = self.execute(query, operation)
        return response.count or 0

    def count_rows(self, table: str, **filters: Any) -> int:
        """Exact count of rows in a table matching equality filters."""
        query = self.table(table).select("id", count="exact", head=True)
        for column, value in filters.items():
            query = query.eq(column, value)
        return self.count(query, f"count {table}")
