# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase client (PostgREST query builder
#   and the Auth admin API) injected through app.dependency_overrides
# - Authenticated users and headers for route tests
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import copy
import re
import uuid
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from lib.supabase_client import SupabaseClient


ADMIN_ID = "11111111-1111-4111-8111-111111111111"
TECH_ID = "22222222-2222-4222-8222-222222222222"
OTHER_ID = "33333333-3333-4333-8333-333333333333"

ADMIN_TOKEN = "admin-access-token"
TECH_TOKEN = "tech-access-token"


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeAPIError(Exception):
    """Shaped like postgrest.exceptions.APIError: carries a Postgres code."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class FakeAuthError(Exception):
    """Shaped like gotrue's AuthApiError: carries an HTTP status."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.message = message
        self.status = status


def _split_top_level(text: str) -> list[str]:
    """Split on commas that aren't inside parentheses."""
    parts, depth, current = [], 0, ""
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
        else:
            current += char
    if current:
        parts.append(current)
    return parts


def _like(value: Any, pattern: str) -> bool:
    if value is None:
        return False
    regex = "^" + ".*".join(re.escape(part) for part in pattern.split("%")) + "$"
    return re.match(regex, str(value), re.IGNORECASE | re.DOTALL) is not None


class FakeQuery:
    """Chainable subset of the PostgREST request builder."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.action = "select"
        self.payload: Any = None
        self.count_mode: str | None = None
        self.head = False
        self.filters: list = []
        self.orders: list[tuple[str, bool]] = []
        self.window: tuple[int, int] | None = None
        self.max_rows: int | None = None

    # --- actions -------------------------------------------------------------

    def select(self, columns: str = "*", count: str | None = None, head: bool = False):
        self.count_mode = count
        self.head = head
        self.db.selects.append((self.table, columns))
        return self

    def insert(self, data):
        self.action = "insert"
        self.payload = data
        return self

    def update(self, data):
        self.action = "update"
        self.payload = data
        return self

    def delete(self):
        self.action = "delete"
        return self

    # --- filters -------------------------------------------------------------

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        assert value == "null"
        self.filters.append(lambda row: row.get(column) is None)
        return self

    def ilike(self, column, pattern):
        self.filters.append(lambda row: _like(row.get(column), pattern))
        return self

    def or_(self, filters: str):
        clauses = [self._parse_clause(clause) for clause in _split_top_level(filters)]
        self.db.or_filters.append(filters)
        self.filters.append(lambda row: any(clause(row) for clause in clauses))
        return self

    @staticmethod
    def _parse_clause(clause: str):
        column, op, value = clause.split(".", 2)
        if op == "ilike":
            return lambda row: _like(row.get(column), value)
        if op == "eq":
            return lambda row: str(row.get(column)) == value
        if op == "in":
            members = value.strip("()").split(",")
            return lambda row: str(row.get(column)) in members
        raise AssertionError(f"Unsupported or_ operator: {op}")

    # --- modifiers -----------------------------------------------------------

    def order(self, column, desc: bool = False):
        self.orders.append((column, desc))
        return self

    def range(self, start: int, end: int):
        self.window = (start, end)
        return self

    def limit(self, count: int):
        self.max_rows = count
        return self

    # --- execution -----------------------------------------------------------

    def _matches(self, row) -> bool:
        return all(check(row) for check in self.filters)

    def execute(self):
        failure = self.db.failures.pop((self.table, self.action), None)
        if failure:
            raise failure

        rows = self.db.tables.setdefault(self.table, [])

        if self.action == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db.insert_row(self.table, item) for item in items]
            return SimpleNamespace(data=copy.deepcopy(created), count=None)

        if self.action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    self.db.check_unique(self.table, {**row, **self.payload}, ignore=row)
                    row.update(copy.deepcopy(self.payload))
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated, count=None)

        if self.action == "delete":
            kept, deleted = [], []
            for row in rows:
                (deleted if self._matches(row) else kept).append(row)
            self.db.tables[self.table] = kept
            return SimpleNamespace(data=copy.deepcopy(deleted), count=None)

        selected = [copy.deepcopy(row) for row in rows if self._matches(row)]
        for column, desc in reversed(self.orders):
            present = [row for row in selected if row.get(column) is not None]
            missing = [row for row in selected if row.get(column) is None]
            present.sort(key=lambda row: row[column], reverse=desc)
            selected = present + missing

        total = len(selected) if self.count_mode == "exact" else None
        if self.window:
            start, end = self.window
            selected = selected[start:end + 1]
        if self.max_rows is not None:
            selected = selected[:self.max_rows]
        if self.head:
            selected = []
        return SimpleNamespace(data=selected, count=total)


class FakeAdminAuth:
    """Subset of supabase.auth.admin."""

    def __init__(self):
        self.accounts: dict[str, SimpleNamespace] = {}
        self.broken_lookups: set[str] = set()
        self.deleted: list[str] = []

    def add_account(self, user_id: str, email: str, last_sign_in_at: str | None = None):
        account = SimpleNamespace(id=user_id, email=email, last_sign_in_at=last_sign_in_at)
        self.accounts[user_id] = account
        return account

    def get_user_by_id(self, user_id):
        if user_id in self.broken_lookups or user_id not in self.accounts:
            raise FakeAuthError("User not found", status=404)
        return SimpleNamespace(user=self.accounts[user_id])

    def create_user(self, attributes):
        email = attributes["email"]
        if any(account.email == email for account in self.accounts.values()):
            raise FakeAuthError("A user with this email address has already been registered", status=422)
        account = self.add_account(str(uuid.uuid4()), email)
        return SimpleNamespace(user=account)

    def update_user_by_id(self, user_id, attributes):
        if user_id not in self.accounts:
            raise FakeAuthError("User not found", status=404)
        self.accounts[user_id].email = attributes.get("email", self.accounts[user_id].email)
        return SimpleNamespace(user=self.accounts[user_id])

    def delete_user(self, user_id):
        if user_id not in self.accounts:
            raise FakeAuthError("User not found", status=404)
        del self.accounts[user_id]
        self.deleted.append(user_id)


class FakeAuth:
    """Subset of supabase.auth: token lookup plus the admin API."""

    def __init__(self):
        self.tokens: dict[str, SimpleNamespace] = {}
        self.calls: list[str] = []
        self.admin = FakeAdminAuth()

    def add_token(self, token: str, user_id: str, email: str):
        self.tokens[token] = SimpleNamespace(id=user_id, email=email)

    def get_user(self, token):
        self.calls.append(token)
        if token not in self.tokens:
            raise FakeAuthError("invalid JWT", status=401)
        return SimpleNamespace(user=self.tokens[token])


class FakeSupabase:
    """
    In-memory tables behind the supabase.Client surface the services use.

    Rows are stored as given, so embedded relations (asset_status,
    profiles, ...) are seeded directly on the rows that need them.
    """

    UNIQUE = {
        "assets": ["serial_number"],
    }

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.next_ids: dict[str, int] = {}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.selects: list[tuple[str, str]] = []
        self.or_filters: list[str] = []
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: dict) -> list[dict]:
        return [self.insert_row(table, row) for row in rows]

    def fail(self, table: str, action: str, message: str = "boom", code: str | None = None):
        """Make the next <action> on <table> raise a store error."""
        self.failures[(table, action)] = FakeAPIError(message, code=code)

    def rows(self, table: str) -> list[dict]:
        return self.tables.get(table, [])

    def check_unique(self, table: str, row: dict, ignore: dict | None = None):
        for column in self.UNIQUE.get(table, []):
            for existing in self.rows(table):
                if existing is ignore:
                    continue
                if row.get(column) is not None and existing.get(column) == row.get(column):
                    raise FakeAPIError(
                        f'duplicate key value violates unique constraint "{table}_{column}_key"',
                        code="23505",
                    )

    def insert_row(self, table: str, row: dict) -> dict:
        row = copy.deepcopy(row)
        if "id" not in row:
            self.next_ids[table] = self.next_ids.get(table, 0) + 1
            row["id"] = self.next_ids[table]
        elif isinstance(row["id"], int):
            self.next_ids[table] = max(self.next_ids.get(table, 0), row["id"])
        self.check_unique(table, row)
        self.tables.setdefault(table, []).append(row)
        return row


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db() -> FakeSupabase:
    """Empty store with an admin and a technician who can authenticate."""
    fake = FakeSupabase()
    fake.auth.add_token(ADMIN_TOKEN, ADMIN_ID, "admin@example.com")
    fake.auth.add_token(TECH_TOKEN, TECH_ID, "tecnico@example.com")
    fake.auth.admin.add_account(ADMIN_ID, "admin@example.com", "2024-01-10T08:00:00Z")
    fake.auth.admin.add_account(TECH_ID, "tecnico@example.com")
    fake.seed(
        "roles",
        {"id": 1, "name": "admin", "permissions": {"description": "Administrador"}},
        {"id": 2, "name": "tecnico", "permissions": None},
    )
    fake.seed(
        "profiles",
        {
            "id": ADMIN_ID, "full_name": "Ana Admin", "role_id": 1, "active": True,
            "created_at": "2024-01-01T00:00:00Z", "roles": {"id": 1, "name": "admin"},
        },
        {
            "id": TECH_ID, "full_name": "Tomás Técnico", "role_id": 2, "active": True,
            "created_at": "2024-01-02T00:00:00Z", "roles": {"id": 2, "name": "tecnico"},
        },
    )
    fake.seed(
        "asset_status",
        {"id": 1, "name": "Disponible"},
        {"id": 2, "name": "En Uso"},
        {"id": 3, "name": "Mantenimiento"},
        {"id": 4, "name": "Retirado"},
    )
    fake.seed(
        "asset_types",
        {"id": 1, "name": "Laptop", "description": None},
        {"id": 2, "name": "Proyector", "description": None},
    )
    return fake


@pytest.fixture
def db(fake_db) -> SupabaseClient:
    """The application's client wrapper around the in-memory store."""
    return SupabaseClient(fake_db)


@pytest.fixture
def client(db):
    """TestClient with the Supabase dependency pointed at the fake store."""
    from app.dependencies import get_supabase_client
    from app.main import app

    app.dependency_overrides[get_supabase_client] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def prefix() -> str:
    from app.config import settings
    return settings.route_prefix


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def tech_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TECH_TOKEN}"}


@pytest.fixture
def seed_asset(fake_db):
    """Factory that stores an asset with embedded status/type rows."""
    statuses = {row["id"]: row for row in fake_db.rows("asset_status")}
    types = {row["id"]: row for row in fake_db.rows("asset_types")}

    def _seed(name: str = "Laptop Dell", status_id: int = 1, type_id: int = 1, **extra) -> dict:
        row = {
            "name": name,
            "serial_number": extra.pop("serial_number", f"SN-{uuid.uuid4().hex[:8]}"),
            "description": None,
            "purchase_date": None,
            "status_id": status_id,
            "type_id": type_id,
            "qr_code": str(uuid.uuid4()),
            "created_at": extra.pop("created_at", "2024-01-01T00:00:00Z"),
            "asset_status": dict(statuses[status_id]) if status_id in statuses else None,
            "asset_types": dict(types[type_id]) if type_id in types else None,
            **extra,
        }
        return fake_db.seed("assets", row)[0]

    return _seed
