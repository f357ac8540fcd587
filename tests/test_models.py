# =============================================================================
# tests/test_models.py - Model & Validation Helper Tests
# =============================================================================
# This module contains tests for:
# - Asset status name mapping
# - Pagination math and wire format
# - Required-field helpers in core.validation
# - Request body examples in the OpenAPI schema
# =============================================================================

import pytest

from app.exceptions import ValidationError
from core.models.asset import status_ids_from_names
from core.models.common import Pagination
from core.models.loan import LoanCreate, LoanUpdate
from core.models.user import UserCreate
from core.validation import coerce_int, is_uuid, provided_fields, require_int, require_text


# =============================================================================
# Status Mapping Tests
# =============================================================================

class TestStatusIdsFromNames:
    """Test GET /assets?status=... parsing."""

    def test_known_names(self):
        assert status_ids_from_names("available,in_use,maintenance,retired") == [1, 2, 3, 4]

    def test_unknown_names_ignored(self):
        assert status_ids_from_names("available,broken") == [1]

    def test_case_whitespace_and_duplicates(self):
        assert status_ids_from_names(" Retired , retired,AVAILABLE") == [4, 1]

    @pytest.mark.parametrize("raw", [None, "", "bogus,nope"])
    def test_nothing_recognised_means_no_filter(self, raw):
        assert status_ids_from_names(raw) == []


# =============================================================================
# Pagination Tests
# =============================================================================

class TestPagination:
    """Test pagination envelope."""

    def test_total_pages_rounds_up(self):
        pagination = Pagination.build(page=3, limit=10, total=23)
        assert pagination.total_pages == 3
        assert pagination.offset() == 20

    def test_wire_format_uses_camel_case(self):
        dumped = Pagination.build(page=1, limit=10, total=0).model_dump(by_alias=True)
        assert dumped == {"page": 1, "limit": 10, "total": 0, "totalPages": 0}


# =============================================================================
# Validation Helper Tests
# =============================================================================

class TestValidationHelpers:
    """Test required-field checks."""

    def test_require_text_strips(self):
        assert require_text("  Laptop  ", "msg") == "Laptop"

    @pytest.mark.parametrize("value", [None, "", "   ", 5])
    def test_require_text_rejects(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_text(value, "El nombre es obligatorio", field="name")
        assert exc_info.value.message == "El nombre es obligatorio"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("value", [None, 0, "3", True, 2.5])
    def test_require_int_rejects(self, value):
        with pytest.raises(ValidationError):
            require_int(value, "msg")

    def test_require_int_accepts_integral(self):
        assert require_int(3, "msg") == 3
        assert require_int(3.0, "msg") == 3

    def test_coerce_int_accepts_digit_strings(self):
        assert coerce_int("2", "msg") == 2
        with pytest.raises(ValidationError):
            coerce_int("two", "msg")

    def test_is_uuid(self):
        assert is_uuid("550e8400-e29b-41d4-a716-446655440000")
        assert not is_uuid("not-a-uuid")
        assert not is_uuid(None)

    def test_provided_fields_keeps_explicit_nulls(self):
        body = LoanUpdate.model_validate({"notes": None, "status": "returned"})
        assert provided_fields(body, ["status", "notes", "user_id"]) == {
            "status": "returned",
            "notes": None,
        }


# =============================================================================
# Schema Example Tests
# =============================================================================

class TestSchemaExamples:
    """Test that request bodies publish examples in the JSON schema."""

    def test_user_create_examples(self):
        properties = UserCreate.model_json_schema()["properties"]

        assert properties["email"]["examples"] == ["tecnico@example.com"]
        assert properties["role_id"]["examples"] == [2]

    def test_loan_create_examples(self):
        properties = LoanCreate.model_json_schema()["properties"]
        assert properties["asset_id"]["examples"] == [12]
