# =============================================================================
# core/validation.py - Request Field Validation
# =============================================================================
# Presence, trim and integer checks shared by every write endpoint.
# Each helper raises ValidationError (400) with the caller's message.
#
# Usage:
#   name = require_text(body.name, "El nombre es obligatorio", field="name")
#   status_id = require_int(body.status_id, "El estado es obligatorio", field="status_id")
# =============================================================================

from typing import Any
from uuid import UUID

from app.exceptions import ValidationError


def is_integer(value: Any) -> bool:
    """True for real integers (bool excluded) and integral floats."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def require_text(value: Any, message: str, field: str | None = None) -> str:
    """Return value stripped, or raise if it's missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message, field=field)
    return value.strip()


def require_int(value: Any, message: str, field: str | None = None) -> int:
    """
    Return value as int, or raise if it's missing, zero or not an integer.

    Zero is rejected along with missing values: ids start at 1.
    """
    if not is_integer(value) or int(value) == 0:
        raise ValidationError(message, field=field)
    return int(value)


def coerce_int(value: Any, message: str, field: str | None = None) -> int:
    """
    Return value as int, accepting integer-like strings ("3").

    Used for ids that historically arrive as form strings (role_id).
    """
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return require_int(value, message, field=field)


def is_uuid(value: Any) -> bool:
    """True if value is a UUID string (profile ids are identity-provider UUIDs)."""
    try:
        UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True


def optional_text(value: Any) -> str | None:
    """Strip a string and turn empty values into None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def provided_fields(model: Any, allowed: list[str]) -> dict[str, Any]:
    """
    Fields explicitly present in a partial-update body.

    A field sent as null is included (it clears the column); a field
    left out of the body is not.
    """
    data = model.model_dump(exclude_unset=True)
    return {key: data[key] for key in allowed if key in data}
