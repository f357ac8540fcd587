# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - Timestamp parsing for values coming back from PostgREST
# - Spanish relative-time formatting for the activity feed
# =============================================================================

from datetime import date, datetime, timezone
from typing import Any


# =============================================================================
# Timestamp Utilities
# =============================================================================

def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a date or timestamp value into an aware UTC datetime.

    Accepts datetime/date objects and ISO 8601 strings, including the
    trailing "Z" PostgREST emits. Date-only values are midnight UTC and
    naive timestamps are assumed to be UTC.

    Returns:
        Aware datetime, or None if value is empty or unparseable

    Example:
        parse_timestamp("2024-01-15")            # 2024-01-15 00:00:00+00:00
        parse_timestamp("2024-01-15T10:30:00Z")  # 2024-01-15 10:30:00+00:00
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# =============================================================================
# Relative Time
# =============================================================================

def _plural(count: int, singular: str, suffix: str = "s") -> str:
    return f"hace {count} {singular}{suffix if count != 1 else ''}"


def format_time_ago(timestamp: Any, now: datetime | None = None) -> str:
    """
    Format a timestamp as Spanish relative time ("hace 2 horas").

    Buckets use whole units rounded down: seconds under a minute, then
    minutes, hours, days, 30-day months and 12-month years.

    Args:
        timestamp: ISO string or datetime of the event
        now: Reference time (defaults to the current UTC time)

    Returns:
        Relative time string, or "" if the timestamp can't be parsed

    Example:
        format_time_ago("2024-01-15T10:00:00Z", now=...)  # "hace 3 días"
    """
    moment = parse_timestamp(timestamp)
    if moment is None:
        return ""

    reference = parse_timestamp(now) if now is not None else utc_now()
    seconds = int((reference - moment).total_seconds())

    if seconds < 60:
        return "hace menos de 1 minuto"

    minutes = seconds // 60
    if minutes < 60:
        return _plural(minutes, "minuto")

    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hora")

    days = hours // 24
    if days < 30:
        return _plural(days, "día")

    months = days // 30
    if months < 12:
        return _plural(months, "mes", suffix="es")

    years = months // 12
    return _plural(years, "año")
