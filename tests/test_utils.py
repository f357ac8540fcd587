# =============================================================================
# tests/test_utils.py - Shared Utility Tests
# =============================================================================
# This module contains tests for:
# - parse_timestamp() on the shapes PostgREST returns
# - format_time_ago() buckets and Spanish plurals
# =============================================================================

from datetime import date, datetime, timedelta, timezone

import pytest

from lib.utils import format_time_ago, parse_timestamp


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# parse_timestamp Tests
# =============================================================================

class TestParseTimestamp:
    """Test timestamp parsing."""

    def test_zulu_string(self):
        assert parse_timestamp("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc
        )

    def test_offset_string_is_converted_to_utc(self):
        assert parse_timestamp("2024-01-15T10:30:00+02:00") == datetime(
            2024, 1, 15, 8, 30, tzinfo=timezone.utc
        )

    def test_naive_string_is_utc(self):
        assert parse_timestamp("2024-01-15T10:30:00").tzinfo is not None

    def test_date_only(self):
        assert parse_timestamp("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert parse_timestamp(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 12345])
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None


# =============================================================================
# format_time_ago Tests
# =============================================================================

class TestFormatTimeAgo:
    """Test Spanish relative time buckets."""

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=30), "hace menos de 1 minuto"),
            (timedelta(seconds=90), "hace 1 minuto"),
            (timedelta(minutes=59), "hace 59 minutos"),
            (timedelta(hours=2), "hace 2 horas"),
            (timedelta(hours=25), "hace 1 día"),
            (timedelta(days=29), "hace 29 días"),
            (timedelta(days=45), "hace 1 mes"),
            (timedelta(days=11 * 30), "hace 11 meses"),
            (timedelta(days=13 * 30), "hace 1 año"),
        ],
    )
    def test_buckets(self, delta, expected):
        assert format_time_ago((NOW - delta).isoformat(), now=NOW) == expected

    def test_years_are_pluralized(self):
        assert format_time_ago((NOW - timedelta(days=25 * 30)).isoformat(), now=NOW) == "hace 2 años"

    def test_singular_hour(self):
        assert format_time_ago(NOW - timedelta(minutes=61), now=NOW) == "hace 1 hora"

    def test_future_timestamp_is_under_a_minute(self):
        assert format_time_ago(NOW + timedelta(hours=1), now=NOW) == "hace menos de 1 minuto"

    def test_unparseable_is_empty(self):
        assert format_time_ago("garbage", now=NOW) == ""
