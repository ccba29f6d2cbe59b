"""
Unit tests for camwatch.utils.datetime_utils
"""
from datetime import datetime, timedelta, timezone

from camwatch.utils.datetime_utils import coerce_datetime, ensure_utc, epoch_millis, parse_iso, utc_now


class TestEnsureUtc:
    """Tests for ensure_utc - no config needed"""

    def test_none_returns_none(self):
        assert ensure_utc(None) is None

    def test_naive_assumed_utc(self):
        dt = datetime(2025, 1, 15, 12, 0, 0)
        result = ensure_utc(dt)
        assert result.tzinfo == timezone.utc
        assert result.year == 2025
        assert result.hour == 12

    def test_aware_converted_to_utc(self):
        # UTC+5:30
        dt = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        result = ensure_utc(dt)
        assert result.tzinfo == timezone.utc
        assert result.hour == 6  # 12 - 5.5 = 6:30
        assert result.minute == 30


class TestParseIso:
    """Tests for parse_iso"""

    def test_none_empty_returns_none(self, mock_settings):
        assert parse_iso(None) is None
        assert parse_iso("") is None

    def test_parse_utc_z_suffix(self, mock_settings):
        dt = parse_iso("2025-01-15T12:00:00Z")
        assert dt is not None
        assert dt.year == 2025
        assert dt.hour == 12
        assert dt.utcoffset() == timedelta(0)

    def test_naive_string_gets_app_timezone(self, mock_settings):
        dt = parse_iso("2025-01-15T12:00:00")
        assert dt.tzinfo == timezone.utc

    def test_invalid_returns_none(self, mock_settings):
        assert parse_iso("not-a-date") is None
        assert parse_iso("2025-13-45T99:99:99") is None


class TestEpochMillis:
    def test_known_instant(self):
        dt = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert epoch_millis(dt) == 1735689600000

    def test_naive_is_utc(self):
        assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1)) == 1000

    def test_default_is_now(self):
        before = int(utc_now().timestamp() * 1000)
        assert epoch_millis() >= before


class TestCoerceDatetime:
    def test_datetime_passthrough_to_utc(self):
        result = coerce_datetime(datetime(2025, 3, 1, 8, 0, 0))
        assert result == datetime(2025, 3, 1, 8, 0, 0, tzinfo=timezone.utc)

    def test_iso_string(self, mock_settings):
        result = coerce_datetime("2025-03-01T08:00:00Z")
        assert result == datetime(2025, 3, 1, 8, 0, 0, tzinfo=timezone.utc)

    def test_other_values_are_missing(self):
        assert coerce_datetime(None) is None
        assert coerce_datetime(12345) is None
