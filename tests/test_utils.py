"""Tests for shared utility functions."""

from datetime import date, datetime

import pytest

from showroom.utils import normalize_time, parse_date


class TestNormalizeTime:
    def test_strips_zero_seconds(self):
        assert normalize_time("09:00:00") == "09:00"

    def test_clean_value_unchanged(self):
        assert normalize_time("17:30") == "17:30"

    def test_strips_whitespace(self):
        assert normalize_time("  10:30  ") == "10:30"

    def test_nonzero_seconds_kept(self):
        assert normalize_time("10:00:30") == "10:00:30"


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("2025-06-10") == date(2025, 6, 10)

    def test_date_passthrough(self):
        assert parse_date(date(2025, 6, 10)) == date(2025, 6, 10)

    def test_datetime_truncated(self):
        assert parse_date(datetime(2025, 6, 10, 15, 45)) == date(2025, 6, 10)

    def test_invalid_string(self):
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            parse_date("next Tuesday")
