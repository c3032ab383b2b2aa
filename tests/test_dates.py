#!/usr/bin/env python3
"""Tests for ISO date helpers."""
import pytest
from datetime import date

from models import ValidationError, parse_iso_date, year_bounds
from models.dates import end_of_year, start_of_year


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    def test_parses_fixed_width_date(self):
        assert parse_iso_date("2024-04-01") == date(2024, 4, 1)

    @pytest.mark.parametrize("value", ["2024-4-1", "04/01/2024", "2024-04-01T00:00", "", None])
    def test_rejects_other_forms(self, value):
        with pytest.raises(ValidationError):
            parse_iso_date(value)

    def test_rejects_impossible_calendar_date(self):
        with pytest.raises(ValidationError) as exc:
            parse_iso_date("2024-02-30", "startDate")
        assert exc.value.field == "startDate"


class TestYearBounds:
    """Tests for year helpers."""

    def test_year_bounds(self):
        assert year_bounds(2024) == ("2024-01-01", "2024-12-31")

    def test_start_and_end_of_year(self):
        assert start_of_year(date(2024, 7, 19)) == date(2024, 1, 1)
        assert end_of_year(date(2024, 7, 19)) == date(2024, 12, 31)
