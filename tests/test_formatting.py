#!/usr/bin/env python3
"""Tests for shared value formatting."""
from datetime import date

import pytest

from models import ExpenseCategory, ValidationError
from reports.formatting import (
    format_currency,
    format_display_date,
    format_field,
    format_miles,
    format_number,
    truncate,
)


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        "value,expected",
        [(2000, "2000"), (2000.0, "2000"), (120.5, "120.5"), (0.1, "0.1"), (-75.0, "-75"), (None, "")],
    )
    def test_values(self, value, expected):
        assert format_number(value) == expected


class TestFormatField:
    """Tests for format_field."""

    def test_enum_uses_value(self):
        assert format_field(ExpenseCategory.LODGING) == "Lodging"

    def test_none_is_empty(self):
        assert format_field(None) == ""

    def test_text_unchanged(self):
        assert format_field("Oil, filter") == "Oil, filter"

    def test_float_mileage(self):
        assert format_field(125000.0) == "125000"


class TestDisplayFormats:
    """Tests for human-facing formats."""

    def test_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(0) == "$0.00"
        assert format_currency(None) == "-"

    def test_miles(self):
        assert format_miles(125000) == "125,000"
        assert format_miles(None) == "-"

    def test_display_date(self):
        assert format_display_date("2024-03-05") == "Mar 5, 2024"
        assert format_display_date(date(2024, 12, 31)) == "Dec 31, 2024"
        assert format_display_date(None) == "-"

    def test_display_date_rejects_malformed(self):
        with pytest.raises(ValidationError):
            format_display_date("03/05/2024")


class TestTruncate:
    """Tests for truncate."""

    def test_short_text_unchanged(self):
        assert truncate("Diesel") == "Diesel"

    def test_long_text_truncated(self):
        result = truncate("a" * 40, max_len=10)
        assert result == "aaaaaaa..."
        assert len(result) == 10

    def test_none(self):
        assert truncate(None) == "-"
