"""Helpers for the fixed-width ISO date strings records are stored with."""

import re
from datetime import date

from dateutil.relativedelta import relativedelta

from .errors import ValidationError

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str, field: str = "date") -> date:
    """
    Parse a zero-padded YYYY-MM-DD string.

    Only this exact form is accepted. Range filtering compares the stored
    strings lexicographically, which is correct only for fixed-width dates.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise ValidationError(f"{field} must be a date in YYYY-MM-DD format", field)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} is not a valid calendar date: {value}", field)


def start_of_year(day: date) -> date:
    """January 1st of the given day's year."""
    return day + relativedelta(month=1, day=1)


def end_of_year(day: date) -> date:
    """December 31st of the given day's year."""
    return day + relativedelta(month=12, day=31)


def year_bounds(year: int) -> tuple:
    """Inclusive (start, end) ISO strings covering a calendar year."""
    jan_first = date(year, 1, 1)
    return start_of_year(jan_first).isoformat(), end_of_year(jan_first).isoformat()
