"""Value formatting shared by the serializers and the CLI."""

from datetime import date
from enum import Enum
from typing import Optional, Union

from models import parse_iso_date

Number = Union[int, float]


def format_number(value: Optional[Number]) -> str:
    """
    Raw numeric text for delimited output.

    Whole numbers print without a decimal point (2000, not 2000.0) and other
    values use the shortest round-trip form (120.5). None becomes "".
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_field(value) -> str:
    """Text for one delimited cell: numbers raw, enums by value, None empty."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def format_currency(amount: Optional[Number]) -> str:
    """Format money for display ($1,234.50)."""
    return f"${amount:,.2f}" if amount is not None else "-"


def format_miles(miles: Optional[Number]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_display_date(value: Union[str, date, None]) -> str:
    """Format an ISO date as 'Mar 5, 2024'."""
    if value is None:
        return "-"
    day = parse_iso_date(value) if isinstance(value, str) else value
    return f"{day:%b} {day.day}, {day.year}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
