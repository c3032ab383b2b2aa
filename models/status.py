"""Status enum for next-service urgency levels."""

from enum import Enum


class Status(Enum):
    """Next service status. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    OK = 3
    UNKNOWN = 4  # No next service date or mileage recorded
