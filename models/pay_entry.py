"""PayEntry class for income records."""

from typing import Optional


class PayEntry:
    """Income received from a client for work between two dates."""

    def __init__(
        self,
        start_date: str,
        end_date: str,
        amount: float,
        client: str,
        notes: Optional[str] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.start_date = start_date
        self.end_date = end_date
        self.amount = amount
        self.client = client
        self.notes = notes
