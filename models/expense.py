"""Expense class for business spending records."""

from typing import Optional

from .categories import ExpenseCategory


class Expense:
    """Money spent on a given day, optionally tied to a truck."""

    def __init__(
        self,
        date: str,
        category: ExpenseCategory,
        amount: float,
        description: str,
        truck_id: Optional[str] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.date = date
        self.category = category
        self.amount = amount
        self.description = description
        self.truck_id = truck_id
