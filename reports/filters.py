"""Date range and data-type selection applied before aggregation or export."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from models import Expense, MaintenanceLog, PayEntry, ValidationError, parse_iso_date


class DataType(Enum):
    """Which record kinds an export includes."""

    EXPENSES = "expenses"
    PAY = "pay"
    MAINTENANCE = "maintenance"
    ALL = "all"

    def includes(self, other: "DataType") -> bool:
        return self is DataType.ALL or self is other


@dataclass
class RecordSet:
    """Filtered records handed to the serializers, in fetch order."""

    expenses: List[Expense] = field(default_factory=list)
    pay_entries: List[PayEntry] = field(default_factory=list)
    maintenance_logs: List[MaintenanceLog] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.expenses or self.pay_entries or self.maintenance_logs)


def check_range(start: str, end: str) -> None:
    """
    Reject range bounds that are not fixed-width ISO dates or are reversed.

    Filtering compares the date strings directly, so both bounds and the
    stored dates must be zero-padded YYYY-MM-DD.
    """
    if parse_iso_date(start, "start") > parse_iso_date(end, "end"):
        raise ValidationError("Start date must be on or before end date", "end")


def filter_expenses(expenses: Iterable[Expense], start: str, end: str) -> List[Expense]:
    """Expenses dated within [start, end]."""
    check_range(start, end)
    return [e for e in expenses if start <= e.date <= end]


def filter_pay_entries(
    pay_entries: Iterable[PayEntry], start: str, end: str
) -> List[PayEntry]:
    """Pay entries whose start date or end date falls within [start, end]."""
    check_range(start, end)
    return [
        p
        for p in pay_entries
        if start <= p.start_date <= end or start <= p.end_date <= end
    ]


def filter_maintenance_logs(
    logs: Iterable[MaintenanceLog], start: str, end: str
) -> List[MaintenanceLog]:
    """Maintenance logs dated within [start, end]."""
    check_range(start, end)
    return [log for log in logs if start <= log.date <= end]


def select_records(
    expenses: Iterable[Expense],
    pay_entries: Iterable[PayEntry],
    maintenance_logs: Iterable[MaintenanceLog],
    data_type: DataType,
    start: str,
    end: str,
) -> RecordSet:
    """Keep only the requested record kinds, filtered to the date range."""
    check_range(start, end)
    selected = RecordSet()
    if data_type.includes(DataType.EXPENSES):
        selected.expenses = filter_expenses(expenses, start, end)
    if data_type.includes(DataType.PAY):
        selected.pay_entries = filter_pay_entries(pay_entries, start, end)
    if data_type.includes(DataType.MAINTENANCE):
        selected.maintenance_logs = filter_maintenance_logs(maintenance_logs, start, end)
    return selected
