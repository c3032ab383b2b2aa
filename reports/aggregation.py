"""Per-period income, expense and maintenance totals for tax reports."""

import calendar
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List

from models import Expense, MaintenanceLog, PayEntry, parse_iso_date, year_bounds

from .filters import (
    RecordSet,
    filter_expenses,
    filter_maintenance_logs,
    filter_pay_entries,
)

MONTH_NAMES = tuple(calendar.month_name)[1:]


class Granularity(Enum):
    """Period size used to bucket records."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass
class ReportBucket:
    """Totals for one period. Category and type maps only hold seen keys."""

    income: float = 0
    expenses: float = 0
    maintenance: float = 0
    profit: float = 0
    expenses_by_category: Dict[str, float] = field(default_factory=dict)
    maintenance_by_type: Dict[str, float] = field(default_factory=dict)


@dataclass
class TaxReport:
    """Aggregated buckets for one year, in calendar order."""

    granularity: Granularity
    year: int
    buckets: Dict[str, ReportBucket]

    @property
    def title(self) -> str:
        return f"Tax Report - {self.granularity.label} - {self.year}"


def bucket_labels(granularity: Granularity, year: int) -> List[str]:
    """All bucket labels for a granularity, in calendar order."""
    if granularity is Granularity.MONTHLY:
        return list(MONTH_NAMES)
    if granularity is Granularity.QUARTERLY:
        return [f"Q{q}" for q in range(1, 5)]
    return [str(year)]


def bucket_key(granularity: Granularity, year: int, iso_date: str, field_name: str = "date") -> str:
    """
    Label of the bucket a date falls in.

    Raises ValidationError for a malformed date rather than guessing a bucket.
    """
    day = parse_iso_date(iso_date, field_name)
    if granularity is Granularity.MONTHLY:
        return MONTH_NAMES[day.month - 1]
    if granularity is Granularity.QUARTERLY:
        return f"Q{(day.month - 1) // 3 + 1}"
    return str(year)


def aggregate(
    expenses: Iterable[Expense],
    pay_entries: Iterable[PayEntry],
    maintenance_logs: Iterable[MaintenanceLog],
    granularity: Granularity,
    year: int,
) -> TaxReport:
    """
    Group records into period buckets and total them.

    Inputs are expected to be pre-filtered to the year (see
    tax_report_records). Pay entries are attributed entirely to the period of
    their start date, even when they run into the next one. Every bucket is
    present in the result, including ones with no activity.
    """
    buckets = {label: ReportBucket() for label in bucket_labels(granularity, year)}

    for expense in expenses:
        bucket = buckets[bucket_key(granularity, year, expense.date)]
        category = expense.category.value
        bucket.expenses += expense.amount
        bucket.expenses_by_category[category] = (
            bucket.expenses_by_category.get(category, 0) + expense.amount
        )

    for log in maintenance_logs:
        bucket = buckets[bucket_key(granularity, year, log.date)]
        service_type = log.service_type.value
        bucket.maintenance += log.cost
        bucket.maintenance_by_type[service_type] = (
            bucket.maintenance_by_type.get(service_type, 0) + log.cost
        )

    for pay in pay_entries:
        bucket = buckets[bucket_key(granularity, year, pay.start_date, "startDate")]
        bucket.income += pay.amount

    for bucket in buckets.values():
        bucket.profit = bucket.income - bucket.expenses - bucket.maintenance

    return TaxReport(granularity=granularity, year=year, buckets=buckets)


def tax_report_records(
    expenses: Iterable[Expense],
    pay_entries: Iterable[PayEntry],
    maintenance_logs: Iterable[MaintenanceLog],
    year: int,
) -> RecordSet:
    """Records belonging to a tax year (Jan 1 through Dec 31, inclusive)."""
    start, end = year_bounds(year)
    return RecordSet(
        expenses=filter_expenses(expenses, start, end),
        pay_entries=filter_pay_entries(pay_entries, start, end),
        maintenance_logs=filter_maintenance_logs(maintenance_logs, start, end),
    )
