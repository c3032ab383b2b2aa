"""Comma-delimited text for raw record exports and tax reports."""

import csv
import io
from datetime import date
from typing import Iterable, List, Sequence

from models import Expense, MaintenanceLog, PayEntry

from .aggregation import Granularity, TaxReport
from .filters import RecordSet
from .formatting import format_field, format_number

CSV_MIME_TYPE = "text/csv;charset=utf-8"

EXPENSE_HEADER = ("Date", "Category", "Amount", "Description", "Truck ID")
PAY_HEADER = ("Start Date", "End Date", "Amount", "Client", "Notes")
MAINTENANCE_HEADER = (
    "Date",
    "Truck ID",
    "Service Type",
    "Mileage",
    "Cost",
    "Description",
    "Next Service Date",
    "Next Service Mileage",
)


def _line(cells: Sequence[str], escape: bool) -> str:
    """
    Join cells into one line.

    Unescaped output joins cells as-is, so a comma or newline inside a free
    text field shifts or splits the row. With escape=True, cells holding a
    comma, quote or line break are quoted RFC 4180 style; all other cells are
    written unchanged.
    """
    if not escape:
        return ",".join(cells) + "\n"
    buffer = io.StringIO()
    csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n").writerow(cells)
    return buffer.getvalue()[:-2] + "\n"


def _row(values: Iterable, escape: bool) -> str:
    return _line([format_field(v) for v in values], escape)


def _expense_values(expense: Expense) -> List:
    return [
        expense.date,
        expense.category,
        expense.amount,
        expense.description,
        expense.truck_id,
    ]


def _pay_values(pay: PayEntry) -> List:
    return [pay.start_date, pay.end_date, pay.amount, pay.client, pay.notes]


def _maintenance_values(log: MaintenanceLog) -> List:
    return [
        log.date,
        log.truck_id,
        log.service_type,
        log.mileage,
        log.cost,
        log.description,
        log.next_service_date,
        log.next_service_mileage,
    ]


def _section(title: str, header: Sequence[str], rows: List[List], escape: bool) -> str:
    if not rows:
        return ""
    parts = [f"{title}\n", _line(header, escape)]
    parts.extend(_row(values, escape) for values in rows)
    parts.append("\n")
    return "".join(parts)


def records_to_csv(records: RecordSet, escape: bool = False) -> str:
    """
    Render filtered records as sectioned CSV text.

    Sections appear in the order expenses, pay entries, maintenance logs; a
    kind with no records is left out entirely. Rows keep the order given.
    """
    return "".join(
        [
            _section(
                "EXPENSES",
                EXPENSE_HEADER,
                [_expense_values(e) for e in records.expenses],
                escape,
            ),
            _section(
                "PAY ENTRIES",
                PAY_HEADER,
                [_pay_values(p) for p in records.pay_entries],
                escape,
            ),
            _section(
                "MAINTENANCE LOGS",
                MAINTENANCE_HEADER,
                [_maintenance_values(log) for log in records.maintenance_logs],
                escape,
            ),
        ]
    )


def tax_report_to_csv(report: TaxReport, escape: bool = False) -> str:
    """Render an aggregated tax report as CSV text, one block per bucket."""
    parts = [
        f"TAX REPORT - {report.granularity.value.upper()} - {report.year}\n\n"
    ]
    for period, bucket in report.buckets.items():
        parts.append(_line([period], escape))
        parts.append(_line(["Income", format_number(bucket.income)], escape))
        parts.append(_line(["Expenses", format_number(bucket.expenses)], escape))
        parts.append(_line(["Maintenance", format_number(bucket.maintenance)], escape))
        parts.append(_line(["Profit", format_number(bucket.profit)], escape))
        parts.append("\n")
        parts.append("Expenses by Category\n")
        for category, amount in bucket.expenses_by_category.items():
            parts.append(_line([category, format_number(amount)], escape))
        parts.append("\n")
        parts.append("Maintenance by Type\n")
        for service_type, amount in bucket.maintenance_by_type.items():
            parts.append(_line([service_type, format_number(amount)], escape))
        parts.append("\n\n")
    return "".join(parts)


def records_filename(today: date, extension: str = "csv") -> str:
    """Download name for a raw export."""
    return f"trucking-data-{today.isoformat()}.{extension}"


def tax_report_filename(
    year: int, granularity: Granularity, extension: str = "csv"
) -> str:
    """Download name for a tax report."""
    return f"tax-report-{year}-{granularity.value}.{extension}"
