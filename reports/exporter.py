"""Build downloadable export artifacts from plain record collections."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, Optional

from models import Expense, MaintenanceLog, PayEntry

from .aggregation import Granularity, aggregate, tax_report_records
from .delimited import (
    CSV_MIME_TYPE,
    records_filename,
    records_to_csv,
    tax_report_filename,
    tax_report_to_csv,
)
from .document import HTML_MIME_TYPE, render_records_document, render_tax_report_document
from .filters import DataType, select_records

logger = logging.getLogger(__name__)


class ExportFormat(Enum):
    CSV = "csv"
    PDF = "pdf"  # printable HTML, saved as PDF from the print dialog


@dataclass
class ExportArtifact:
    """A rendered export ready to be downloaded or printed."""

    filename: str
    mime_type: str
    content: str

    @property
    def is_printable(self) -> bool:
        return self.mime_type == HTML_MIME_TYPE


def export_records(
    expenses: Iterable[Expense],
    pay_entries: Iterable[PayEntry],
    maintenance_logs: Iterable[MaintenanceLog],
    data_type: DataType,
    start: str,
    end: str,
    fmt: ExportFormat,
    trucks_map: Optional[Dict[str, str]] = None,
    today: Optional[date] = None,
    escape: bool = False,
    auto_print: bool = True,
) -> ExportArtifact:
    """Export raw records of the selected kinds within [start, end]."""
    today = today or date.today()
    records = select_records(
        expenses, pay_entries, maintenance_logs, data_type, start, end
    )
    logger.info(
        "Exporting %s records %s..%s as %s (%d expenses, %d pay, %d maintenance)",
        data_type.value,
        start,
        end,
        fmt.value,
        len(records.expenses),
        len(records.pay_entries),
        len(records.maintenance_logs),
    )

    if fmt is ExportFormat.CSV:
        return ExportArtifact(
            filename=records_filename(today),
            mime_type=CSV_MIME_TYPE,
            content=records_to_csv(records, escape=escape),
        )
    return ExportArtifact(
        filename=records_filename(today, "html"),
        mime_type=HTML_MIME_TYPE,
        content=render_records_document(
            records, start, end, trucks_map, auto_print=auto_print
        ),
    )


def export_tax_report(
    expenses: Iterable[Expense],
    pay_entries: Iterable[PayEntry],
    maintenance_logs: Iterable[MaintenanceLog],
    granularity: Granularity,
    year: int,
    fmt: ExportFormat,
    escape: bool = False,
    auto_print: bool = True,
) -> ExportArtifact:
    """Aggregate one tax year and render it."""
    records = tax_report_records(expenses, pay_entries, maintenance_logs, year)
    report = aggregate(
        records.expenses,
        records.pay_entries,
        records.maintenance_logs,
        granularity,
        year,
    )
    logger.info("Generated %s tax report for %d as %s", granularity.value, year, fmt.value)

    if fmt is ExportFormat.CSV:
        return ExportArtifact(
            filename=tax_report_filename(year, granularity),
            mime_type=CSV_MIME_TYPE,
            content=tax_report_to_csv(report, escape=escape),
        )
    return ExportArtifact(
        filename=tax_report_filename(year, granularity, "html"),
        mime_type=HTML_MIME_TYPE,
        content=render_tax_report_document(report, auto_print=auto_print),
    )
