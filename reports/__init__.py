"""
Report generation for trucking records.

- filters: date range and data-type selection
- aggregation: per-period income/expense/maintenance totals
- delimited: CSV text for raw records and tax reports
- document: printable HTML documents and the print surface
- exporter: ties the above into downloadable artifacts
"""

from .filters import DataType, RecordSet, select_records
from .aggregation import Granularity, ReportBucket, TaxReport, aggregate, tax_report_records
from .delimited import records_to_csv, tax_report_to_csv
from .document import (
    BrowserPrintSurface,
    print_document,
    render_records_document,
    render_tax_report_document,
)
from .exporter import ExportArtifact, ExportFormat, export_records, export_tax_report

__all__ = [
    "DataType",
    "RecordSet",
    "select_records",
    "Granularity",
    "ReportBucket",
    "TaxReport",
    "aggregate",
    "tax_report_records",
    "records_to_csv",
    "tax_report_to_csv",
    "BrowserPrintSurface",
    "print_document",
    "render_records_document",
    "render_tax_report_document",
    "ExportArtifact",
    "ExportFormat",
    "export_records",
    "export_tax_report",
]
