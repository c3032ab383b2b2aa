"""Printable HTML documents and the surface they are printed from."""

import logging
import tempfile
import webbrowser
from pathlib import Path
from typing import Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from models import EnvironmentBlockedError

from .aggregation import TaxReport
from .filters import RecordSet
from .formatting import format_currency, format_display_date, format_miles

logger = logging.getLogger(__name__)

HTML_MIME_TYPE = "text/html"
RECORDS_TITLE = "Trucking Expense Tracker Report"

TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["currency"] = format_currency
_env.filters["miles"] = format_miles
_env.filters["display_date"] = format_display_date


def render_records_document(
    records: RecordSet,
    start: str,
    end: str,
    trucks_map: Optional[Dict[str, str]] = None,
    auto_print: bool = False,
) -> str:
    """
    Render filtered records as a self-contained HTML report.

    Truck columns show the truck's name when trucks_map knows the id, and the
    raw id otherwise. With auto_print the page opens its print dialog on load.
    """
    trucks_map = trucks_map or {}

    def truck_name(truck_id: Optional[str]) -> str:
        if not truck_id:
            return ""
        return trucks_map.get(truck_id, truck_id)

    return _env.get_template("records.html").render(
        title=RECORDS_TITLE,
        records=records,
        start=start,
        end=end,
        truck_name=truck_name,
        auto_print=auto_print,
    )


def render_tax_report_document(report: TaxReport, auto_print: bool = False) -> str:
    """Render a tax report as a self-contained HTML document."""
    return _env.get_template("tax_report.html").render(
        title=report.title,
        report=report,
        auto_print=auto_print,
    )


class BrowserPrintSurface:
    """
    Print surface backed by the desktop web browser.

    Writes the document to ``trucklog-print.html`` in the given directory (the
    system temp dir by default) and asks the browser to open it. The file is
    overwritten by the next document, so at most one is left behind.
    Documents rendered with auto_print bring up the print / save-as-PDF
    dialog themselves.
    """

    FILENAME = "trucklog-print.html"

    def __init__(self, directory: Union[str, Path, None] = None):
        self.directory = directory

    @property
    def path(self) -> Path:
        return Path(self.directory or tempfile.gettempdir()) / self.FILENAME

    def open(self, html: str) -> bool:
        path = self.path
        try:
            path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise EnvironmentBlockedError(f"Could not write print document: {e}") from e
        logger.info("Opening print document %s", path)
        return webbrowser.open(path.resolve().as_uri())


def print_document(html: str, surface=None) -> None:
    """
    Hand a rendered document to a print surface.

    Any object with an ``open(html) -> bool`` method can serve as the
    surface. Raises EnvironmentBlockedError when the surface refuses to open.
    """
    surface = surface or BrowserPrintSurface()
    if not surface.open(html):
        logger.error("Print surface %s refused to open", type(surface).__name__)
        raise EnvironmentBlockedError()
