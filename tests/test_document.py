#!/usr/bin/env python3
"""Tests for printable HTML documents."""
import pytest

from models import (
    EnvironmentBlockedError,
    Expense,
    ExpenseCategory,
    MaintenanceLog,
    PayEntry,
    ServiceType,
)
from reports import (
    Granularity,
    RecordSet,
    aggregate,
    print_document,
    render_records_document,
    render_tax_report_document,
)
from reports.document import RECORDS_TITLE, BrowserPrintSurface


class FakeSurface:
    def __init__(self, opens=True):
        self.opens = opens
        self.opened = []

    def open(self, html):
        self.opened.append(html)
        return self.opens


@pytest.fixture
def records():
    return RecordSet(
        expenses=[Expense("2024-03-15", ExpenseCategory.FUEL, 1234.5, "Diesel", truck_id="t1")],
        pay_entries=[PayEntry("2024-03-01", "2024-03-14", 2000, "Acme Freight", notes="Week 10")],
        maintenance_logs=[
            MaintenanceLog("2024-03-20", "gone", ServiceType.OIL_CHANGE, 125000, 75, "Oil")
        ],
    )


class TestRenderRecordsDocument:
    """Tests for render_records_document."""

    def test_title_and_range(self, records):
        html = render_records_document(records, "2024-03-01", "2024-03-31")
        assert f"<title>{RECORDS_TITLE}</title>" in html
        assert "Date Range: Mar 1, 2024 - Mar 31, 2024" in html

    def test_sections_and_formatting(self, records):
        html = render_records_document(records, "2024-03-01", "2024-03-31", {"t1": "Big Blue"})
        assert "<h2>Expenses</h2>" in html
        assert "<h2>Pay Entries</h2>" in html
        assert "<h2>Maintenance Logs</h2>" in html
        assert "$1,234.50" in html
        assert "125,000" in html
        assert "Mar 15, 2024" in html
        assert "Week 10" in html

    def test_truck_name_falls_back_to_id(self, records):
        html = render_records_document(records, "2024-03-01", "2024-03-31", {"t1": "Big Blue"})
        assert "<td>Big Blue</td>" in html
        assert "<td>gone</td>" in html

    def test_omits_empty_sections(self, records):
        html = render_records_document(
            RecordSet(expenses=records.expenses), "2024-03-01", "2024-03-31"
        )
        assert "<h2>Pay Entries</h2>" not in html
        assert "<h2>Maintenance Logs</h2>" not in html

    def test_empty_message(self):
        html = render_records_document(RecordSet(), "2024-03-01", "2024-03-31")
        assert "No records found for this date range." in html

    def test_user_text_is_escaped(self):
        e = Expense("2024-03-15", ExpenseCategory.OTHER, 5, "<script>alert(1)</script>")
        html = render_records_document(RecordSet(expenses=[e]), "2024-03-01", "2024-03-31")
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_auto_print(self, records):
        quiet = render_records_document(records, "2024-03-01", "2024-03-31")
        printing = render_records_document(records, "2024-03-01", "2024-03-31", auto_print=True)
        assert "window.print()" not in quiet
        assert "window.print()" in printing


class TestRenderTaxReportDocument:
    """Tests for render_tax_report_document."""

    def test_quarterly_report(self):
        report = aggregate(
            [Expense("2024-05-01", ExpenseCategory.TOLLS, 40, "Turnpike")],
            [PayEntry("2024-05-02", "2024-05-09", 1500, "Acme Freight")],
            [],
            Granularity.QUARTERLY,
            2024,
        )
        html = render_tax_report_document(report)
        assert "<title>Tax Report - Quarterly - 2024</title>" in html
        for label in ("Q1", "Q2", "Q3", "Q4"):
            assert f"<h2>{label}</h2>" in html
        assert "<strong>$1,460.00</strong>" in html
        assert "<td>Tolls</td>" in html
        assert "No maintenance data available" in html
        assert html.count("No expense data available") == 3


class TestPrintDocument:
    """Tests for print_document."""

    def test_opens_surface(self):
        surface = FakeSurface()
        print_document("<html></html>", surface)
        assert surface.opened == ["<html></html>"]

    def test_blocked_surface_raises(self):
        with pytest.raises(EnvironmentBlockedError, match="allow pop-ups"):
            print_document("<html></html>", FakeSurface(opens=False))

    def test_browser_surface_writes_file(self, tmp_path, monkeypatch):
        opened = []
        monkeypatch.setattr("webbrowser.open", lambda uri: opened.append(uri) or True)

        assert BrowserPrintSurface(tmp_path).open("<p>hello</p>")

        files = list(tmp_path.glob("trucklog-*.html"))
        assert len(files) == 1
        assert files[0].read_text(encoding="utf-8") == "<p>hello</p>"
        assert opened == [files[0].resolve().as_uri()]

    def test_browser_surface_reuses_one_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr("webbrowser.open", lambda uri: True)
        surface = BrowserPrintSurface(tmp_path)

        surface.open("<p>first</p>")
        surface.open("<p>second</p>")

        files = list(tmp_path.iterdir())
        assert files == [tmp_path / "trucklog-print.html"]
        assert files[0].read_text(encoding="utf-8") == "<p>second</p>"

    def test_browser_surface_defaults_to_temp_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
        assert BrowserPrintSurface().path == tmp_path / "trucklog-print.html"

    def test_unwritable_directory_is_blocked(self, tmp_path):
        with pytest.raises(EnvironmentBlockedError, match="Could not write print document"):
            BrowserPrintSurface(tmp_path / "missing").open("<p>hello</p>")
