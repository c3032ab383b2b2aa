#!/usr/bin/env python3
"""Tests for CSV rendering of records and tax reports."""
from datetime import date

import pytest

from models import Expense, ExpenseCategory, MaintenanceLog, PayEntry, ServiceType
from reports import Granularity, RecordSet, aggregate, records_to_csv, tax_report_to_csv
from reports.delimited import records_filename, tax_report_filename


@pytest.fixture
def expense():
    return Expense("2024-03-15", ExpenseCategory.FUEL, 120.50, "Diesel", truck_id="t1")


@pytest.fixture
def pay_entry():
    return PayEntry("2024-03-01", "2024-03-14", 2000.0, "Acme Freight")


@pytest.fixture
def maintenance_log():
    return MaintenanceLog(
        "2024-03-20",
        "t1",
        ServiceType.OIL_CHANGE,
        125000,
        75,
        "Oil and filter",
        next_service_date="2024-06-20",
        next_service_mileage=140000,
    )


class TestRecordsToCsv:
    """Tests for records_to_csv."""

    def test_all_sections(self, expense, pay_entry, maintenance_log):
        records = RecordSet([expense], [pay_entry], [maintenance_log])
        assert records_to_csv(records) == (
            "EXPENSES\n"
            "Date,Category,Amount,Description,Truck ID\n"
            "2024-03-15,Fuel,120.5,Diesel,t1\n"
            "\n"
            "PAY ENTRIES\n"
            "Start Date,End Date,Amount,Client,Notes\n"
            "2024-03-01,2024-03-14,2000,Acme Freight,\n"
            "\n"
            "MAINTENANCE LOGS\n"
            "Date,Truck ID,Service Type,Mileage,Cost,Description,"
            "Next Service Date,Next Service Mileage\n"
            "2024-03-20,t1,Oil Change,125000,75,Oil and filter,2024-06-20,140000\n"
            "\n"
        )

    def test_empty_sections_omitted(self, pay_entry):
        output = records_to_csv(RecordSet(pay_entries=[pay_entry]))
        assert output.startswith("PAY ENTRIES\n")
        assert "EXPENSES" not in output
        assert "MAINTENANCE LOGS" not in output

    def test_nothing_selected(self):
        assert records_to_csv(RecordSet()) == ""

    def test_missing_optionals_are_empty_cells(self):
        log = MaintenanceLog("2024-03-20", "t1", ServiceType.INSPECTION, 125000.0, 90.0, "DOT")
        line = records_to_csv(RecordSet(maintenance_logs=[log])).splitlines()[2]
        assert line == "2024-03-20,t1,Inspection,125000,90,DOT,,"

    def test_rows_keep_input_order(self):
        expenses = [
            Expense("2024-03-20", ExpenseCategory.TOLLS, 12, "Second"),
            Expense("2024-03-01", ExpenseCategory.FOOD, 9, "First"),
        ]
        lines = records_to_csv(RecordSet(expenses=expenses)).splitlines()
        assert lines[2].endswith("Second,")
        assert lines[3].endswith("First,")

    def test_unescaped_comma_shifts_columns(self):
        """Raw output writes free text as-is."""
        e = Expense("2024-03-15", ExpenseCategory.FUEL, 80, "Fuel, DEF")
        line = records_to_csv(RecordSet(expenses=[e])).splitlines()[2]
        assert line == "2024-03-15,Fuel,80,Fuel, DEF,"
        assert len(line.split(",")) == 6

    def test_escape_quotes_special_fields(self):
        expenses = [
            Expense("2024-03-15", ExpenseCategory.FUEL, 80, "Fuel, DEF"),
            Expense("2024-03-16", ExpenseCategory.OTHER, 5, 'Sign says "no"'),
        ]
        lines = records_to_csv(RecordSet(expenses=expenses), escape=True).split("\n")
        assert lines[2] == '2024-03-15,Fuel,80,"Fuel, DEF",'
        assert lines[3] == '2024-03-16,Other,5,"Sign says ""no""",'

    def test_escape_leaves_plain_output_unchanged(self, expense, pay_entry, maintenance_log):
        records = RecordSet([expense], [pay_entry], [maintenance_log])
        assert records_to_csv(records, escape=True) == records_to_csv(records)


class TestTaxReportToCsv:
    """Tests for tax_report_to_csv."""

    def test_annual_report(self, expense, pay_entry, maintenance_log):
        report = aggregate([expense], [pay_entry], [maintenance_log], Granularity.ANNUAL, 2024)
        assert tax_report_to_csv(report) == (
            "TAX REPORT - ANNUAL - 2024\n"
            "\n"
            "2024\n"
            "Income,2000\n"
            "Expenses,120.5\n"
            "Maintenance,75\n"
            "Profit,1804.5\n"
            "\n"
            "Expenses by Category\n"
            "Fuel,120.5\n"
            "\n"
            "Maintenance by Type\n"
            "Oil Change,75\n"
            "\n"
            "\n"
        )

    def test_empty_quarter_block(self):
        report = aggregate([], [], [], Granularity.QUARTERLY, 2024)
        output = tax_report_to_csv(report)
        assert output.startswith("TAX REPORT - QUARTERLY - 2024\n\nQ1\nIncome,0\n")
        assert (
            "Q3\nIncome,0\nExpenses,0\nMaintenance,0\nProfit,0\n\n"
            "Expenses by Category\n\nMaintenance by Type\n\n\n"
        ) in output
        assert output.count("Expenses by Category") == 4

    def test_monthly_blocks_in_calendar_order(self):
        report = aggregate([], [], [], Granularity.MONTHLY, 2024)
        output = tax_report_to_csv(report)
        assert output.index("\nJanuary\n") < output.index("\nFebruary\n") < output.index("\nDecember\n")

    def test_negative_profit(self):
        e = Expense("2024-05-01", ExpenseCategory.INSURANCE, 350.25, "Premium")
        report = aggregate([e], [], [], Granularity.ANNUAL, 2024)
        assert "Profit,-350.25\n" in tax_report_to_csv(report)


class TestFilenames:
    """Tests for download names."""

    def test_records_filename(self):
        assert records_filename(date(2024, 6, 1)) == "trucking-data-2024-06-01.csv"
        assert records_filename(date(2024, 6, 1), "html") == "trucking-data-2024-06-01.html"

    def test_tax_report_filename(self):
        assert tax_report_filename(2024, Granularity.QUARTERLY) == "tax-report-2024-quarterly.csv"
