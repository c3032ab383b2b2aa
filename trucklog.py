#!/usr/bin/env python3
"""
Unified CLI for trucking business records.

Commands:
  trucks           - List trucks
  expenses         - List expenses
  pay              - List pay entries
  maintenance      - List maintenance logs
  due              - Show next-service status per truck and service type
  add-truck        - Add a truck
  add-expense      - Add an expense
  add-pay          - Add a pay entry
  add-maintenance  - Add a maintenance log
  delete           - Delete a record by id
  export           - Export raw records as CSV or a printable report
  tax-report       - Generate a monthly/quarterly/annual tax report
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Dict, List, Optional

from config import Settings, setup_logging
from models import (
    Expense,
    ExpenseCategory,
    MaintenanceLog,
    PayEntry,
    RecordKind,
    RecordStore,
    ServiceType,
    Status,
    Truck,
    TruckLedgerError,
    current_truck_miles,
    parse_iso_date,
    record_to_dict,
    service_status,
    validate_record,
)
from models.dates import start_of_year
from reports import (
    DataType,
    ExportArtifact,
    ExportFormat,
    Granularity,
    export_records,
    export_tax_report,
    print_document,
)
from reports.formatting import format_currency, format_miles, truncate

logger = logging.getLogger("trucklog")

# =============================================================================
# Helpers
# =============================================================================


def truck_label(truck_id: Optional[str], trucks_map: Dict[str, str]) -> str:
    """Truck name for display, falling back to the id."""
    if not truck_id:
        return "-"
    return trucks_map.get(truck_id, truck_id)


def latest_logs(logs: List[MaintenanceLog]) -> List[MaintenanceLog]:
    """Most recent log per (truck, service type); older ones are superseded."""
    latest: Dict[tuple, MaintenanceLog] = {}
    for log in logs:
        key = (log.truck_id, log.service_type)
        if key not in latest or (log.date, log.mileage) >= (
            latest[key].date,
            latest[key].mileage,
        ):
            latest[key] = log
    return list(latest.values())


def write_artifact(artifact: ExportArtifact, output: Optional[Path]) -> None:
    """Save a CSV artifact to disk, or hand a printable one to the browser."""
    if artifact.is_printable and output is None:
        print_document(artifact.content)
        print("Report opened for printing. Use the print dialog to save as PDF.")
        return
    path = output or Path(artifact.filename)
    path.write_text(artifact.content, encoding="utf-8")
    print(f"Wrote {path}")


# =============================================================================
# List commands
# =============================================================================


def make_trucks_table(trucks: List[Truck]) -> List[List[str]]:
    """Convert trucks to table rows."""
    return [
        [
            truck.name,
            truck.identifier,
            f"{truck.year} {truck.make} {truck.model}",
            truck.vin or "-",
            truck.license_plate or "-",
            truck.id,
        ]
        for truck in trucks
    ]


def cmd_trucks(args, store: RecordStore):
    """List trucks."""
    trucks = sorted(store.fetch_trucks(args.owner), key=lambda t: t.name)
    print(f"Trucks: {len(trucks)}")
    print()
    if not trucks:
        print("No trucks found.")
        return 0
    headers = ["Name", "Identifier", "Truck", "VIN", "Plate", "ID"]
    print(tabulate(make_trucks_table(trucks), headers=headers, tablefmt="simple"))
    return 0


def make_expenses_table(
    expenses: List[Expense], trucks_map: Dict[str, str]
) -> List[List[str]]:
    """Convert expenses to table rows."""
    return [
        [
            expense.date,
            expense.category.value,
            format_currency(expense.amount),
            truncate(expense.description),
            truck_label(expense.truck_id, trucks_map),
            expense.id,
        ]
        for expense in expenses
    ]


def cmd_expenses(args, store: RecordStore):
    """List expenses, newest first."""
    expenses = store.fetch_expenses(args.owner)
    if args.since:
        parse_iso_date(args.since, "since")
        expenses = [e for e in expenses if e.date >= args.since]
    if args.category:
        expenses = [e for e in expenses if e.category.value == args.category]
    expenses.sort(key=lambda e: e.date, reverse=True)

    print(f"Expenses: {len(expenses)}")
    print(f"Total: {format_currency(sum(e.amount for e in expenses))}")
    print()
    if not expenses:
        print("No expenses found.")
        return 0
    headers = ["Date", "Category", "Amount", "Description", "Truck", "ID"]
    rows = make_expenses_table(expenses, store.trucks_map(args.owner))
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def make_pay_table(entries: List[PayEntry]) -> List[List[str]]:
    """Convert pay entries to table rows."""
    return [
        [
            pay.start_date,
            pay.end_date,
            format_currency(pay.amount),
            pay.client,
            truncate(pay.notes),
            pay.id,
        ]
        for pay in entries
    ]


def cmd_pay(args, store: RecordStore):
    """List pay entries, newest first."""
    entries = store.fetch_pay_entries(args.owner)
    if args.since:
        parse_iso_date(args.since, "since")
        entries = [p for p in entries if p.end_date >= args.since]
    entries.sort(key=lambda p: p.start_date, reverse=True)

    print(f"Pay entries: {len(entries)}")
    print(f"Total: {format_currency(sum(p.amount for p in entries))}")
    print()
    if not entries:
        print("No pay entries found.")
        return 0
    headers = ["Start", "End", "Amount", "Client", "Notes", "ID"]
    print(tabulate(make_pay_table(entries), headers=headers, tablefmt="simple"))
    return 0


def make_maintenance_table(
    logs: List[MaintenanceLog], trucks_map: Dict[str, str]
) -> List[List[str]]:
    """Convert maintenance logs to table rows."""
    return [
        [
            log.date,
            truck_label(log.truck_id, trucks_map),
            log.service_type.value,
            format_miles(log.mileage),
            format_currency(log.cost),
            log.next_service_date or "-",
            log.id,
        ]
        for log in logs
    ]


def cmd_maintenance(args, store: RecordStore):
    """List maintenance logs, newest first."""
    logs = store.fetch_maintenance_logs(args.owner)
    if args.truck:
        logs = [log for log in logs if log.truck_id == args.truck]
    if args.since:
        parse_iso_date(args.since, "since")
        logs = [log for log in logs if log.date >= args.since]
    logs.sort(key=lambda log: log.date, reverse=True)

    print(f"Maintenance logs: {len(logs)}")
    print(f"Total cost: {format_currency(sum(log.cost for log in logs))}")
    print()
    if not logs:
        print("No maintenance logs found.")
        return 0
    headers = ["Date", "Truck", "Service", "Mileage", "Cost", "Next Service", "ID"]
    rows = make_maintenance_table(logs, store.trucks_map(args.owner))
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Due command
# =============================================================================


def cmd_due(args, store: RecordStore):
    """Show next-service status for the latest log of each truck/service type."""
    as_of = parse_iso_date(args.as_of, "as-of") if args.as_of else date.today()
    all_logs = store.fetch_maintenance_logs(args.owner)
    trucks_map = store.trucks_map(args.owner)

    print(f"As of: {as_of.isoformat()}")
    print()

    groups: Dict[Status, List[List[str]]] = {status: [] for status in Status}
    for log in sorted(latest_logs(all_logs), key=lambda l: (l.truck_id, l.service_type.value)):
        miles = current_truck_miles(all_logs, log.truck_id)
        status = service_status(log, as_of, miles)
        groups[status].append(
            [
                truck_label(log.truck_id, trucks_map),
                log.service_type.value,
                log.date,
                log.next_service_date or "-",
                format_miles(log.next_service_mileage),
                format_miles(miles),
            ]
        )

    headers = ["Truck", "Service", "Last Done", "Due (date)", "Due (mi)", "Current (mi)"]
    for status, title in (
        (Status.OVERDUE, "OVERDUE:"),
        (Status.DUE_SOON, "DUE SOON:"),
        (Status.OK, "OK:"),
    ):
        if groups[status]:
            print(title)
            print(tabulate(groups[status], headers=headers, tablefmt="simple"))
            print()

    if groups[Status.UNKNOWN]:
        print("NO NEXT SERVICE RECORDED:")
        for row in groups[Status.UNKNOWN]:
            print(f"  {row[0]}: {row[1]} (last {row[2]})")
        print()

    return 0


# =============================================================================
# Add / delete commands
# =============================================================================


def _add_record(args, store: RecordStore, kind: RecordKind, record, lines: List[str]):
    validate_record(kind, record_to_dict(kind, record))

    print(f"Adding {kind.value} record for {args.owner}:")
    for line in lines:
        print(f"  {line}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    saved = store.add(args.owner, kind, record)
    print(f"Saved with id {saved.id}.")
    return 0


def cmd_add_truck(args, store: RecordStore):
    """Add a truck."""
    truck = Truck(
        name=args.name,
        identifier=args.identifier,
        make=args.make,
        model=args.model,
        year=args.year,
        vin=args.vin,
        license_plate=args.plate,
        notes=args.notes,
    )
    lines = [f"Name:  {truck.display_name}", f"ID no: {truck.identifier}"]
    if truck.vin:
        lines.append(f"VIN:   {truck.vin}")
    if truck.license_plate:
        lines.append(f"Plate: {truck.license_plate}")
    return _add_record(args, store, RecordKind.TRUCK, truck, lines)


def cmd_add_expense(args, store: RecordStore):
    """Add an expense."""
    expense = Expense(
        date=args.date or date.today().isoformat(),
        category=ExpenseCategory(args.category),
        amount=args.amount,
        description=args.description,
        truck_id=args.truck,
    )
    lines = [
        f"Date:     {expense.date}",
        f"Category: {expense.category.value}",
        f"Amount:   {format_currency(expense.amount)}",
        f"Desc:     {expense.description}",
    ]
    if expense.truck_id:
        lines.append(f"Truck:    {expense.truck_id}")
    return _add_record(args, store, RecordKind.EXPENSE, expense, lines)


def cmd_add_pay(args, store: RecordStore):
    """Add a pay entry."""
    pay = PayEntry(
        start_date=args.start,
        end_date=args.end,
        amount=args.amount,
        client=args.client,
        notes=args.notes,
    )
    lines = [
        f"Period: {pay.start_date} to {pay.end_date}",
        f"Amount: {format_currency(pay.amount)}",
        f"Client: {pay.client}",
    ]
    if pay.notes:
        lines.append(f"Notes:  {pay.notes}")
    return _add_record(args, store, RecordKind.PAY_ENTRY, pay, lines)


def cmd_add_maintenance(args, store: RecordStore):
    """Add a maintenance log."""
    log = MaintenanceLog(
        date=args.date or date.today().isoformat(),
        truck_id=args.truck,
        service_type=ServiceType(args.service_type),
        mileage=args.mileage,
        cost=args.cost,
        description=args.description,
        next_service_date=args.next_date,
        next_service_mileage=args.next_mileage,
    )
    lines = [
        f"Date:    {log.date}",
        f"Truck:   {log.truck_id}",
        f"Service: {log.service_type.value}",
        f"Mileage: {format_miles(log.mileage)}",
        f"Cost:    {format_currency(log.cost)}",
    ]
    if log.next_service_date:
        lines.append(f"Next:    {log.next_service_date}")
    if log.next_service_mileage:
        lines.append(f"Next mi: {format_miles(log.next_service_mileage)}")
    return _add_record(args, store, RecordKind.MAINTENANCE_LOG, log, lines)


def cmd_delete(args, store: RecordStore):
    """Delete a record by id."""
    kind = RecordKind.from_name(args.kind)
    store.delete(args.owner, kind, args.record_id)
    print(f"Deleted {kind.value} record {args.record_id}.")
    return 0


# =============================================================================
# Export commands
# =============================================================================


def cmd_export(args, store: RecordStore):
    """Export raw records as CSV or a printable report."""
    today = date.today()
    start = args.start or start_of_year(today).isoformat()
    end = args.end or today.isoformat()

    artifact = export_records(
        store.fetch_expenses(args.owner),
        store.fetch_pay_entries(args.owner),
        store.fetch_maintenance_logs(args.owner),
        DataType(args.type),
        start,
        end,
        ExportFormat(args.format),
        trucks_map=store.trucks_map(args.owner),
        today=today,
        escape=args.escape,
        auto_print=args.output is None,
    )
    write_artifact(artifact, args.output)
    return 0


def cmd_tax_report(args, store: RecordStore):
    """Generate a tax report for one year."""
    artifact = export_tax_report(
        store.fetch_expenses(args.owner),
        store.fetch_pay_entries(args.owner),
        store.fetch_maintenance_logs(args.owner),
        Granularity(args.report_type),
        args.year,
        ExportFormat(args.format),
        escape=args.escape,
        auto_print=args.output is None,
    )
    write_artifact(artifact, args.output)
    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "trucks": cmd_trucks,
    "expenses": cmd_expenses,
    "pay": cmd_pay,
    "maintenance": cmd_maintenance,
    "due": cmd_due,
    "add-truck": cmd_add_truck,
    "add-expense": cmd_add_expense,
    "add-pay": cmd_add_pay,
    "add-maintenance": cmd_add_maintenance,
    "delete": cmd_delete,
    "export": cmd_export,
    "tax-report": cmd_tax_report,
}


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trucking business record keeper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --owner joe trucks
  %(prog)s --owner joe add-expense --category Fuel --amount 120.50 \\
      --description "Diesel fill-up" --truck <truck-id>
  %(prog)s --owner joe expenses --since 2024-01-01
  %(prog)s --owner joe due
  %(prog)s --owner joe export --type all --format csv --start 2024-01-01
  %(prog)s --owner joe tax-report --report-type quarterly --year 2024
""",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help="Directory holding owner data files (default: $TRUCKLOG_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--owner",
        type=str,
        default=settings.owner,
        help="Owner account id (default: $TRUCKLOG_OWNER)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # List subcommands
    subparsers.add_parser("trucks", help="List trucks")

    expenses_parser = subparsers.add_parser("expenses", help="List expenses")
    expenses_parser.add_argument(
        "--since", type=str, help="Show only expenses since date (YYYY-MM-DD)"
    )
    expenses_parser.add_argument(
        "--category",
        choices=[c.value for c in ExpenseCategory],
        help="Show only one category",
    )

    pay_parser = subparsers.add_parser("pay", help="List pay entries")
    pay_parser.add_argument(
        "--since", type=str, help="Show only entries ending on or after date"
    )

    maintenance_parser = subparsers.add_parser(
        "maintenance", help="List maintenance logs"
    )
    maintenance_parser.add_argument("--truck", type=str, help="Filter to a truck id")
    maintenance_parser.add_argument(
        "--since", type=str, help="Show only logs since date (YYYY-MM-DD)"
    )

    due_parser = subparsers.add_parser(
        "due", help="Show next-service status per truck and service type"
    )
    due_parser.add_argument(
        "--as-of", type=str, help="Date to check against (default: today)"
    )

    # Add subcommands
    truck_parser = subparsers.add_parser("add-truck", help="Add a truck")
    truck_parser.add_argument("name", type=str, help="Display name")
    truck_parser.add_argument("identifier", type=str, help="Unit number or identifier")
    truck_parser.add_argument("make", type=str)
    truck_parser.add_argument("model", type=str)
    truck_parser.add_argument("year", type=int)
    truck_parser.add_argument("--vin", type=str)
    truck_parser.add_argument("--plate", type=str, help="License plate")
    truck_parser.add_argument("--notes", type=str)
    truck_parser.add_argument("--dry-run", action="store_true")

    expense_parser = subparsers.add_parser("add-expense", help="Add an expense")
    expense_parser.add_argument(
        "--date", type=str, help="Expense date in YYYY-MM-DD format (default: today)"
    )
    expense_parser.add_argument(
        "--category", choices=[c.value for c in ExpenseCategory], required=True
    )
    expense_parser.add_argument("--amount", type=float, required=True)
    expense_parser.add_argument("--description", type=str, required=True)
    expense_parser.add_argument("--truck", type=str, help="Truck id")
    expense_parser.add_argument("--dry-run", action="store_true")

    add_pay_parser = subparsers.add_parser("add-pay", help="Add a pay entry")
    add_pay_parser.add_argument("--start", type=str, required=True, help="YYYY-MM-DD")
    add_pay_parser.add_argument("--end", type=str, required=True, help="YYYY-MM-DD")
    add_pay_parser.add_argument("--amount", type=float, required=True)
    add_pay_parser.add_argument("--client", type=str, required=True)
    add_pay_parser.add_argument("--notes", type=str)
    add_pay_parser.add_argument("--dry-run", action="store_true")

    log_parser = subparsers.add_parser("add-maintenance", help="Add a maintenance log")
    log_parser.add_argument(
        "--date", type=str, help="Service date in YYYY-MM-DD format (default: today)"
    )
    log_parser.add_argument("--truck", type=str, required=True, help="Truck id")
    log_parser.add_argument(
        "--service-type", choices=[s.value for s in ServiceType], required=True
    )
    log_parser.add_argument("--mileage", type=float, required=True)
    log_parser.add_argument("--cost", type=float, required=True)
    log_parser.add_argument("--description", type=str, required=True)
    log_parser.add_argument("--next-date", type=str, help="Next service date")
    log_parser.add_argument("--next-mileage", type=float, help="Next service mileage")
    log_parser.add_argument("--dry-run", action="store_true")

    delete_parser = subparsers.add_parser("delete", help="Delete a record by id")
    delete_parser.add_argument("kind", choices=[k.value for k in RecordKind])
    delete_parser.add_argument("record_id", type=str)

    # Export subcommands
    export_parser = subparsers.add_parser(
        "export", help="Export raw records as CSV or a printable report"
    )
    export_parser.add_argument(
        "--type", choices=[d.value for d in DataType], default=DataType.ALL.value
    )
    export_parser.add_argument(
        "--format", choices=[f.value for f in ExportFormat], default="csv"
    )
    export_parser.add_argument(
        "--start", type=str, help="Range start (default: January 1st this year)"
    )
    export_parser.add_argument("--end", type=str, help="Range end (default: today)")
    export_parser.add_argument("--output", type=Path, help="Write to this file")
    export_parser.add_argument(
        "--escape",
        action="store_true",
        help="Quote CSV fields containing commas, quotes or line breaks",
    )

    tax_parser = subparsers.add_parser("tax-report", help="Generate a tax report")
    tax_parser.add_argument(
        "--report-type",
        choices=[g.value for g in Granularity],
        default=Granularity.ANNUAL.value,
    )
    tax_parser.add_argument("--year", type=int, default=date.today().year)
    tax_parser.add_argument(
        "--format", choices=[f.value for f in ExportFormat], default="csv"
    )
    tax_parser.add_argument("--output", type=Path, help="Write to this file")
    tax_parser.add_argument(
        "--escape",
        action="store_true",
        help="Quote CSV fields containing commas, quotes or line breaks",
    )

    return parser


def main(argv: Optional[List[str]] = None):
    settings = Settings()
    setup_logging(settings.log_level)
    args = build_parser(settings).parse_args(argv)

    store = RecordStore(args.data_dir)
    try:
        return COMMANDS[args.command](args, store)
    except TruckLedgerError as e:
        logger.info("%s failed: %s", args.command, e)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
