"""
Trucking business record models.

This package provides the records an operator keeps and the store holding them:
- Truck, Expense, PayEntry, MaintenanceLog: the record kinds
- ExpenseCategory, ServiceType, RecordKind: closed vocabularies
- Status: next-service urgency levels
- RecordStore: YAML-backed per-owner record store
- Error types shared by the store and the report code
"""

from .status import Status
from .categories import ExpenseCategory, ServiceType, RecordKind
from .errors import (
    TruckLedgerError,
    ValidationError,
    UnauthenticatedError,
    EnvironmentBlockedError,
    UpstreamStoreError,
)
from .truck import Truck
from .expense import Expense
from .pay_entry import PayEntry
from .maintenance_log import MaintenanceLog
from .dates import parse_iso_date, year_bounds
from .calculations import check_status, current_truck_miles, service_status
from .validation import validate_record, validate_owner_data
from .store import RecordStore, record_from_dict, record_to_dict

__all__ = [
    "Status",
    "ExpenseCategory",
    "ServiceType",
    "RecordKind",
    "TruckLedgerError",
    "ValidationError",
    "UnauthenticatedError",
    "EnvironmentBlockedError",
    "UpstreamStoreError",
    "Truck",
    "Expense",
    "PayEntry",
    "MaintenanceLog",
    "parse_iso_date",
    "year_bounds",
    "check_status",
    "current_truck_miles",
    "service_status",
    "validate_record",
    "validate_owner_data",
    "RecordStore",
    "record_from_dict",
    "record_to_dict",
]
