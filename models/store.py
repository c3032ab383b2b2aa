"""YAML-backed record store, one file per owner."""

import logging
import secrets
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from .categories import ExpenseCategory, RecordKind, ServiceType
from .errors import UnauthenticatedError, UpstreamStoreError, ValidationError
from .expense import Expense
from .maintenance_log import MaintenanceLog
from .pay_entry import PayEntry
from .truck import Truck
from .validation import validate_record

logger = logging.getLogger(__name__)

Record = Union[Truck, Expense, PayEntry, MaintenanceLog]

ID_ALPHABET = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
ID_LENGTH = 20


def generate_id() -> str:
    """Generate a 20 character url-safe record id."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


# =============================================================================
# Record <-> dict conversion (camelCase keys, optional fields omitted)
# =============================================================================


def _truck_to_dict(truck: Truck) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "name": truck.name,
        "identifier": truck.identifier,
        "make": truck.make,
        "model": truck.model,
        "year": truck.year,
    }
    if truck.vin:
        d["vin"] = truck.vin
    if truck.license_plate:
        d["licensePlate"] = truck.license_plate
    if truck.notes:
        d["notes"] = truck.notes
    return d


def _expense_to_dict(expense: Expense) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "date": expense.date,
        "category": expense.category.value,
        "amount": expense.amount,
        "description": expense.description,
    }
    if expense.truck_id:
        d["truckId"] = expense.truck_id
    return d


def _pay_entry_to_dict(pay: PayEntry) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "startDate": pay.start_date,
        "endDate": pay.end_date,
        "amount": pay.amount,
        "client": pay.client,
    }
    if pay.notes:
        d["notes"] = pay.notes
    return d


def _maintenance_log_to_dict(log: MaintenanceLog) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "date": log.date,
        "truckId": log.truck_id,
        "serviceType": log.service_type.value,
        "mileage": log.mileage,
        "cost": log.cost,
        "description": log.description,
    }
    if log.next_service_date is not None:
        d["nextServiceDate"] = log.next_service_date
    if log.next_service_mileage is not None:
        d["nextServiceMileage"] = log.next_service_mileage
    return d


def _truck_from_dict(record_id: Optional[str], d: Dict[str, Any]) -> Truck:
    return Truck(
        d["name"],
        d["identifier"],
        d["make"],
        d["model"],
        d["year"],
        d.get("vin"),
        d.get("licensePlate"),
        d.get("notes"),
        id=record_id,
    )


def _expense_from_dict(record_id: Optional[str], d: Dict[str, Any]) -> Expense:
    return Expense(
        d["date"],
        ExpenseCategory(d["category"]),
        d["amount"],
        d["description"],
        d.get("truckId"),
        id=record_id,
    )


def _pay_entry_from_dict(record_id: Optional[str], d: Dict[str, Any]) -> PayEntry:
    return PayEntry(
        d["startDate"],
        d["endDate"],
        d["amount"],
        d["client"],
        d.get("notes"),
        id=record_id,
    )


def _maintenance_log_from_dict(
    record_id: Optional[str], d: Dict[str, Any]
) -> MaintenanceLog:
    return MaintenanceLog(
        d["date"],
        d["truckId"],
        ServiceType(d["serviceType"]),
        d["mileage"],
        d["cost"],
        d["description"],
        d.get("nextServiceDate"),
        d.get("nextServiceMileage"),
        id=record_id,
    )


_TO_DICT: Dict[RecordKind, Callable[[Any], Dict[str, Any]]] = {
    RecordKind.TRUCK: _truck_to_dict,
    RecordKind.EXPENSE: _expense_to_dict,
    RecordKind.PAY_ENTRY: _pay_entry_to_dict,
    RecordKind.MAINTENANCE_LOG: _maintenance_log_to_dict,
}

_FROM_DICT: Dict[RecordKind, Callable[[Optional[str], Dict[str, Any]], Any]] = {
    RecordKind.TRUCK: _truck_from_dict,
    RecordKind.EXPENSE: _expense_from_dict,
    RecordKind.PAY_ENTRY: _pay_entry_from_dict,
    RecordKind.MAINTENANCE_LOG: _maintenance_log_from_dict,
}


def record_to_dict(kind: RecordKind, record: Record) -> Dict[str, Any]:
    """Serialize a record body to the stored dict format (id excluded)."""
    return _TO_DICT[kind](record)


def record_from_dict(
    kind: RecordKind, data: Dict[str, Any], record_id: Optional[str] = None
) -> Record:
    """Build a record of the given kind from its stored dict format."""
    return _FROM_DICT[kind](record_id, data)


# =============================================================================
# Store
# =============================================================================


class RecordStore:
    """
    Keyed record store scoped by owner.

    Each owner's records live in ``<data_dir>/<owner>.yaml`` under the
    collections ``trucks``, ``expenses``, ``pay`` and ``maintenance``, each
    mapping a generated id to the record body. Every mutation is a single
    whole-file write; there is no multi-record transaction.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def owner_path(self, owner: Optional[str]) -> Path:
        """Path of the owner's data file."""
        if not owner:
            raise UnauthenticatedError()
        if "/" in owner or "\\" in owner or owner.startswith("."):
            raise UnauthenticatedError(f"Invalid owner id '{owner}'")
        return self.data_dir / f"{owner}.yaml"

    def _load(self, owner: Optional[str]) -> Dict[str, Any]:
        path = self.owner_path(owner)
        if not path.exists():
            return {}
        try:
            with open(path, "r") as fp:
                data = yaml.load(fp, Loader=yaml.SafeLoader)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to read %s: %s", path, e)
            raise UpstreamStoreError(str(e)) from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise UpstreamStoreError(f"{path.name} does not contain a mapping")
        return data

    def _save(self, owner: Optional[str], data: Dict[str, Any]) -> None:
        path = self.owner_path(owner)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as fp:
                yaml.dump(
                    data,
                    fp,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                    width=120,
                )
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            raise UpstreamStoreError(str(e)) from e

    # -------------------------------------------------------------------------
    # Generic operations
    # -------------------------------------------------------------------------

    def _collection(self, data: Dict[str, Any], kind: RecordKind) -> Dict[str, Any]:
        collection = data.get(kind.value)
        if collection is None:
            collection = data[kind.value] = {}
        if not isinstance(collection, dict):
            raise UpstreamStoreError(f"{kind.value} must be a mapping of id to record")
        return collection

    def _loaded_record(self, kind: RecordKind, record_id: str, body: Any) -> Record:
        """Build a record from a file body, which may have been edited by hand."""
        if not isinstance(body, dict):
            raise UpstreamStoreError(f"{kind.value}.{record_id}: record must be a mapping")
        try:
            validate_record(kind, body)
        except ValidationError as e:
            logger.error("Invalid %s record %s: %s", kind.value, record_id, e)
            raise UpstreamStoreError(f"{kind.value}.{record_id}: {e}") from e
        return record_from_dict(kind, body, record_id)

    def fetch(self, owner: Optional[str], kind: RecordKind) -> List[Record]:
        """Return all records of a kind, in file order."""
        collection = self._collection(self._load(owner), kind)
        return [
            self._loaded_record(kind, record_id, body)
            for record_id, body in collection.items()
        ]

    def get(self, owner: Optional[str], kind: RecordKind, record_id: str) -> Record:
        """Return one record by id."""
        collection = self._collection(self._load(owner), kind)
        if record_id not in collection:
            raise UpstreamStoreError(f"No {kind.value} record with id '{record_id}'")
        return self._loaded_record(kind, record_id, collection[record_id])

    def add(self, owner: Optional[str], kind: RecordKind, record: Record) -> Record:
        """Validate and store a new record. Returns it with its new id."""
        body = record_to_dict(kind, record)
        validate_record(kind, body)

        data = self._load(owner)
        collection = self._collection(data, kind)
        record_id = generate_id()
        while record_id in collection:
            record_id = generate_id()
        collection[record_id] = body
        self._save(owner, data)

        logger.info("Added %s record %s for %s", kind.value, record_id, owner)
        return record_from_dict(kind, body, record_id)

    def update(
        self, owner: Optional[str], kind: RecordKind, record_id: str, record: Record
    ) -> Record:
        """Replace the body of an existing record. The id never changes."""
        body = record_to_dict(kind, record)
        validate_record(kind, body)

        data = self._load(owner)
        collection = self._collection(data, kind)
        if record_id not in collection:
            raise UpstreamStoreError(f"No {kind.value} record with id '{record_id}'")
        collection[record_id] = body
        self._save(owner, data)

        logger.info("Updated %s record %s for %s", kind.value, record_id, owner)
        return record_from_dict(kind, body, record_id)

    def delete(self, owner: Optional[str], kind: RecordKind, record_id: str) -> str:
        """Remove a record. Returns the removed id."""
        data = self._load(owner)
        collection = self._collection(data, kind)
        if record_id not in collection:
            raise UpstreamStoreError(f"No {kind.value} record with id '{record_id}'")
        del collection[record_id]
        self._save(owner, data)

        logger.info("Deleted %s record %s for %s", kind.value, record_id, owner)
        return record_id

    # -------------------------------------------------------------------------
    # Per-kind operations
    # -------------------------------------------------------------------------

    def fetch_trucks(self, owner: Optional[str]) -> List[Truck]:
        return self.fetch(owner, RecordKind.TRUCK)

    def fetch_expenses(self, owner: Optional[str]) -> List[Expense]:
        return self.fetch(owner, RecordKind.EXPENSE)

    def fetch_pay_entries(self, owner: Optional[str]) -> List[PayEntry]:
        return self.fetch(owner, RecordKind.PAY_ENTRY)

    def fetch_maintenance_logs(self, owner: Optional[str]) -> List[MaintenanceLog]:
        return self.fetch(owner, RecordKind.MAINTENANCE_LOG)

    def add_truck(self, owner: Optional[str], truck: Truck) -> Truck:
        return self.add(owner, RecordKind.TRUCK, truck)

    def add_expense(self, owner: Optional[str], expense: Expense) -> Expense:
        return self.add(owner, RecordKind.EXPENSE, expense)

    def add_pay_entry(self, owner: Optional[str], pay: PayEntry) -> PayEntry:
        return self.add(owner, RecordKind.PAY_ENTRY, pay)

    def add_maintenance_log(
        self, owner: Optional[str], log: MaintenanceLog
    ) -> MaintenanceLog:
        return self.add(owner, RecordKind.MAINTENANCE_LOG, log)

    def update_truck(self, owner: Optional[str], truck_id: str, truck: Truck) -> Truck:
        return self.update(owner, RecordKind.TRUCK, truck_id, truck)

    def update_expense(
        self, owner: Optional[str], expense_id: str, expense: Expense
    ) -> Expense:
        return self.update(owner, RecordKind.EXPENSE, expense_id, expense)

    def update_pay_entry(
        self, owner: Optional[str], pay_id: str, pay: PayEntry
    ) -> PayEntry:
        return self.update(owner, RecordKind.PAY_ENTRY, pay_id, pay)

    def update_maintenance_log(
        self, owner: Optional[str], log_id: str, log: MaintenanceLog
    ) -> MaintenanceLog:
        return self.update(owner, RecordKind.MAINTENANCE_LOG, log_id, log)

    def delete_truck(self, owner: Optional[str], truck_id: str) -> str:
        return self.delete(owner, RecordKind.TRUCK, truck_id)

    def delete_expense(self, owner: Optional[str], expense_id: str) -> str:
        return self.delete(owner, RecordKind.EXPENSE, expense_id)

    def delete_pay_entry(self, owner: Optional[str], pay_id: str) -> str:
        return self.delete(owner, RecordKind.PAY_ENTRY, pay_id)

    def delete_maintenance_log(self, owner: Optional[str], log_id: str) -> str:
        return self.delete(owner, RecordKind.MAINTENANCE_LOG, log_id)

    def trucks_map(self, owner: Optional[str]) -> Dict[str, str]:
        """Read-only projection of truck id -> truck name, for display."""
        return {truck.id: truck.name for truck in self.fetch_trucks(owner)}
