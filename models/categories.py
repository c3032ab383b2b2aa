"""Closed vocabularies for expense categories, service types and record kinds."""

from enum import Enum


class ExpenseCategory(Enum):
    FUEL = "Fuel"
    MAINTENANCE = "Maintenance"
    INSURANCE = "Insurance"
    TOLLS = "Tolls"
    PARKING = "Parking"
    FOOD = "Food"
    LODGING = "Lodging"
    OFFICE = "Office"
    OTHER = "Other"


class ServiceType(Enum):
    OIL_CHANGE = "Oil Change"
    TIRE_REPLACEMENT = "Tire Replacement"
    BRAKE_SERVICE = "Brake Service"
    ENGINE_REPAIR = "Engine Repair"
    TRANSMISSION = "Transmission"
    ELECTRICAL = "Electrical"
    INSPECTION = "Inspection"
    OTHER = "Other"


class RecordKind(Enum):
    """Record kinds kept per owner. Value is the store collection name."""

    TRUCK = "trucks"
    EXPENSE = "expenses"
    PAY_ENTRY = "pay"
    MAINTENANCE_LOG = "maintenance"

    @classmethod
    def from_name(cls, name: str) -> "RecordKind":
        """Look up a kind by collection name (e.g. 'pay')."""
        for kind in cls:
            if kind.value == name.lower():
                return kind
        raise ValueError(f"Unknown record kind '{name}'")
