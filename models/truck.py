"""Truck class for fleet identification."""

from typing import Optional


class Truck:
    """A truck owned by the operator."""

    def __init__(
        self,
        name: str,
        identifier: str,
        make: str,
        model: str,
        year: int,
        vin: Optional[str] = None,
        license_plate: Optional[str] = None,
        notes: Optional[str] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.identifier = identifier
        self.make = make
        self.model = model
        self.year = year
        self.vin = vin
        self.license_plate = license_plate
        self.notes = notes

    @property
    def display_name(self) -> str:
        """Human-readable truck name."""
        return f"{self.name} ({self.year} {self.make} {self.model})"
