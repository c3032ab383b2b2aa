"""MaintenanceLog class for truck service records."""
from typing import Optional

from .categories import ServiceType


class MaintenanceLog:
    """A record of maintenance performed on a truck."""

    def __init__(
            self,
            date: str,
            truck_id: str,
            service_type: ServiceType,
            mileage: float,
            cost: float,
            description: str,
            next_service_date: Optional[str] = None,
            next_service_mileage: Optional[float] = None,
            id: Optional[str] = None,
    ):
        self.id = id
        self.date = date
        self.truck_id = truck_id
        self.service_type = service_type
        self.mileage = mileage
        self.cost = cost
        self.description = description
        self.next_service_date = next_service_date
        self.next_service_mileage = next_service_mileage
