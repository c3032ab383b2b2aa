"""Helper functions for next-service calculations."""

from datetime import date
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from .dates import parse_iso_date
from .maintenance_log import MaintenanceLog
from .status import Status


def check_status(current: float, due: float, soon_threshold: float) -> Status:
    """Determine status by comparing current value to due threshold."""
    if current >= due:
        return Status.OVERDUE
    if current >= due - soon_threshold:
        return Status.DUE_SOON
    return Status.OK


def current_truck_miles(
    logs: Iterable[MaintenanceLog], truck_id: str
) -> Optional[float]:
    """Highest mileage logged for a truck, or None when it has no logs."""
    miles = [log.mileage for log in logs if log.truck_id == truck_id]
    return max(miles) if miles else None


def service_status(
    log: MaintenanceLog,
    as_of: date,
    current_miles: Optional[float] = None,
    due_soon_months: int = 1,
    due_soon_miles: float = 1000,
) -> Status:
    """
    Status of the next service recorded on a maintenance log.

    Checks next_service_date against as_of and next_service_mileage against
    current_miles; the more urgent of the two wins. UNKNOWN when the log
    records neither.
    """
    statuses = []
    if log.next_service_date is not None:
        due_date = parse_iso_date(log.next_service_date, "nextServiceDate")
        soon_date = due_date - relativedelta(months=due_soon_months)
        statuses.append(
            check_status(
                as_of.toordinal(),
                due_date.toordinal(),
                due_date.toordinal() - soon_date.toordinal(),
            )
        )
    if log.next_service_mileage is not None and current_miles is not None:
        statuses.append(
            check_status(current_miles, log.next_service_mileage, due_soon_miles)
        )

    if not statuses:
        return Status.UNKNOWN
    return min(statuses, key=lambda s: s.value)
