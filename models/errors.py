"""Error types raised by the record store and export code."""

from typing import Optional


class TruckLedgerError(Exception):
    """Base class for all handled errors."""


class ValidationError(TruckLedgerError):
    """A record or request field is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnauthenticatedError(TruckLedgerError):
    """A store operation was attempted without an owner."""

    def __init__(self, message: str = "You must be signed in to do that"):
        super().__init__(message)


class EnvironmentBlockedError(TruckLedgerError):
    """The print surface could not be opened."""

    def __init__(self, message: str = "Please allow pop-ups to generate PDF reports"):
        super().__init__(message)


class UpstreamStoreError(TruckLedgerError):
    """Reading or writing the record store failed."""
