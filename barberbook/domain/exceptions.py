"""
Domain-specific exception hierarchy for the barberbook application.
"""


class BarberbookError(Exception):
    """Base class for all application-level errors."""


class MalformedScheduleError(BarberbookError):
    """Raised when a work day entry cannot be turned into working minutes."""


class CatalogError(BarberbookError):
    """Raised when catalog data cannot be loaded, parsed or looked up."""


class BookingFlowError(BarberbookError):
    """Raised when the booking flow is asked for an invalid transition."""
