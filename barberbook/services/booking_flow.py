"""
Booking-flow controller for one location.

The controller owns the client's selections (service, date, professional,
time) and the current step. Availability is never cached: every query goes
through the ``AvailabilityEngine`` with the current selections, so a change
to any of them is reflected on the next call. The only cross-call rule is
the professional-change guard, which the controller runs explicitly right
after mutating the selection.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

import pendulum

from ..domain.availability import DEFAULT_HORIZON_DAYS, AvailabilityEngine
from ..domain.cart import CartItem
from ..domain.exceptions import BookingFlowError
from ..domain.models import ANY_PROFESSIONAL, Location, Professional, Service

logger = logging.getLogger(__name__)


class BookingStep(str, Enum):
    """Steps of the booking flow."""
    LIST = "list"          # browsing the location, no service chosen
    DATETIME = "datetime"  # choosing date, professional and time
    CONFIRM = "confirm"    # reviewing the booking


class BookingFlow:
    """
    Drives ``LIST -> DATETIME -> CONFIRM`` for one location.

    Backward transitions peel one step at a time. ``today`` is the first
    bookable day and the start of the next-available-date scan.
    """

    def __init__(
        self,
        location: Location,
        engine: AvailabilityEngine | None = None,
        *,
        today: date | None = None,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
    ) -> None:
        self._location = location
        self._engine = engine or AvailabilityEngine()
        self._today = today or pendulum.today().date()
        self._horizon_days = horizon_days

        self.step = BookingStep.LIST
        self.service: Optional[Service] = None
        self.selected_date: date = self._today
        self.selection: str = ANY_PROFESSIONAL
        self.selected_time: Optional[str] = None
        self.silent_mode = False
        self.notes = ""

    @property
    def location(self) -> Location:
        return self._location

    @property
    def professionals(self) -> List[Professional]:
        return list(self._location.professionals)

    # --- Queries -----------------------------------------------------------

    def is_date_open(self, day: date) -> bool:
        """Check if ``day`` is open for the current professional selection."""
        return self._engine.is_date_open(day, self.professionals, self.selection)

    def available_slots(self) -> List[str]:
        """Bookable times for the current service, date and selection."""
        if self.service is None:
            return []
        return self._engine.compute_available_slots(
            self.selected_date,
            self.service,
            self.professionals,
            self.selection,
        )

    def bookable_dates(self) -> List[Tuple[pendulum.Date, bool]]:
        """Dates of the booking horizon with their open/closed flag."""
        return self._engine.open_dates(
            self._today, self._horizon_days, self.professionals, self.selection
        )

    def selected_professional(self) -> Professional | None:
        """The chosen professional, None for no preference or an unknown id."""
        if self.selection == ANY_PROFESSIONAL:
            return None
        return self._location.find_professional(self.selection)

    # --- Transitions -------------------------------------------------------

    def start_booking(self, service: Service) -> None:
        """Choose a service and move to date/time selection."""
        if self.step is not BookingStep.LIST:
            raise BookingFlowError(f"Cannot start a booking from step '{self.step.value}'")
        if self._location.find_service(service.id) is None:
            raise BookingFlowError(
                f"Service '{service.id}' is not offered at {self._location.name}"
            )

        self.service = service
        self.step = BookingStep.DATETIME
        self.selected_time = None
        self.silent_mode = False
        self.notes = ""
        logger.debug("Booking started for service %s", service.id)

        self._ensure_selected_date_open()

    def select_date(self, day: date) -> None:
        """Choose the appointment date; closed dates are rejected."""
        self._require_step(BookingStep.DATETIME, "select a date")
        if not self.is_date_open(day):
            raise BookingFlowError(f"{day.isoformat()} is closed for the current selection")

        self.selected_date = day
        self.selected_time = None

    def select_professional(self, selection: str) -> None:
        """
        Choose a professional id or ``"any"``.

        Clears the chosen time, then re-validates the chosen date.
        """
        self.selection = selection
        self.selected_time = None
        logger.debug("Professional selection changed to %s", selection)

        self._ensure_selected_date_open()

    def select_time(self, time: str) -> None:
        """Choose one of the currently available start times."""
        self._require_step(BookingStep.DATETIME, "select a time")
        if time not in self.available_slots():
            raise BookingFlowError(
                f"{time} is not available on {self.selected_date.isoformat()}"
            )
        self.selected_time = time

    def proceed_to_confirmation(self) -> None:
        """Move to the confirmation step once a time is chosen."""
        self._require_step(BookingStep.DATETIME, "continue")
        if self.selected_time is None:
            raise BookingFlowError("Choose a time before continuing")
        self.step = BookingStep.CONFIRM

    def set_preferences(self, *, silent_mode: bool | None = None, notes: str | None = None) -> None:
        """Update the optional appointment preferences."""
        if silent_mode is not None:
            self.silent_mode = silent_mode
        if notes is not None:
            self.notes = notes

    def back(self) -> bool:
        """
        Go back one step.

        Returns:
            False when already at the first step (the caller leaves the
            location), True otherwise
        """
        if self.step is BookingStep.CONFIRM:
            self.step = BookingStep.DATETIME
            return True

        if self.step is BookingStep.DATETIME:
            self.step = BookingStep.LIST
            self.service = None
            self.selected_time = None
            return True

        return False

    def build_cart_item(self) -> CartItem:
        """Assemble the cart item for the current selections."""
        if self.service is None or self.selected_time is None:
            raise BookingFlowError("A service and a time are required to build a cart item")

        return CartItem(
            service=self.service,
            professional=self.selected_professional(),
            date=self.selected_date,
            time=self.selected_time,
            location_name=self._location.name,
            price=self.service.price,
        )

    # --- Internals ---------------------------------------------------------

    def _ensure_selected_date_open(self) -> None:
        """
        Move to the next open date when the chosen one closed.

        Only applies while choosing date and time. The date is kept when
        nothing opens within the horizon.
        """
        if self.step is not BookingStep.DATETIME or self.is_date_open(self.selected_date):
            return

        next_date = self._engine.next_available_date(
            self._today, self._horizon_days, self.professionals, self.selection
        )
        if next_date is None:
            logger.info(
                "No open date within %d days for selection %s",
                self._horizon_days, self.selection,
            )
            return

        logger.debug("Selected date moved from %s to %s", self.selected_date, next_date)
        self.selected_date = next_date
        self.selected_time = None

    def _require_step(self, step: BookingStep, action: str) -> None:
        if self.step is not step:
            raise BookingFlowError(f"Cannot {action} during step '{self.step.value}'")
