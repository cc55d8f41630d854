"""
Core business logic for calculating bookable start times.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O). Every call
reads only its arguments, so callers simply recompute whenever the date,
service or professional selection changes.
"""

import logging
from datetime import date
from typing import List, Sequence, Set, Tuple

import pendulum

from .exceptions import MalformedScheduleError
from .models import (
    ANY_PROFESSIONAL,
    Professional,
    Service,
    format_time_of_day,
    weekday_index,
)

logger = logging.getLogger(__name__)

SLOT_INTERVAL_MINUTES = 30
DEFAULT_HORIZON_DAYS = 14


def select_professionals(
    professionals: Sequence[Professional],
    selection: str,
) -> List[Professional]:
    """
    Resolve a professional selection to the professionals it targets.

    ``"any"`` targets everybody; an id targets that professional only, and
    an unknown id targets nobody.
    """
    if selection == ANY_PROFESSIONAL:
        return list(professionals)
    return [pro for pro in professionals if pro.id == selection]


class AvailabilityEngine:
    """
    Computes open dates and bookable start times for a location.

    Algorithm for one date:
    1. Determine the weekday (0=Sunday)
    2. Resolve the professional selection
    3. For each professional open that weekday, walk the working window
       on the slot grid and keep starts that finish before closing and
       stay clear of lunch
    4. Merge all professionals' starts (deduplicated) and sort them

    Existing appointments are not considered: every start that fits the
    schedule is offered.
    """

    def __init__(self, slot_interval_minutes: int = SLOT_INTERVAL_MINUTES):
        if slot_interval_minutes <= 0:
            raise ValueError("slot_interval_minutes must be greater than zero")
        self.slot_interval_minutes = slot_interval_minutes

    def is_date_open(
        self,
        day: date,
        professionals: Sequence[Professional],
        selection: str = ANY_PROFESSIONAL,
    ) -> bool:
        """
        Check if at least one selected professional works on ``day``.

        A professional without a schedule entry for the weekday is closed.
        """
        day_of_week = weekday_index(day)
        return any(
            pro.works_on(day_of_week)
            for pro in select_professionals(professionals, selection)
        )

    def compute_available_slots(
        self,
        day: date,
        service: Service,
        professionals: Sequence[Professional],
        selection: str = ANY_PROFESSIONAL,
    ) -> List[str]:
        """
        Compute the bookable start times for a service on a date.

        Args:
            day: Calendar date of the appointment
            service: Service to book (only its duration matters)
            professionals: Professionals of the location
            selection: Professional id or ``"any"``

        Returns:
            Sorted, deduplicated "HH:MM" start times. Empty when nothing fits.
        """
        day_of_week = weekday_index(day)
        slots: Set[str] = set()

        for pro in select_professionals(professionals, selection):
            work_day = pro.work_day(day_of_week)
            if work_day is None or not work_day.is_open:
                continue

            try:
                window = work_day.window()
            except MalformedScheduleError as exc:
                # One broken entry must not hide the other professionals
                logger.warning(
                    "Skipping schedule of %s (%s) on weekday %d: %s",
                    pro.name, pro.id, day_of_week, exc,
                )
                continue

            for start in range(window.start, window.end, self.slot_interval_minutes):
                if window.accepts(start, service.duration_min):
                    slots.add(format_time_of_day(start))

        return sorted(slots)

    def next_available_date(
        self,
        from_date: date,
        horizon_days: int,
        professionals: Sequence[Professional],
        selection: str = ANY_PROFESSIONAL,
    ) -> pendulum.Date | None:
        """
        Find the first open date among ``horizon_days`` dates from ``from_date``.

        Returns None if no date within the horizon is open.
        """
        for day, is_open in self.open_dates(
            from_date, horizon_days, professionals, selection
        ):
            if is_open:
                return day
        return None

    def open_dates(
        self,
        from_date: date,
        horizon_days: int,
        professionals: Sequence[Professional],
        selection: str = ANY_PROFESSIONAL,
    ) -> List[Tuple[pendulum.Date, bool]]:
        """
        List every date of the horizon with its open/closed flag.

        Useful for date pickers that grey out closed days.
        """
        start = pendulum.date(from_date.year, from_date.month, from_date.day)
        return [
            (day, self.is_date_open(day, professionals, selection))
            for day in (start.add(days=offset) for offset in range(horizon_days))
        ]
