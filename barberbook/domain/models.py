"""
Domain models for the barbershop catalog and working schedules.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from .exceptions import MalformedScheduleError

# Sentinel selection meaning "no preference": every professional of the location.
ANY_PROFESSIONAL = "any"

WEEKDAY_NAMES = (
    "Domingo",
    "Segunda",
    "Terça",
    "Quarta",
    "Quinta",
    "Sexta",
    "Sábado",
)

_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def weekday_index(day: date) -> int:
    """Return the weekday index of a date, 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def parse_time_of_day(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    A trailing ":SS" component is tolerated and ignored.

    Raises:
        MalformedScheduleError: If the value is not a valid time of day
    """
    match = _TIME_OF_DAY.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise MalformedScheduleError(f"Invalid time of day: {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise MalformedScheduleError(f"Time of day out of range: {value!r}")

    return hours * 60 + minutes


def format_time_of_day(minutes: int) -> str:
    """Format minutes since midnight as a zero-padded "HH:MM" string."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class WorkWindow:
    """
    Working minutes of one open day, expressed as minutes since midnight.

    Invariant: start < end, and start <= lunch_start <= lunch_end <= end
    when a lunch break is set.
    """
    start: int
    end: int
    lunch_start: Optional[int] = None
    lunch_end: Optional[int] = None

    def __post_init__(self):
        if self.end <= self.start:
            raise MalformedScheduleError(
                f"Closing time {format_time_of_day(self.end)} must be after "
                f"opening time {format_time_of_day(self.start)}"
            )
        if self.has_lunch() and not (
            self.start <= self.lunch_start <= self.lunch_end <= self.end
        ):
            raise MalformedScheduleError(
                f"Lunch break {format_time_of_day(self.lunch_start)}-"
                f"{format_time_of_day(self.lunch_end)} must lie within "
                f"{format_time_of_day(self.start)}-{format_time_of_day(self.end)}"
            )

    def has_lunch(self) -> bool:
        """Check if a lunch break applies to this window."""
        return self.lunch_start is not None and self.lunch_end is not None

    def overlaps_lunch(self, start: int, end: int) -> bool:
        """
        Check if the appointment [start, end) collides with the lunch break.

        An appointment collides when it starts within lunch, ends within
        lunch (an end exactly at lunch_end still counts) or spans the whole
        break. Ending exactly when lunch starts is fine.
        """
        if not self.has_lunch():
            return False

        starts_in_lunch = self.lunch_start <= start < self.lunch_end
        ends_in_lunch = self.lunch_start < end <= self.lunch_end
        spans_lunch = start < self.lunch_start and end > self.lunch_end

        return starts_in_lunch or ends_in_lunch or spans_lunch

    def accepts(self, start: int, duration_minutes: int) -> bool:
        """Check if an appointment starting at ``start`` can be booked."""
        end = start + duration_minutes
        if end > self.end:
            return False
        return not self.overlaps_lunch(start, end)


@dataclass(frozen=True)
class WorkDay:
    """
    One weekday's rule for one professional.

    Times are "HH:MM" strings; a missing WorkDay for a weekday means closed.
    """
    day_of_week: int  # 0=Sunday, 6=Saturday
    is_open: bool
    start: Optional[str] = "09:00"
    end: Optional[str] = "18:00"
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None

    def window(self) -> WorkWindow | None:
        """
        Get the working window of this day in minutes.

        Returns None for a closed day. The lunch break is only applied
        when both lunch fields are set.

        Raises:
            MalformedScheduleError: If an open day has missing or
                inconsistent times
        """
        if not self.is_open:
            return None

        if not self.start or not self.end:
            raise MalformedScheduleError(
                f"Open day {self.day_of_week} is missing its start or end time"
            )

        lunch_start = lunch_end = None
        if self.lunch_start and self.lunch_end:
            lunch_start = parse_time_of_day(self.lunch_start)
            lunch_end = parse_time_of_day(self.lunch_end)

        return WorkWindow(
            start=parse_time_of_day(self.start),
            end=parse_time_of_day(self.end),
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        )

    def describe(self) -> str:
        """Human readable summary, e.g. "Segunda 09:00-18:00 (almoço 12:00-13:00)"."""
        name = WEEKDAY_NAMES[self.day_of_week % 7]
        if not self.is_open:
            return f"{name}: fechado"

        text = f"{name} {self.start}-{self.end}"
        if self.lunch_start and self.lunch_end:
            text += f" (almoço {self.lunch_start}-{self.lunch_end})"
        return text


@dataclass(frozen=True)
class Service:
    """Immutable catalog entry for a bookable service."""
    id: str
    name: str
    price: Decimal
    duration_min: int
    description: str = ""


@dataclass(frozen=True)
class Professional:
    """A professional working at one location, with a weekly schedule."""
    id: str
    location_id: str
    name: str
    role: str = ""
    photo_url: str = ""
    schedule: Tuple[WorkDay, ...] = ()

    def work_day(self, day_of_week: int) -> WorkDay | None:
        """Get the schedule entry for a weekday, None when there is none."""
        for work_day in self.schedule:
            if work_day.day_of_week == day_of_week:
                return work_day
        return None

    def works_on(self, day_of_week: int) -> bool:
        """Check if this professional is open on a weekday."""
        work_day = self.work_day(day_of_week)
        return work_day is not None and work_day.is_open

    def open_days_count(self) -> int:
        """Number of open weekdays in the schedule."""
        return sum(1 for day in range(7) if self.works_on(day))


@dataclass(frozen=True)
class Subscription:
    """A subscription plan sold by a location."""
    id: str
    name: str
    price: Decimal
    benefits: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Review:
    """A client review of a location."""
    id: str
    author: str
    rating: int  # 1-5
    comment: str = ""
    date: str = ""


@dataclass(frozen=True)
class Location:
    """A physical barbershop site and everything it offers."""
    id: str
    name: str
    address: str = ""
    rating: float = 0.0
    image_url: str = ""
    coordinates: Tuple[float, float] = (0.0, 0.0)
    description: str = ""
    phone: str = ""
    opening_hours: str = ""
    services: Tuple[Service, ...] = field(default_factory=tuple)
    professionals: Tuple[Professional, ...] = field(default_factory=tuple)
    subscriptions: Tuple[Subscription, ...] = field(default_factory=tuple)
    reviews: Tuple[Review, ...] = field(default_factory=tuple)

    def find_service(self, service_id: str) -> Service | None:
        """Find a service by its id."""
        for service in self.services:
            if service.id == service_id:
                return service
        return None

    def find_professional(self, professional_id: str) -> Professional | None:
        """Find a professional by their id."""
        for professional in self.professionals:
            if professional.id == professional_id:
                return professional
        return None
