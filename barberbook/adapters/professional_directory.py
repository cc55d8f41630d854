"""
In-memory directory of professionals and their weekly schedules.
"""

import logging
import uuid
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..domain.exceptions import CatalogError
from ..domain.models import Location, Professional, WorkDay
from .catalog_store import CatalogStore

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "Barbeiro"
DEFAULT_PHOTO_URL = "https://picsum.photos/200"

_WORK_DAY_FIELDS = {"is_open", "start", "end", "lunch_start", "lunch_end"}


def default_schedule() -> Tuple[WorkDay, ...]:
    """Monday to Saturday 09:00-18:00 with lunch 12:00-13:00, Sunday closed."""
    return tuple(
        WorkDay(
            day_of_week=day,
            is_open=day != 0,
            start="09:00",
            end="18:00",
            lunch_start="12:00",
            lunch_end="13:00",
        )
        for day in range(7)
    )


def _clean_schedule(schedule: Optional[Iterable[Optional[WorkDay]]]) -> Tuple[WorkDay, ...]:
    if not schedule:
        return ()
    return tuple(day for day in schedule if day is not None)


class ProfessionalDirectory:
    """
    Creates and edits professionals on top of a loaded catalog.

    The catalog itself stays untouched; ``location_with_staff`` returns a
    copy of a location carrying the directory's current professionals.
    """

    def __init__(self, store: CatalogStore, default_role: str = DEFAULT_ROLE):
        self._store = store
        self._default_role = default_role
        self._professionals: Dict[str, Professional] = {
            pro.id: pro
            for location in store.locations()
            for pro in location.professionals
        }

    def get(self, professional_id: str) -> Professional:
        """
        Get a professional by id.

        Raises:
            CatalogError: If the professional is unknown
        """
        try:
            return self._professionals[professional_id]
        except KeyError:
            raise CatalogError(f"Unknown professional: '{professional_id}'") from None

    def for_location(self, location_id: str) -> List[Professional]:
        """All professionals currently assigned to a location."""
        return [
            pro for pro in self._professionals.values()
            if pro.location_id == location_id
        ]

    def location_with_staff(self, location_id: str) -> Location:
        """The catalog location with the directory's professionals."""
        location = self._store.get_location(location_id)
        return replace(location, professionals=tuple(self.for_location(location_id)))

    def create(
        self,
        location_id: str,
        name: str,
        role: str | None = None,
        photo_url: str = DEFAULT_PHOTO_URL,
        schedule: Optional[Iterable[Optional[WorkDay]]] = None,
    ) -> Professional:
        """
        Register a new professional at a location.

        Without a schedule the default week (Monday to Saturday) is used.
        """
        self._store.get_location(location_id)

        professional = Professional(
            id=uuid.uuid4().hex,
            location_id=location_id,
            name=name,
            role=role or self._default_role,
            photo_url=photo_url,
            schedule=_clean_schedule(schedule) if schedule is not None else default_schedule(),
        )
        self._professionals[professional.id] = professional
        logger.info("Created professional %s (%s) at %s", name, professional.id, location_id)
        return professional

    def update(self, professional: Professional) -> Professional:
        """
        Replace a professional's identity and schedule.

        Changing ``location_id`` moves the professional to that location.
        """
        current = self.get(professional.id)
        if professional.location_id != current.location_id:
            self._store.get_location(professional.location_id)
            logger.info(
                "Moving professional %s from %s to %s",
                professional.id, current.location_id, professional.location_id,
            )

        updated = replace(professional, schedule=_clean_schedule(professional.schedule))
        self._professionals[updated.id] = updated
        return updated

    def update_work_day(self, professional_id: str, day_of_week: int, **fields: Any) -> Professional:
        """
        Patch one weekday of a professional's schedule.

        A missing weekday is created closed, 09:00-18:00 with lunch
        12:00-13:00, before the patch is applied.
        """
        unknown = set(fields) - _WORK_DAY_FIELDS
        if unknown:
            raise CatalogError(f"Unknown work day field(s): {', '.join(sorted(unknown))}")
        if day_of_week not in range(7):
            raise CatalogError(f"day_of_week must be between 0 and 6, got {day_of_week}")

        professional = self.get(professional_id)
        schedule = list(professional.schedule)

        for index, work_day in enumerate(schedule):
            if work_day.day_of_week == day_of_week:
                schedule[index] = replace(work_day, **fields)
                break
        else:
            new_day = WorkDay(
                day_of_week=day_of_week,
                is_open=False,
                start="09:00",
                end="18:00",
                lunch_start="12:00",
                lunch_end="13:00",
            )
            schedule.append(replace(new_day, **fields))

        return self.update(replace(professional, schedule=tuple(schedule)))
