"""
Tests for domain models.
"""

from datetime import date

import pendulum
import pytest

from barberbook.domain.exceptions import MalformedScheduleError
from barberbook.domain.models import (
    Location,
    Professional,
    WorkDay,
    WorkWindow,
    format_time_of_day,
    parse_time_of_day,
    weekday_index,
)


class TestTimeOfDay:
    """Tests for "HH:MM" conversion helpers."""

    def test_parse(self):
        assert parse_time_of_day("00:00") == 0
        assert parse_time_of_day("09:30") == 570
        assert parse_time_of_day("9:05") == 545
        assert parse_time_of_day("23:59") == 1439

    def test_parse_ignores_seconds(self):
        """Test database-style "HH:MM:SS" values."""
        assert parse_time_of_day("18:00:00") == 1080

    @pytest.mark.parametrize("value", ["", "24:00", "12:60", "noon", "12", None, 900])
    def test_parse_invalid(self, value):
        with pytest.raises(MalformedScheduleError):
            parse_time_of_day(value)

    def test_format_zero_pads(self):
        assert format_time_of_day(0) == "00:00"
        assert format_time_of_day(545) == "09:05"
        assert format_time_of_day(1020) == "17:00"


class TestWeekdayIndex:
    """Tests for the Sunday-based weekday index."""

    def test_sunday_is_zero(self):
        assert weekday_index(pendulum.date(2024, 11, 24)) == 0

    def test_saturday_is_six(self):
        assert weekday_index(pendulum.date(2024, 11, 30)) == 6

    def test_standard_library_date(self):
        assert weekday_index(date(2024, 11, 25)) == 1


class TestWorkWindow:
    """Tests for WorkWindow."""

    def test_end_must_follow_start(self):
        with pytest.raises(MalformedScheduleError, match="must be after"):
            WorkWindow(start=600, end=600)

    def test_lunch_must_be_inside_window(self):
        with pytest.raises(MalformedScheduleError, match="must lie within"):
            WorkWindow(start=540, end=1080, lunch_start=1050, lunch_end=1110)

    def test_overlaps_lunch(self):
        """Test the three collision rules."""
        window = WorkWindow(start=540, end=1080, lunch_start=720, lunch_end=780)

        assert window.overlaps_lunch(720, 750)      # starts in lunch
        assert window.overlaps_lunch(690, 750)      # ends in lunch
        assert window.overlaps_lunch(690, 780)      # ends at lunch end
        assert window.overlaps_lunch(700, 800)      # spans lunch
        assert not window.overlaps_lunch(660, 720)  # ends as lunch starts
        assert not window.overlaps_lunch(780, 840)  # starts as lunch ends

    def test_no_lunch_never_overlaps(self):
        window = WorkWindow(start=540, end=1080)

        assert not window.has_lunch()
        assert not window.overlaps_lunch(700, 800)

    def test_accepts(self):
        window = WorkWindow(start=540, end=1080, lunch_start=720, lunch_end=780)

        assert window.accepts(1020, 60)
        assert not window.accepts(1050, 60)
        assert not window.accepts(690, 60)


class TestWorkDay:
    """Tests for WorkDay."""

    def test_window(self):
        work_day = WorkDay(
            day_of_week=1,
            is_open=True,
            start="09:00",
            end="18:00",
            lunch_start="12:00",
            lunch_end="13:00",
        )

        assert work_day.window() == WorkWindow(start=540, end=1080, lunch_start=720, lunch_end=780)

    def test_closed_day_has_no_window(self):
        assert WorkDay(day_of_week=0, is_open=False).window() is None

    def test_missing_times(self):
        with pytest.raises(MalformedScheduleError, match="missing"):
            WorkDay(day_of_week=1, is_open=True, start=None).window()

    def test_describe(self):
        work_day = WorkDay(
            day_of_week=1, is_open=True, lunch_start="12:00", lunch_end="13:00"
        )

        assert work_day.describe() == "Segunda 09:00-18:00 (almoço 12:00-13:00)"
        assert WorkDay(day_of_week=0, is_open=False).describe() == "Domingo: fechado"


class TestProfessional:
    """Tests for Professional schedule lookups."""

    def test_work_day_lookup(self):
        monday = WorkDay(day_of_week=1, is_open=True)
        pro = Professional(id="p1", location_id="1", name="Carlos", schedule=(monday,))

        assert pro.work_day(1) is monday
        assert pro.work_day(2) is None
        assert pro.works_on(1)
        assert not pro.works_on(2)

    def test_first_duplicate_wins(self):
        first = WorkDay(day_of_week=1, is_open=False)
        second = WorkDay(day_of_week=1, is_open=True)
        pro = Professional(id="p1", location_id="1", name="Carlos", schedule=(first, second))

        assert pro.work_day(1) is first
        assert not pro.works_on(1)

    def test_open_days_count(self):
        schedule = tuple(WorkDay(day_of_week=d, is_open=d != 0) for d in range(7))
        pro = Professional(id="p1", location_id="1", name="Carlos", schedule=schedule)

        assert pro.open_days_count() == 6


class TestLocation:
    """Tests for Location lookups."""

    def test_find_professional(self):
        pro = Professional(id="p1", location_id="1", name="Carlos")
        location = Location(id="1", name="Centro", professionals=(pro,))

        assert location.find_professional("p1") is pro
        assert location.find_professional("p9") is None
        assert location.find_service("s1") is None
