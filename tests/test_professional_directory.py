"""
Tests for the professional directory.
"""

from dataclasses import replace

import pytest

from barberbook.adapters.catalog_store import CatalogStore
from barberbook.adapters.professional_directory import ProfessionalDirectory, default_schedule
from barberbook.domain.exceptions import CatalogError
from barberbook.domain.models import WorkDay


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore.from_records([
        {
            "id": "1",
            "name": "Centro",
            "professionals": [
                {"id": "p1", "name": "Carlos", "schedule": [
                    {"day_of_week": 1, "is_open": True, "start": "09:00", "end": "18:00"},
                ]},
            ],
        },
        {"id": "2", "name": "Vila Madalena"},
    ])


@pytest.fixture
def directory(store) -> ProfessionalDirectory:
    return ProfessionalDirectory(store)


class TestDefaultSchedule:
    """Tests for the default week."""

    def test_closed_on_sunday_only(self):
        schedule = default_schedule()

        assert [day.day_of_week for day in schedule] == list(range(7))
        assert not schedule[0].is_open
        assert all(day.is_open for day in schedule[1:])
        assert schedule[1].window().lunch_start == 720


class TestProfessionalDirectory:
    """Tests for creating and editing professionals."""

    def test_loads_catalog_professionals(self, directory):
        assert directory.get("p1").name == "Carlos"
        assert [p.id for p in directory.for_location("1")] == ["p1"]
        assert directory.for_location("2") == []

    def test_create_with_default_schedule(self, directory):
        pro = directory.create("2", "Felipe")

        assert pro.role == "Barbeiro"
        assert pro.schedule == default_schedule()
        assert directory.for_location("2") == [pro]

    def test_create_with_custom_role_and_schedule(self, store):
        directory = ProfessionalDirectory(store, default_role="Colorista")
        monday = WorkDay(day_of_week=1, is_open=True)

        pro = directory.create("1", "Marcos", schedule=[None, monday])
        other = directory.create("1", "Lia")

        assert pro.schedule == (monday,)
        assert other.role == "Colorista"

    def test_create_at_unknown_location(self, directory):
        with pytest.raises(CatalogError, match="Unknown location"):
            directory.create("9", "Ghost")

    def test_update_moves_location(self, directory):
        pro = directory.get("p1")

        directory.update(replace(pro, location_id="2", name="Carlos S."))

        assert directory.for_location("1") == []
        assert directory.get("p1").name == "Carlos S."
        assert directory.location_with_staff("2").professionals[0].id == "p1"

    def test_update_unknown(self, directory):
        pro = replace(directory.get("p1"), id="p9")
        with pytest.raises(CatalogError, match="Unknown professional"):
            directory.update(pro)

    def test_update_to_unknown_location(self, directory):
        with pytest.raises(CatalogError):
            directory.update(replace(directory.get("p1"), location_id="9"))

    def test_catalog_is_not_mutated(self, store, directory):
        directory.create("1", "Novo")

        assert len(store.get_location("1").professionals) == 1
        assert len(directory.location_with_staff("1").professionals) == 2

    def test_update_existing_work_day(self, directory):
        pro = directory.update_work_day("p1", 1, end="17:00", lunch_start="12:00", lunch_end="13:00")

        monday = pro.work_day(1)
        assert monday.end == "17:00"
        assert monday.lunch_start == "12:00"
        assert len(pro.schedule) == 1

    def test_update_missing_work_day_starts_closed(self, directory):
        pro = directory.update_work_day("p1", 3, start="10:00")

        wednesday = pro.work_day(3)
        assert not wednesday.is_open
        assert wednesday.start == "10:00"
        assert wednesday.end == "18:00"

    def test_update_missing_work_day_open(self, directory):
        pro = directory.update_work_day("p1", 6, is_open=True)

        assert pro.works_on(6)
        assert pro.work_day(6).lunch_end == "13:00"

    def test_update_work_day_validation(self, directory):
        with pytest.raises(CatalogError, match="Unknown work day field"):
            directory.update_work_day("p1", 1, opens_at="09:00")
        with pytest.raises(CatalogError, match="between 0 and 6"):
            directory.update_work_day("p1", 7, is_open=True)
