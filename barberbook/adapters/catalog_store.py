"""
Catalog store backed by a JSON or YAML file.

Records follow the backing database's column names (snake_case), but the
camelCase names used by the web client are accepted as well. Professional
schedules arrive either as a structured list or as JSON text; both are
normalized here so the domain only ever sees ``WorkDay`` tuples.
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from ..domain.exceptions import CatalogError
from ..domain.models import (
    Location,
    Professional,
    Review,
    Service,
    Subscription,
    WorkDay,
    format_time_of_day,
)

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "catalog_data.json"

_MISSING = object()


def _pick(record: Dict[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    """Return the first present key of ``record``."""
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    if default is _MISSING:
        raise CatalogError(f"Missing field '{keys[0]}' in record {record!r}")
    return default


def _to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise CatalogError(f"Invalid price: {value!r}") from exc


def _load_json_text(value: Any, what: str) -> Any:
    """Decode JSON text columns, passing structured values through."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value or "[]")
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid {what} JSON: {exc}") from exc


def _to_time_of_day(value: Any) -> Any:
    """
    Normalize a time field to "HH:MM".

    YAML 1.1 reads unquoted values such as 18:00 as base-60 integers
    (1080); those are turned back into time strings.
    """
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return format_time_of_day(value)
    return value


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise CatalogError(f"Invalid open flag: {value!r}")


def parse_schedule(raw: Any) -> Tuple[WorkDay, ...]:
    """
    Normalize a schedule column into WorkDay entries.

    Accepts None, a list of mappings, or the JSON text of such a list.
    Null entries are dropped.
    """
    data = _load_json_text(raw, "schedule")
    if data is None:
        return ()
    if not isinstance(data, list):
        raise CatalogError(f"Schedule must be a list, got {type(data).__name__}")

    work_days: List[WorkDay] = []
    for entry in data:
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise CatalogError(f"Invalid schedule entry: {entry!r}")

        work_days.append(
            WorkDay(
                day_of_week=int(_pick(entry, "day_of_week", "dayOfWeek")),
                is_open=_to_bool(_pick(entry, "is_open", "isOpen", default=False)),
                start=_to_time_of_day(_pick(entry, "start", default=None)),
                end=_to_time_of_day(_pick(entry, "end", default=None)),
                lunch_start=_to_time_of_day(_pick(entry, "lunch_start", "lunchStart", default=None)),
                lunch_end=_to_time_of_day(_pick(entry, "lunch_end", "lunchEnd", default=None)),
            )
        )

    return tuple(work_days)


def _parse_service(record: Dict[str, Any]) -> Service:
    return Service(
        id=str(_pick(record, "id")),
        name=_pick(record, "name"),
        price=_to_decimal(_pick(record, "price")),
        duration_min=int(_pick(record, "duration_min", "durationMin")),
        description=_pick(record, "description", default=""),
    )


def _parse_professional(record: Dict[str, Any], location_id: str) -> Professional:
    return Professional(
        id=str(_pick(record, "id")),
        location_id=location_id,
        name=_pick(record, "name"),
        role=_pick(record, "role", default=""),
        photo_url=_pick(record, "photo_url", "photoUrl", default=""),
        schedule=parse_schedule(_pick(record, "schedule", default=None)),
    )


def _parse_subscription(record: Dict[str, Any]) -> Subscription:
    benefits = _load_json_text(_pick(record, "benefits", default=[]), "benefits")
    if not isinstance(benefits, list):
        benefits = []
    return Subscription(
        id=str(_pick(record, "id")),
        name=_pick(record, "name"),
        price=_to_decimal(_pick(record, "price")),
        benefits=tuple(str(benefit) for benefit in benefits),
    )


def _parse_review(record: Dict[str, Any]) -> Review:
    return Review(
        id=str(_pick(record, "id")),
        author=_pick(record, "author", default=""),
        rating=int(_pick(record, "rating", default=0)),
        comment=_pick(record, "comment", default=""),
        date=str(_pick(record, "date", default="")),
    )


def parse_location(record: Dict[str, Any]) -> Location:
    """Build a Location, with all its children, from a raw record."""
    location_id = str(_pick(record, "id"))
    coordinates = record.get("coordinates") or {}

    return Location(
        id=location_id,
        name=_pick(record, "name"),
        address=_pick(record, "address", default=""),
        rating=float(_pick(record, "rating", default=0.0)),
        image_url=_pick(record, "image_url", "imageUrl", default=""),
        coordinates=(
            float(_pick(record, "lat", default=coordinates.get("lat", 0.0))),
            float(_pick(record, "lng", default=coordinates.get("lng", 0.0))),
        ),
        description=_pick(record, "description", default=""),
        phone=_pick(record, "phone", default=""),
        opening_hours=_pick(record, "opening_hours", "openingHours", default=""),
        services=tuple(_parse_service(s) for s in record.get("services") or []),
        professionals=tuple(
            _parse_professional(p, location_id) for p in record.get("professionals") or []
        ),
        subscriptions=tuple(_parse_subscription(s) for s in record.get("subscriptions") or []),
        reviews=tuple(_parse_review(r) for r in record.get("reviews") or []),
    )


class CatalogStore:
    """
    Read-only access to locations and everything they offer.
    """

    def __init__(self, locations: List[Location]):
        self._locations: Dict[str, Location] = {}
        for location in locations:
            if location.id in self._locations:
                raise CatalogError(f"Duplicate location id: {location.id}")
            self._locations[location.id] = location

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> "CatalogStore":
        """Build a store from raw location records."""
        return cls([parse_location(record) for record in records])

    @classmethod
    def from_file(cls, path: Path) -> "CatalogStore":
        """
        Load the catalog from a JSON or YAML file.

        The file holds either a list of locations or a mapping with a
        ``locations`` key.

        Raises:
            FileNotFoundError: If the file doesn't exist
            CatalogError: If the file cannot be parsed
        """
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise CatalogError(f"Invalid catalog file {path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("locations")
        if not isinstance(data, list):
            raise CatalogError(f"Catalog file {path} must contain a list of locations")

        store = cls.from_records(data)
        logger.debug("Loaded %d locations from %s", len(store), path)
        return store

    @classmethod
    def bundled(cls) -> "CatalogStore":
        """Load the demo catalog shipped with the package."""
        return cls.from_file(BUNDLED_CATALOG)

    def locations(self) -> List[Location]:
        return list(self._locations.values())

    def get_location(self, location_id: str) -> Location:
        """
        Get a location by id.

        Raises:
            CatalogError: If the location is unknown
        """
        try:
            return self._locations[location_id]
        except KeyError:
            raise CatalogError(f"Unknown location: '{location_id}'") from None

    def find_service(self, location_id: str, service_id: str) -> Service:
        """
        Get a service offered at a location.

        Raises:
            CatalogError: If the location or service is unknown
        """
        service = self.get_location(location_id).find_service(service_id)
        if service is None:
            raise CatalogError(f"Unknown service '{service_id}' at location '{location_id}'")
        return service

    def __len__(self) -> int:
        return len(self._locations)
