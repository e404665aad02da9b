"""Data access helpers for loading the vaccine provider catalog."""

from __future__ import annotations

import csv
import functools
import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from openpyxl import load_workbook

from ..config import settings
from ..models.domain import Location, VaccineType

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog source contains a malformed record."""


class LocationNotFoundError(KeyError):
    """Raised when a location id is not part of the catalog (or not visible)."""

    def __init__(self, location_id: str) -> None:
        super().__init__(location_id)
        self.location_id = location_id

    def __str__(self) -> str:
        return f"Location '{self.location_id}' not found"


BUILTIN_RECORDS: tuple[dict[str, Any], ...] = (
    {
        "latitude": 39.828500,
        "longitude": -84.890140,
        "title": "Midtown MediCenter Pharmacy",
        "vaccines": ["moderna", "johnson_johnson"],
        "phone_number": "7659628000",
        "address": "1401 Chester Blvd, Richmond, IN 47374",
    },
    {
        "latitude": 39.828650,
        "longitude": -84.893540,
        "title": "Wayne County Health Department",
        "vaccines": ["moderna", "johnson_johnson"],
        "phone_number": "7659357650",
        "address": "401 E Main St, Richmond, IN 47374",
    },
    {
        "latitude": 39.862750,
        "longitude": -84.883750,
        "title": "Reid Health-Richmond",
        "vaccines": ["moderna", "pfizer", "johnson_johnson"],
        "phone_number": "7659833561",
        "address": "1100 Reid Pkwy, Richmond, IN 47374",
    },
    {
        "latitude": 39.868110,
        "longitude": -84.885950,
        "title": "Meijer",
        "vaccines": ["moderna"],
        "phone_number": "7659621200",
        "address": "3100 E Main St, Richmond, IN 47374",
    },
    {
        "latitude": 39.826670,
        "longitude": -84.853290,
        "title": "Walmart",
        "vaccines": ["johnson_johnson"],
        "phone_number": "7659398311",
        "address": "4300 S 7th St, Richmond, IN 47374",
    },
    {
        "latitude": 39.831600,
        "longitude": -84.851040,
        "title": "Walgreens",
        "vaccines": ["moderna", "johnson_johnson"],
        "phone_number": "7659622631",
        "address": "901 National Rd W, Richmond, IN 47374",
    },
    {
        "latitude": 39.829300,
        "longitude": -84.850660,
        "title": "Kroger Pharmacy",
        "vaccines": ["moderna", "johnson_johnson"],
        "phone_number": "7659628900",
        "address": "2350 Chester Blvd, Richmond, IN 47374",
    },
    {
        "latitude": 39.862360,
        "longitude": -84.889590,
        "title": "CVS Pharmacy-Richmond",
        "vaccines": ["johnson_johnson"],
        "phone_number": "7659668400",
        "address": "1201 E Main St, Richmond, IN 47374",
    },
    {
        "latitude": 39.816650,
        "longitude": -85.154970,
        "title": "CVS Pharmacy-Cambridge City",
        "vaccines": ["johnson_johnson"],
        "phone_number": "7654785100",
        "address": "110 S Foote St, Cambridge City, IN 47327",
    },
    {
        "latitude": 39.813690,
        "longitude": -85.171120,
        "title": "MediCenter Pharmacy Alt.",
        "vaccines": ["johnson_johnson"],
        "phone_number": "7654785678",
        "address": "Cambridge City Health Center, IN 47327",
    },
)

_VACCINE_ALIASES = {
    "jj": VaccineType.JOHNSON_JOHNSON,
    "j&j": VaccineType.JOHNSON_JOHNSON,
    "janssen": VaccineType.JOHNSON_JOHNSON,
    "johnson": VaccineType.JOHNSON_JOHNSON,
}

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def parse_vaccine(value: str) -> VaccineType:
    """Resolve a vaccine name by enum value, display label or common alias."""

    normalized = value.strip().lower()
    for vaccine in VaccineType:
        if normalized in (vaccine.value, vaccine.label.lower()):
            return vaccine
    alias = _VACCINE_ALIASES.get(normalized)
    if alias is None:
        raise CatalogError(f"Unknown vaccine type '{value}'")
    return alias


def _coerce_float(value: Any, field: str) -> float:
    if value is None or value == "":
        raise CatalogError(f"Missing required field '{field}'")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise CatalogError(f"Unable to parse float from value '{value}'") from exc


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _split_vaccines(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        separator = ";" if ";" in value else ","
        return [item for item in (part.strip() for part in value.split(separator)) if item]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise CatalogError(f"Field 'vaccines' must be a list or a separated string, got {type(value).__name__}")


def slugify(title: str) -> str:
    slug = _SLUG_PATTERN.sub("-", title.lower()).strip("-")
    return slug or "location"


def _assign_ids(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """Use explicit ids where given, otherwise derive unique slugs in catalog order."""

    records = list(records)
    explicit = [_optional_text(record.get("id")) for record in records]
    taken: set[str] = set()
    for location_id in explicit:
        if location_id is None:
            continue
        if location_id in taken:
            raise CatalogError(f"Duplicate location id '{location_id}'")
        taken.add(location_id)

    ids: list[str] = []
    for record, location_id in zip(records, explicit):
        if location_id is None:
            base = slugify(str(record.get("title") or ""))
            location_id = base
            suffix = 2
            while location_id in taken:
                location_id = f"{base}-{suffix}"
                suffix += 1
            taken.add(location_id)
        ids.append(location_id)
    return ids


def build_locations(records: Iterable[Mapping[str, Any]]) -> tuple[Location, ...]:
    """Validate raw catalog records and turn them into ``Location`` objects."""

    records = list(records)
    for index, record in enumerate(records, start=1):
        if not isinstance(record, Mapping):
            raise CatalogError(f"Record {index} must be an object, got {type(record).__name__}")
    ids = _assign_ids(records)
    locations: list[Location] = []
    for index, (record, location_id) in enumerate(zip(records, ids), start=1):
        title = _optional_text(record.get("title"))
        if title is None:
            raise CatalogError(f"Record {index} is missing a title")
        try:
            locations.append(
                Location(
                    id=location_id,
                    latitude=_coerce_float(record.get("latitude"), "latitude"),
                    longitude=_coerce_float(record.get("longitude"), "longitude"),
                    title=title,
                    vaccines=tuple(parse_vaccine(name) for name in _split_vaccines(record.get("vaccines"))),
                    phone_number=_optional_text(record.get("phone_number") or record.get("phoneNumber")),
                    address=_optional_text(record.get("address")),
                )
            )
        except CatalogError as exc:
            raise CatalogError(f"Record {index} ('{title}'): {exc}") from exc
    return tuple(locations)


def _read_json(path: Path) -> list[Mapping[str, Any]]:
    with path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict):
        payload = payload.get("locations")
    if not isinstance(payload, list):
        raise CatalogError(f"Catalog file '{path}' must hold a list of locations.")
    return payload


def _read_csv(path: Path) -> list[Mapping[str, Any]]:
    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise CatalogError(f"Catalog file '{path}' is missing a header row.")
        return [{(key or "").strip(): value for key, value in row.items()} for row in reader]


def _read_xlsx(path: Path) -> list[Mapping[str, Any]]:
    wb = load_workbook(path, data_only=True, read_only=True)
    sheet = wb.active
    rows = sheet.iter_rows(min_row=1, values_only=True)
    header = next(rows, None)
    if header is None:
        raise CatalogError(f"Catalog workbook '{path}' is empty.")
    names = [str(cell).strip() if cell is not None else "" for cell in header]
    records = []
    for row in rows:
        if row is None or all(cell is None for cell in row):
            continue
        records.append(dict(zip(names, row)))
    return records


_READERS = {
    ".json": _read_json,
    ".csv": _read_csv,
    ".xlsx": _read_xlsx,
}


@functools.lru_cache(maxsize=1)
def load_catalog(source: Optional[Path] = None) -> tuple[Location, ...]:
    """Load the provider catalog from the configured file, or the built-in list."""

    path = source or settings.catalog_file
    if path is None:
        locations = build_locations(BUILTIN_RECORDS)
        logger.info("Loaded %d built-in catalog locations", len(locations))
        return locations

    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise CatalogError(f"Unsupported catalog format '{path.suffix}'. Use .json, .csv or .xlsx.")

    locations = build_locations(reader(path))
    logger.info("Loaded %d catalog locations from %s", len(locations), path)
    return locations


def get_location(location_id: str) -> Location:
    for location in load_catalog():
        if location.id == location_id:
            return location
    raise LocationNotFoundError(location_id)
