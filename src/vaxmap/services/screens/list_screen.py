"""List screen state with a filter independent from the map screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ...data.catalog_repository import LocationNotFoundError
from ...models.domain import Coordinate, Location, MapRegion, VaccineType
from ..filtering import LocationFilterStore
from ..geospatial import distance_to_km, focus_region


@dataclass(slots=True)
class ListRow:
    location: Location
    distance_km: Optional[float] = None


class ListScreen:
    def __init__(self, catalog: Sequence[Location]) -> None:
        self.store = LocationFilterStore(catalog)

    @property
    def filters(self) -> frozenset[VaccineType]:
        return self.store.filters

    def rows(self, user_position: Coordinate | None = None) -> list[ListRow]:
        """Visible locations in catalog order, with distances when a position is known."""

        rows = []
        for location in self.store.visible():
            distance = None
            if user_position is not None:
                distance = round(distance_to_km(user_position, location), 2)
            rows.append(ListRow(location=location, distance_km=distance))
        return rows

    def focus(self, location_id: str) -> MapRegion:
        for location in self.store.catalog:
            if location.id == location_id:
                return focus_region(location)
        raise LocationNotFoundError(location_id)

    def toggle(self, vaccine: VaccineType) -> None:
        self.store.toggle(vaccine)

    def clear(self) -> None:
        self.store.clear()

    def select_all(self) -> None:
        self.store.select_all()

    def set_filters(self, vaccines: Iterable[VaccineType]) -> None:
        self.store.set_filters(vaccines)
