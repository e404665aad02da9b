"""Map screen state: region, selection and its own vaccine filter."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ...data.catalog_repository import LocationNotFoundError
from ...models.domain import Coordinate, Location, MapRegion, VaccineType
from ..filtering import LocationFilterStore
from ..geospatial import centered_region, default_region, region_contains, selection_region

logger = logging.getLogger(__name__)


class MapScreen:
    """State behind the map view.

    The region starts at the default area. Only the first position fix
    re-centers the map; a failed or denied fix keeps the default region and
    the catalog stays fully renderable.
    """

    def __init__(self, catalog: Sequence[Location]) -> None:
        self.store = LocationFilterStore(catalog)
        self.region: MapRegion = default_region()
        self.user_position: Optional[Coordinate] = None
        self.has_initially_centered = False
        self.selected_location_id: Optional[str] = None

    @property
    def filters(self) -> frozenset[VaccineType]:
        return self.store.filters

    def annotations(self, *, in_region: bool = False) -> list[Location]:
        visible = self.store.visible()
        if not in_region:
            return visible
        return [location for location in visible if region_contains(self.region, location.coordinate)]

    @property
    def selected_location(self) -> Optional[Location]:
        if self.selected_location_id is None:
            return None
        for location in self.store.catalog:
            if location.id == self.selected_location_id:
                return location
        return None

    def on_location_fix(self, coordinate: Coordinate) -> bool:
        """Record a position fix; returns True when it re-centered the map."""

        self.user_position = coordinate
        if self.has_initially_centered:
            return False
        self.region = centered_region(coordinate)
        self.has_initially_centered = True
        return True

    def on_location_failure(self, reason: str | None = None) -> None:
        logger.warning("Location update failed: %s; showing default region", reason or "unknown error")
        self.region = default_region()

    def on_authorization_denied(self) -> None:
        logger.info("Location access not granted; showing default region")
        self.region = default_region()

    def recenter(self) -> bool:
        if self.user_position is None:
            return False
        self.region = centered_region(self.user_position)
        return True

    def select(self, location_id: str) -> Location:
        for location in self.store.visible():
            if location.id == location_id:
                self.selected_location_id = location.id
                self.region = selection_region(location)
                return location
        raise LocationNotFoundError(location_id)

    def deselect(self) -> None:
        self.selected_location_id = None

    # Any filter change refreshes the annotations and closes the detail card.

    def toggle(self, vaccine: VaccineType) -> None:
        self.store.toggle(vaccine)
        self.deselect()

    def clear(self) -> None:
        self.store.clear()
        self.deselect()

    def select_all(self) -> None:
        self.store.select_all()
        self.deselect()

    def set_filters(self, vaccines: Iterable[VaccineType]) -> None:
        self.store.set_filters(vaccines)
        self.deselect()
