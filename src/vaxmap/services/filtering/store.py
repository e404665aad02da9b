"""Filter state for one screen and the visibility rule it applies."""

from __future__ import annotations

from typing import AbstractSet, Iterable, Sequence

from ...models.domain import Location, VaccineType


def is_visible(location: Location, filters: AbstractSet[VaccineType]) -> bool:
    """A location is visible when it offers at least one selected vaccine."""

    return not filters.isdisjoint(location.vaccines)


def visible_locations(catalog: Iterable[Location], filters: AbstractSet[VaccineType]) -> list[Location]:
    """Return the catalog entries visible under ``filters``, in catalog order."""

    return [location for location in catalog if is_visible(location, filters)]


class LocationFilterStore:
    """Holds a fixed catalog plus the mutable vaccine filter set of one screen.

    Mutations do not notify anyone; callers ask for ``visible()`` afterwards.
    """

    def __init__(
        self,
        catalog: Sequence[Location],
        filters: Iterable[VaccineType] | None = None,
    ) -> None:
        self._catalog = tuple(catalog)
        self._filters: set[VaccineType] = set(VaccineType) if filters is None else set(filters)

    @property
    def catalog(self) -> tuple[Location, ...]:
        return self._catalog

    @property
    def filters(self) -> frozenset[VaccineType]:
        return frozenset(self._filters)

    def toggle(self, vaccine: VaccineType) -> None:
        if vaccine in self._filters:
            self._filters.remove(vaccine)
        else:
            self._filters.add(vaccine)

    def clear(self) -> None:
        self._filters.clear()

    def select_all(self) -> None:
        self._filters = set(VaccineType)

    def set_filters(self, vaccines: Iterable[VaccineType]) -> None:
        self._filters = set(vaccines)

    def visible(self) -> list[Location]:
        return visible_locations(self._catalog, self._filters)
