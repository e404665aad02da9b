"""Domain models for vaccine types, provider locations and map regions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_MARKER_COLOR = "#007AFF"


class VaccineType(str, Enum):
    """Closed set of vaccines offered by providers, in display order."""

    MODERNA = "moderna"
    PFIZER = "pfizer"
    JOHNSON_JOHNSON = "johnson_johnson"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @classmethod
    def all(cls) -> frozenset["VaccineType"]:
        return frozenset(cls)


_LABELS = {
    VaccineType.MODERNA: "Moderna",
    VaccineType.PFIZER: "Pfizer",
    VaccineType.JOHNSON_JOHNSON: "Johnson & Johnson",
}

_COLORS = {
    VaccineType.MODERNA: "#5856D6",
    VaccineType.PFIZER: "#30B0C7",
    VaccineType.JOHNSON_JOHNSON: "#FF9500",
}

_ICONS = {
    VaccineType.MODERNA: "cross.circle.fill",
    VaccineType.PFIZER: "cross.fill",
    VaccineType.JOHNSON_JOHNSON: "cross.case.fill",
}


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Location:
    """A vaccine provider shown on the map and in the list.

    ``vaccines`` is ordered; the first entry drives the marker color and icon.
    """

    id: str
    latitude: float
    longitude: float
    title: str
    vaccines: tuple[VaccineType, ...]
    phone_number: Optional[str] = None
    address: Optional[str] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def primary_vaccine(self) -> Optional[VaccineType]:
        return self.vaccines[0] if self.vaccines else None

    @property
    def primary_color(self) -> str:
        primary = self.primary_vaccine
        return primary.color if primary else DEFAULT_MARKER_COLOR

    @property
    def subtitle(self) -> str:
        return "Available: " + ", ".join(vaccine.label for vaccine in self.vaccines)


@dataclass(frozen=True, slots=True)
class MapRegion:
    """Visible map area expressed as a center and a span in degrees."""

    center: Coordinate
    latitude_delta: float
    longitude_delta: float
