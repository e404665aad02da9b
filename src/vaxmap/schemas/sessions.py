"""Pydantic request/response models for map and list screen sessions."""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from ..models.domain import MapRegion, VaccineType
from .locations import LocationModel


def sorted_filters(filters: frozenset[VaccineType]) -> List[VaccineType]:
    """Filters in enumeration order so responses are stable."""

    return [vaccine for vaccine in VaccineType if vaccine in filters]


class MapRegionModel(BaseModel):
    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    @classmethod
    def from_region(cls, region: MapRegion) -> "MapRegionModel":
        return cls(
            latitude=region.center.latitude,
            longitude=region.center.longitude,
            latitude_delta=region.latitude_delta,
            longitude_delta=region.longitude_delta,
        )


class SessionResponse(BaseModel):
    session_id: str


class ToggleFilterRequest(BaseModel):
    vaccine: VaccineType


class SetFiltersRequest(BaseModel):
    vaccines: Sequence[VaccineType] = Field(default_factory=list)


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class PositionFailureRequest(BaseModel):
    reason: Optional[str] = Field(default=None, description="Error reported by the device location service.")
    denied: bool = Field(default=False, description="True when the user has not granted location access.")


class SelectionRequest(BaseModel):
    location_id: str


class MapScreenResponse(BaseModel):
    session_id: str
    filters: List[VaccineType]
    region: MapRegionModel
    has_initially_centered: bool
    user_position: Optional[CoordinateModel] = None
    selected: Optional[LocationModel] = None
    annotations: List[LocationModel]


class ListScreenResponse(BaseModel):
    session_id: str
    filters: List[VaccineType]
    total: int
    rows: List[LocationModel]
