"""Pydantic request/response models for catalog endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ..models.domain import Location, VaccineType


class VaccineTypeModel(BaseModel):
    id: VaccineType
    label: str
    color: str
    icon: str

    @classmethod
    def from_vaccine(cls, vaccine: VaccineType) -> "VaccineTypeModel":
        return cls(id=vaccine, label=vaccine.label, color=vaccine.color, icon=vaccine.icon)


class LocationModel(BaseModel):
    id: str
    title: str
    subtitle: str
    latitude: float
    longitude: float
    vaccines: List[VaccineType]
    primary_color: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    distance_km: Optional[float] = None

    @classmethod
    def from_location(cls, location: Location, distance_km: float | None = None) -> "LocationModel":
        return cls(
            id=location.id,
            title=location.title,
            subtitle=location.subtitle,
            latitude=location.latitude,
            longitude=location.longitude,
            vaccines=list(location.vaccines),
            primary_color=location.primary_color,
            phone_number=location.phone_number,
            address=location.address,
            distance_km=distance_km,
        )


class LocationListResponse(BaseModel):
    filters: List[VaccineType]
    total: int
    items: List[LocationModel]
