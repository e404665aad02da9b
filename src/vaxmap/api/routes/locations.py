"""Catalog endpoints: vaccine types, filtered locations and map annotations."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...data.catalog_repository import CatalogError, LocationNotFoundError, get_location, load_catalog, parse_vaccine
from ...models.domain import VaccineType
from ...schemas.locations import LocationListResponse, LocationModel, VaccineTypeModel
from ...schemas.sessions import sorted_filters
from ...services.export import locations_to_feature_collection
from ...services.filtering import visible_locations

router = APIRouter(tags=["locations"])


def _resolve_filters(vaccine: List[str] | None) -> frozenset[VaccineType]:
    # No query parameter means the default, all-selected filter; `?vaccine=` means none.
    if vaccine is None:
        return VaccineType.all()
    try:
        return frozenset(parse_vaccine(name) for name in vaccine if name.strip())
    except CatalogError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc


@router.get("/vaccines", response_model=List[VaccineTypeModel], status_code=status.HTTP_200_OK)
def list_vaccines() -> List[VaccineTypeModel]:
    return [VaccineTypeModel.from_vaccine(vaccine) for vaccine in VaccineType]


@router.get("/locations", response_model=LocationListResponse, status_code=status.HTTP_200_OK)
def list_locations(
    vaccine: List[str] | None = Query(default=None, description="Vaccine types to show (repeatable)"),
) -> LocationListResponse:
    filters = _resolve_filters(vaccine)
    items = visible_locations(load_catalog(), filters)
    return LocationListResponse(
        filters=sorted_filters(filters),
        total=len(items),
        items=[LocationModel.from_location(location) for location in items],
    )


@router.get("/locations.geojson", status_code=status.HTTP_200_OK)
def export_locations_geojson(
    vaccine: List[str] | None = Query(default=None, description="Vaccine types to show (repeatable)"),
) -> dict:
    return locations_to_feature_collection(visible_locations(load_catalog(), _resolve_filters(vaccine)))


@router.get("/locations/{location_id}", response_model=LocationModel, status_code=status.HTTP_200_OK)
def get_location_detail(location_id: str) -> LocationModel:
    try:
        location = get_location(location_id)
    except LocationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return LocationModel.from_location(location)
