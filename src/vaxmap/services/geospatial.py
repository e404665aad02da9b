"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point, box

from ..config import settings
from ..models.domain import Coordinate, Location, MapRegion

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_to_km(origin: Coordinate, location: Location) -> float:
    return haversine_km(origin.latitude, origin.longitude, location.latitude, location.longitude)


def region_around(center: Coordinate, span: float) -> MapRegion:
    return MapRegion(center=center, latitude_delta=span, longitude_delta=span)


def default_region() -> MapRegion:
    """Region shown before (or instead of) a user position fix."""

    center = Coordinate(settings.default_latitude, settings.default_longitude)
    return region_around(center, settings.region_span_degrees)


def centered_region(coordinate: Coordinate) -> MapRegion:
    return region_around(coordinate, settings.region_span_degrees)


def selection_region(location: Location) -> MapRegion:
    """Region used when a marker is selected, shifted north to clear the detail card."""

    center = Coordinate(location.latitude + settings.selection_latitude_offset, location.longitude)
    return region_around(center, settings.selection_span_degrees)


def focus_region(location: Location) -> MapRegion:
    return region_around(location.coordinate, settings.focus_span_degrees)


def region_contains(region: MapRegion, coordinate: Coordinate) -> bool:
    """Return True if the coordinate falls inside the region (edges included)."""

    half_lat = region.latitude_delta / 2
    half_lon = region.longitude_delta / 2
    bounds = box(
        region.center.longitude - half_lon,
        region.center.latitude - half_lat,
        region.center.longitude + half_lon,
        region.center.latitude + half_lat,
    )
    return bounds.intersects(Point(coordinate.longitude, coordinate.latitude))
