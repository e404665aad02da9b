"""GeoJSON export of map annotations."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ...models.domain import Location


def location_to_feature(location: Location) -> Dict[str, Any]:
    """Convert a location into a GeoJSON Point feature.

    Coordinates are emitted in lon, lat order as GeoJSON requires. The marker
    color and icon come from the location's first listed vaccine.
    """

    primary = location.primary_vaccine
    return {
        "type": "Feature",
        "id": location.id,
        "geometry": {
            "type": "Point",
            "coordinates": [location.longitude, location.latitude],
        },
        "properties": {
            "id": location.id,
            "title": location.title,
            "subtitle": location.subtitle,
            "vaccines": [vaccine.value for vaccine in location.vaccines],
            "marker_color": location.primary_color,
            "marker_icon": primary.icon if primary else None,
            "phone_number": location.phone_number,
            "address": location.address,
        },
    }


def locations_to_feature_collection(locations: Iterable[Location]) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = [location_to_feature(location) for location in locations]
    return {"type": "FeatureCollection", "features": features}
