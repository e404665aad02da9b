"""Export services."""

from .geojson import location_to_feature, locations_to_feature_collection

__all__ = [
    "location_to_feature",
    "locations_to_feature_collection",
]
