"""Vaccine-type filtering over the provider catalog."""

from .store import LocationFilterStore, is_visible, visible_locations

__all__ = [
    "LocationFilterStore",
    "is_visible",
    "visible_locations",
]
