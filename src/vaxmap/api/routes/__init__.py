"""Route group exports."""

from . import health, locations, sessions

__all__ = ["health", "locations", "sessions"]
