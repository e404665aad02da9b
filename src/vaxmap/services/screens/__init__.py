"""Per-client screen state for the map and list views."""

from .list_screen import ListRow, ListScreen
from .map_screen import MapScreen
from .sessions import ScreenSession, SessionNotFoundError, SessionRegistry, registry

__all__ = [
    "ListRow",
    "ListScreen",
    "MapScreen",
    "ScreenSession",
    "SessionNotFoundError",
    "SessionRegistry",
    "registry",
]
