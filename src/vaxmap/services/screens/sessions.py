"""In-memory registry of client sessions, each with a map and a list screen."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Sequence

from ...config import settings
from ...data.catalog_repository import load_catalog
from ...models.domain import Location
from .list_screen import ListScreen
from .map_screen import MapScreen

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session '{self.session_id}' not found"


@dataclass
class ScreenSession:
    id: str
    map_screen: MapScreen
    list_screen: ListScreen = field(repr=False)
    # Serializes screen mutations and the response built from them.
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)


class SessionRegistry:
    """Keeps the most recent sessions; the oldest is evicted past ``max_sessions``."""

    def __init__(
        self,
        catalog_loader: Callable[[], Sequence[Location]] | None = None,
        max_sessions: int | None = None,
    ) -> None:
        self._catalog_loader = catalog_loader
        self.max_sessions = max_sessions or settings.max_sessions
        self._sessions: OrderedDict[str, ScreenSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self) -> ScreenSession:
        catalog = self._catalog_loader() if self._catalog_loader else load_catalog()
        session = ScreenSession(id=uuid.uuid4().hex, map_screen=MapScreen(catalog), list_screen=ListScreen(catalog))
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted session %s", evicted)
            active = len(self._sessions)
        logger.info("Created session %s (%d active)", session.id, active)
        return session

    def get(self, session_id: str) -> ScreenSession:
        with self._lock:
            try:
                session = self._sessions[session_id]
            except KeyError as exc:
                raise SessionNotFoundError(session_id) from exc
            self._sessions.move_to_end(session_id)
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is None:
            raise SessionNotFoundError(session_id)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


registry = SessionRegistry()
