"""In-process registry of palette sessions keyed by browser cookie."""
from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Optional
from uuid import uuid4

from agents.palette_curator import PaletteCurator

DEFAULT_MAX_SESSIONS = 1000


class SessionRegistry:
    """Hands out one :class:`PaletteCurator` per session id.

    Nothing is persisted; a restart starts every visitor on the example set.
    At most ``max_sessions`` curators are kept, least recently used first out.
    """

    def __init__(
        self, factory: Callable[[], PaletteCurator], max_sessions: int = DEFAULT_MAX_SESSIONS
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._factory = factory
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, PaletteCurator]" = OrderedDict()
        self._lock = threading.Lock()

    def peek(self, session_id: str | None) -> Optional[PaletteCurator]:
        """Return a known curator without creating one."""

        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return self._sessions[session_id]
            return None

    def get(self, session_id: str | None) -> tuple[str, PaletteCurator]:
        """Return the curator for ``session_id``, creating a session if unknown."""

        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return session_id, self._sessions[session_id]
            session_id = uuid4().hex
            curator = self._factory()
            self._sessions[session_id] = curator
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
            return session_id, curator

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["DEFAULT_MAX_SESSIONS", "SessionRegistry"]
