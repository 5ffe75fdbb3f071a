"""In-memory registry of desk sessions."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from functools import lru_cache
from typing import Callable

from ...config import settings
from .errors import SessionNotFoundError
from .session import RouteCalculator


class SessionStore:
    """
    Hands every desk its own ``RouteCalculator``.

    Nothing is persisted and nothing is shared between sessions. The registry
    is bounded; once full, creating a session evicts the one used least
    recently.
    """

    def __init__(
        self,
        max_sessions: int | None = None,
        factory: Callable[[], RouteCalculator] = RouteCalculator,
    ) -> None:
        self.max_sessions = max_sessions or settings.max_sessions
        self._factory = factory
        self._sessions: OrderedDict[str, RouteCalculator] = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> tuple[str, RouteCalculator]:
        session_id = uuid.uuid4().hex
        calculator = self._factory()
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logging.info(f"Session store full ({self.max_sessions}); evicted session {evicted_id}")
            self._sessions[session_id] = calculator
        logging.info(f"Created session {session_id}")
        return session_id, calculator

    def get(self, session_id: str) -> RouteCalculator:
        with self._lock:
            calculator = self._sessions.get(session_id)
            if calculator is None:
                raise SessionNotFoundError(session_id)
            self._sessions.move_to_end(session_id)
            return calculator

    def discard(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logging.info(f"Discarded session {session_id}")

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Process-wide store used by the API layer."""
    return SessionStore()
