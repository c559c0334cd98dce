"""
Session store interface and the default in-memory implementation.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Dict, Optional

from ...core.models import Session


class SessionStore(ABC):
    """Keyed storage of conversation sessions by user id."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Session]:
        """Return the live session for ``user_id`` or None."""

    @abstractmethod
    async def set(self, user_id: str, session: Session) -> None:
        """Insert or replace the session for ``user_id``."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Remove the session for ``user_id``; missing sessions are ignored."""


class InMemorySessionStore(SessionStore):
    """Process-wide dict of sessions, lost on restart.

    Sessions idle for more than ``ttl_seconds`` are dropped lazily on
    access; ``ttl_seconds=0`` keeps them forever.
    """

    def __init__(self, ttl_seconds: int = 1800, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def _purge_expired(self, now: float) -> None:
        for user_id in [
            uid for uid, s in self._sessions.items() if s.is_expired(now, self.ttl_seconds)
        ]:
            del self._sessions[user_id]

    async def get(self, user_id: str) -> Optional[Session]:
        async with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                return None
            if session.is_expired(self._clock(), self.ttl_seconds):
                del self._sessions[user_id]
                return None
            return replace(session)

    async def set(self, user_id: str, session: Session) -> None:
        async with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._sessions[user_id] = replace(session, user_id=user_id, updated_at=now)

    async def delete(self, user_id: str) -> None:
        async with self._lock:
            self._sessions.pop(user_id, None)
