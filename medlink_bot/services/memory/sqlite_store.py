"""
Session store persisted in SQLite so pending selections survive restarts.
"""

import asyncio
import json
import sqlite3
import time
from dataclasses import asdict, replace
from typing import Callable, Optional

from ...config import DatabaseConfig
from ...core.enums import ConversationStep
from ...core.models import Session
from ...utils.logging import get_logger
from .session_store import SessionStore

logger = get_logger("medlink.sessions")


def _session_to_json(session: Session) -> str:
    data = asdict(session)
    data["step"] = session.step.value
    return json.dumps(data)


def _session_from_json(raw: str) -> Optional[Session]:
    data = json.loads(raw)
    try:
        data["step"] = ConversationStep(data.get("step"))
    except ValueError:
        logger.warning("Dropping session with unknown step %r", data.get("step"))
        return None
    return Session(**data)


class SQLiteSessionStore(SessionStore):
    """Manages persistent sessions using a SQLite database."""

    def __init__(
        self,
        config: DatabaseConfig,
        ttl_seconds: int = 1800,
        clock: Callable[[], float] = time.time,
    ):
        self.db_path = config.path
        self.timeout = config.connection_timeout
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._table_ready = False

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=self.timeout)

    async def _ensure_table(self) -> None:
        """Ensure the sessions table exists."""
        if self._table_ready:
            return

        def _create_table():
            conn = self._connect()
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS sessions (
                        user_id TEXT PRIMARY KEY,
                        ctx TEXT NOT NULL,
                        updated_at REAL NOT NULL
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()

        await asyncio.to_thread(_create_table)
        self._table_ready = True

    async def get(self, user_id: str) -> Optional[Session]:
        await self._ensure_table()

        async with self._lock:
            def _fetch() -> Optional[str]:
                conn = self._connect()
                try:
                    cur = conn.execute(
                        "SELECT ctx FROM sessions WHERE user_id = ?", (user_id,)
                    )
                    row = cur.fetchone()
                finally:
                    conn.close()
                return row[0] if row else None

            ctx_json = await asyncio.to_thread(_fetch)

        if ctx_json is None:
            return None

        session = _session_from_json(ctx_json)
        if session is None or session.is_expired(self._clock(), self.ttl_seconds):
            await self.delete(user_id)
            return None
        return session

    async def set(self, user_id: str, session: Session) -> None:
        await self._ensure_table()
        now = self._clock()
        stamped = replace(session, user_id=user_id, updated_at=now)
        ctx_json = _session_to_json(stamped)
        cutoff = now - self.ttl_seconds if self.ttl_seconds > 0 else None

        async with self._lock:
            def _write() -> None:
                conn = self._connect()
                try:
                    if cutoff is not None:
                        conn.execute("DELETE FROM sessions WHERE updated_at < ?", (cutoff,))
                    conn.execute(
                        "INSERT OR REPLACE INTO sessions (user_id, ctx, updated_at) VALUES (?, ?, ?)",
                        (user_id, ctx_json, now),
                    )
                    conn.commit()
                finally:
                    conn.close()

            await asyncio.to_thread(_write)

    async def delete(self, user_id: str) -> None:
        await self._ensure_table()

        async with self._lock:
            def _delete() -> None:
                conn = self._connect()
                try:
                    conn.execute("DELETE FROM sessions WHERE user_id = ?", (user_id,))
                    conn.commit()
                finally:
                    conn.close()

            await asyncio.to_thread(_delete)
