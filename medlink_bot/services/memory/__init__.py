"""
Conversation session storage.
"""

from .session_store import SessionStore, InMemorySessionStore
from .sqlite_store import SQLiteSessionStore

__all__ = ["SessionStore", "InMemorySessionStore", "SQLiteSessionStore"]
