"""
Service layer for the Medlink bot.
"""

from .booking import BookingRepository
from .conversation import ConversationService
from .memory import SessionStore, InMemorySessionStore, SQLiteSessionStore
from .whatsapp import WhatsAppCloudClient

__all__ = [
    "BookingRepository",
    "ConversationService",
    "SessionStore",
    "InMemorySessionStore",
    "SQLiteSessionStore",
    "WhatsAppCloudClient",
]
