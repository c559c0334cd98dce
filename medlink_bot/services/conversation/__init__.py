"""
Conversation state machine for the hospital booking flow.
"""

from .locks import UserLocks
from .service import ConversationService

__all__ = ["ConversationService", "UserLocks"]
