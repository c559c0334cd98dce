"""
Conversation session model.
"""

from dataclasses import dataclass
from typing import Optional

from ..enums import ConversationStep


@dataclass
class Session:
    """Per-user conversation progress while a hospital selection is pending."""

    user_id: str
    step: ConversationStep = ConversationStep.NONE
    hospital_id: Optional[str] = None

    # Epoch seconds of the last write, stamped by the session store
    updated_at: float = 0.0

    def is_awaiting_ambulance_confirmation(self) -> bool:
        return self.step == ConversationStep.AWAITING_AMBULANCE_CONFIRMATION

    def is_expired(self, now: float, ttl_seconds: int) -> bool:
        """A ttl of 0 means the session never expires."""
        if ttl_seconds <= 0:
            return False
        return now - self.updated_at > ttl_seconds
