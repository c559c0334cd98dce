"""
Conversation flow enums.
"""

from enum import Enum


# Reply ids of the two ambulance buttons
AMBULANCE_YES = "ambulance_yes"
AMBULANCE_NO = "ambulance_no"


class ConversationStep(str, Enum):
    """Enumeration of the booking conversation steps."""

    NONE = "none"
    AWAITING_AMBULANCE_CONFIRMATION = "awaiting_ambulance_confirmation"
