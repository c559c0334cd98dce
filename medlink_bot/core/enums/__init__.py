"""
Enums for the Medlink bot.
"""

from .booking import BookingStatus, PaymentStatus
from .conversation import ConversationStep, AMBULANCE_YES, AMBULANCE_NO

__all__ = [
    "BookingStatus",
    "PaymentStatus",
    "ConversationStep",
    "AMBULANCE_YES",
    "AMBULANCE_NO",
]
