"""
Core data models for the Medlink bot.
"""

from .hospital import Hospital, GeoPoint
from .booking import Booking
from .session import Session
from .messages import (
    TextMessage,
    ListReply,
    ButtonReply,
    Unrecognized,
    InboundMessage,
    InboundEvent,
    NoMessage,
    PlainText,
    HospitalMenu,
    AmbulanceQuestion,
    OutboundIntent,
)

__all__ = [
    "Hospital",
    "GeoPoint",
    "Booking",
    "Session",
    "TextMessage",
    "ListReply",
    "ButtonReply",
    "Unrecognized",
    "InboundMessage",
    "InboundEvent",
    "NoMessage",
    "PlainText",
    "HospitalMenu",
    "AmbulanceQuestion",
    "OutboundIntent",
]
