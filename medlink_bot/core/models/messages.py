"""
Normalized inbound messages and outbound intents.

These are independent of the WhatsApp wire format; the transport adapter
translates between the two.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .hospital import Hospital


# Inbound

@dataclass(frozen=True)
class TextMessage:
    body: str


@dataclass(frozen=True)
class ListReply:
    id: str


@dataclass(frozen=True)
class ButtonReply:
    id: str


@dataclass(frozen=True)
class Unrecognized:
    """A user message whose shape the bot does not understand."""

    kind: Optional[str] = None


InboundMessage = Union[TextMessage, ListReply, ButtonReply, Unrecognized]


@dataclass(frozen=True)
class InboundEvent:
    """A user message together with who sent it."""

    sender: str
    message: InboundMessage
    message_id: Optional[str] = None


@dataclass(frozen=True)
class NoMessage:
    """Webhook payload that carries no user message (e.g. a delivery status)."""

    reason: str


# Outbound

@dataclass(frozen=True)
class PlainText:
    body: str


@dataclass(frozen=True)
class HospitalMenu:
    hospitals: Tuple[Hospital, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AmbulanceQuestion:
    hospital_name: str


OutboundIntent = Union[PlainText, HospitalMenu, AmbulanceQuestion]
