"""
Booking data models.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict

from ..enums import BookingStatus, PaymentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(BaseModel):
    """A bed booking created at the end of the conversation."""

    model_config = ConfigDict(extra="forbid")

    id: str
    user_id: str
    hospital_id: str
    requires_ambulance: bool
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
