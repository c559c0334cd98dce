"""
Booking-related enums.
"""

from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle status of a bed booking."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    """Payment status of a bed booking."""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
