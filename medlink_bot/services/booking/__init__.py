"""
Booking service module.
"""

from .repository import BookingRepository

__all__ = ["BookingRepository"]
