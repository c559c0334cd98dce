"""
Booking-related exceptions.
"""


class BookingFlowError(Exception):
    """Base exception for booking flow errors."""
    pass


class BookingPersistenceError(BookingFlowError):
    """Exception raised when hospitals or bookings cannot be read or stored."""
    pass
