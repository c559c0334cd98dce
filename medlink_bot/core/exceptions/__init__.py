"""
Custom exceptions for the Medlink bot.
"""

from .booking import BookingFlowError, BookingPersistenceError
from .external import ExternalAPIError, WhatsAppAPIError
from .config import ConfigurationError

__all__ = [
    "BookingFlowError",
    "BookingPersistenceError",
    "ExternalAPIError",
    "WhatsAppAPIError",
    "ConfigurationError",
]
