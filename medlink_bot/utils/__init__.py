"""
Utility modules for the Medlink bot.
"""

from .logging import get_logger, configure_logging
from .text import truncate_title, is_book_hospital_command

__all__ = [
    "get_logger",
    "configure_logging",
    "truncate_title",
    "is_book_hospital_command",
]
