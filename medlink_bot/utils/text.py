"""
Text processing utilities.
"""

import re

# WhatsApp rejects list rows whose title is longer than this
MAX_ROW_TITLE_LENGTH = 24

BOOK_HOSPITAL_COMMAND = "book hospital"


def truncate_title(text: str, limit: int = MAX_ROW_TITLE_LENGTH) -> str:
    """Cut ``text`` to at most ``limit`` characters."""
    if not isinstance(text, str):
        text = str(text or "")
    return text[:limit]


def is_book_hospital_command(text: str) -> bool:
    """True if ``text`` is the booking command, ignoring case and extra spaces."""
    if not isinstance(text, str):
        return False
    return re.sub(r"\s+", " ", text).strip().lower() == BOOK_HOSPITAL_COMMAND
