"""
WhatsApp Cloud API transport.
"""

from .adapter import normalize_inbound, render, render_fallback_text
from .client import WhatsAppCloudClient

__all__ = [
    "normalize_inbound",
    "render",
    "render_fallback_text",
    "WhatsAppCloudClient",
]
