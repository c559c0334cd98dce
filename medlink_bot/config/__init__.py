"""
Configuration management for the Medlink bot.
"""

from .settings import Settings, get_settings
from .database import DatabaseConfig
from .external_apis import WhatsAppCloudConfig

__all__ = [
    "Settings",
    "get_settings",
    "DatabaseConfig",
    "WhatsAppCloudConfig",
]
