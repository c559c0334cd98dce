"""
External API configuration.
"""

from typing import Optional
from pydantic import BaseModel


class WhatsAppCloudConfig(BaseModel):
    """WhatsApp Business Cloud API settings."""

    access_token: Optional[str] = None
    phone_number_id: Optional[str] = None
    api_version: str = "v17.0"
    base_url: str = "https://graph.facebook.com"
    timeout: float = 10.0

    def get_messages_url(self) -> Optional[str]:
        """Get the messages endpoint if the phone number is configured."""
        if not self.phone_number_id:
            return None
        return f"{self.base_url}/{self.api_version}/{self.phone_number_id}/messages"

    def is_configured(self) -> bool:
        """Check if the Cloud API credentials are present."""
        return bool(self.access_token and self.phone_number_id)
