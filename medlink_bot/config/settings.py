"""
Application settings and configuration.
"""

from typing import List, Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError
from .database import DatabaseConfig
from .external_apis import WhatsAppCloudConfig


REQUIRED_SETTINGS = (
    "meta_access_token",
    "whatsapp_phone_number_id",
    "webhook_verify_token",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    # Application
    app_name: str = "Medlink Bot"
    app_version: str = "1.0.0"
    debug: bool = False
    port: int = 3000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # WhatsApp Cloud API
    meta_access_token: Optional[str] = None
    whatsapp_phone_number_id: Optional[str] = None
    whatsapp_api_version: str = "v17.0"
    whatsapp_timeout: float = 10.0
    webhook_verify_token: Optional[str] = None

    # Storage
    database_path: str = "medlink.db"
    session_backend: Literal["memory", "sqlite"] = "memory"
    session_ttl_seconds: int = Field(default=1800, ge=0)

    # Conversation
    hospital_menu_limit: int = Field(default=5, ge=1, le=10)
    reprompt_while_awaiting: bool = False

    # Logging
    log_level: str = "INFO"
    event_log_path: Optional[str] = None

    def missing_required(self) -> List[str]:
        """Return the environment variable names that are required but unset."""
        return [name.upper() for name in REQUIRED_SETTINGS if not getattr(self, name)]

    def ensure_required(self) -> None:
        """Raise ConfigurationError if any required variable is missing."""
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

    def database(self) -> DatabaseConfig:
        return DatabaseConfig(path=self.database_path)

    def whatsapp(self) -> WhatsAppCloudConfig:
        return WhatsAppCloudConfig(
            access_token=self.meta_access_token,
            phone_number_id=self.whatsapp_phone_number_id,
            api_version=self.whatsapp_api_version,
            timeout=self.whatsapp_timeout,
        )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
