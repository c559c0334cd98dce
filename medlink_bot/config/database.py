"""
Database configuration.
"""

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """SQLite settings shared by the booking repository and session store."""

    path: str = "medlink.db"
    connection_timeout: float = 30.0

    def get_url(self) -> str:
        """Get SQLite URL for the database."""
        return f"sqlite:///{self.path}"
