"""
HTTP handlers besides the webhook.
"""

from .health import HealthHandler
from .diagnostics import DiagnosticsHandler

__all__ = ["HealthHandler", "DiagnosticsHandler"]
