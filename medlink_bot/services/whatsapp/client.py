"""
WhatsApp Cloud API client for sending outbound messages.
"""

from typing import Any, Dict, Optional
import httpx

from ...config import WhatsAppCloudConfig
from ...core.exceptions import WhatsAppAPIError
from ...core.models import OutboundIntent, PlainText
from ...utils.logging import get_logger
from .adapter import render, render_fallback_text

logger = get_logger("medlink.whatsapp")


class WhatsAppCloudClient:
    """Sends text, list and button messages through the Cloud API."""

    def __init__(
        self,
        config: WhatsAppCloudConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.timeout = config.timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.access_token}",
            "Content-Type": "application/json",
        }

    async def _post_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a message with error handling."""
        url = self.config.get_messages_url()
        if not url or not self.config.is_configured():
            raise WhatsAppAPIError("WhatsApp Cloud API is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=self._headers())
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            raise WhatsAppAPIError("Request timed out") from e
        except httpx.HTTPStatusError as e:
            body = _safe_json(e.response)
            logger.error(
                "WhatsApp API error: status=%s body=%s",
                e.response.status_code,
                str(body)[:200],
            )
            raise WhatsAppAPIError(
                f"HTTP error {e.response.status_code}",
                status_code=e.response.status_code,
                body=body,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise WhatsAppAPIError(f"Request failed: {e}") from e

    def _envelope(self, to: str, message: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": to,
            **message,
        }

    async def send(self, to: str, intent: OutboundIntent) -> Dict[str, Any]:
        """Send ``intent`` to ``to``.

        If an interactive message fails, a plain-text rendering of it is
        sent before the original error is re-raised. Plain-text failures
        propagate directly.
        """
        try:
            return await self._post_message(self._envelope(to, render(intent)))
        except WhatsAppAPIError:
            fallback = render_fallback_text(intent)
            if fallback is None:
                raise
            logger.warning("Interactive send to %s failed, falling back to text", to)
            try:
                await self.send_text(to, fallback)
            except WhatsAppAPIError:
                logger.exception("Fallback text to %s failed", to)
            raise

    async def send_text(self, to: str, text: str) -> Dict[str, Any]:
        return await self.send(to, PlainText(body=text))


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
