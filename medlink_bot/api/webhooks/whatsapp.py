"""
WhatsApp Cloud API webhook handler.
"""

import secrets
import time
from collections import OrderedDict
from typing import Any, Dict, Optional
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from ...config import Settings
from ...core.models import InboundEvent, NoMessage
from ...services.conversation import ConversationService
from ...services.whatsapp import normalize_inbound
from ...utils.event_log import set_turn_id
from ...utils.logging import get_logger

logger = get_logger("medlink.webhook")


class WhatsAppWebhook:
    """Handler for WhatsApp webhook verification and delivery."""

    def __init__(self, settings: Settings, conversation: ConversationService, max_tracked_senders: int = 10_000):
        self.settings = settings
        self.conversation = conversation
        self.router = APIRouter()

        # Cloud API redelivers on slow acks; remember the last message id per sender,
        # evicting the least recently active sender past the cap
        self._last_msgid: "OrderedDict[str, str]" = OrderedDict()
        self.max_tracked_senders = max_tracked_senders

        self._setup_routes()

    def _setup_routes(self):
        """Setup WhatsApp webhook routes."""

        @self.router.get("")
        async def verify_webhook(request: Request):
            """Answer the subscription handshake."""
            params = request.query_params
            mode = params.get("hub.mode")
            token = params.get("hub.verify_token")
            challenge = params.get("hub.challenge")

            logger.info({"event": "wa_verify", "mode": mode})
            if not mode or not token:
                logger.warning("Webhook verification without mode or token")
                return Response(status_code=status.HTTP_403_FORBIDDEN)

            if mode == "subscribe" and self._token_matches(token):
                logger.info("Webhook verified successfully")
                return PlainTextResponse(challenge or "", status_code=status.HTTP_200_OK)

            logger.warning("Webhook verification failed: token mismatch")
            return Response(status_code=status.HTTP_403_FORBIDDEN)

        @self.router.post("")
        async def receive_whatsapp_message(request: Request):
            """Handle incoming WhatsApp messages and status updates."""
            try:
                body = await request.json()
            except ValueError:
                return Response(status_code=status.HTTP_400_BAD_REQUEST)

            try:
                return await self._process_payload(body)
            except Exception:
                logger.exception("Webhook processing failed")
                return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def _token_matches(self, token: str) -> bool:
        expected = self.settings.webhook_verify_token
        if not expected:
            return False
        return secrets.compare_digest(token.encode(), expected.encode())

    def _is_duplicate_message(self, sender_id: str, msg_id: Optional[str]) -> bool:
        """Check if message is a duplicate."""
        if not msg_id:
            return False
        return self._last_msgid.get(sender_id) == msg_id

    def _remember_message(self, sender_id: str, msg_id: str) -> None:
        self._last_msgid[sender_id] = msg_id
        self._last_msgid.move_to_end(sender_id)
        while len(self._last_msgid) > self.max_tracked_senders:
            self._last_msgid.popitem(last=False)

    async def _process_payload(self, body: Any) -> Dict[str, Any]:
        event = normalize_inbound(body)

        if isinstance(event, NoMessage):
            logger.debug("Ignoring webhook without user message: %s", event.reason)
            return {"status": "ignored", "reason": event.reason}

        return await self._process_message(event)

    async def _process_message(self, event: InboundEvent) -> Dict[str, Any]:
        logger.info(
            {
                "event": "wa_inbound",
                "sender": event.sender,
                "msg_id": event.message_id,
                "kind": type(event.message).__name__,
                "ts": time.time(),
            }
        )

        if self._is_duplicate_message(event.sender, event.message_id):
            logger.info("Duplicate message %s from %s", event.message_id, event.sender)
            return {"status": "ok", "dedupe": True}
        if event.message_id:
            self._remember_message(event.sender, event.message_id)

        set_turn_id(event.message_id)
        await self.conversation.handle_message(event.sender, event.message)
        return {"status": "ok"}
