"""
Conversation state machine.

Interprets each inbound message against the user's session, sends the
next outbound message and moves the session along:

    NONE --list reply (known hospital)--> AWAITING_AMBULANCE_CONFIRMATION
    AWAITING_AMBULANCE_CONFIRMATION --button reply--> NONE (booking created)

Everything else leaves the session as it is.
"""

from typing import List, Optional

from ...core.enums import AMBULANCE_YES, ConversationStep
from ...core.models import (
    AmbulanceQuestion,
    ButtonReply,
    HospitalMenu,
    InboundMessage,
    ListReply,
    OutboundIntent,
    PlainText,
    Session,
    TextMessage,
    Unrecognized,
)
from ...utils.event_log import log_event
from ...utils.logging import get_logger
from ...utils.text import is_book_hospital_command
from ..booking import BookingRepository
from ..memory import SessionStore
from ..whatsapp import WhatsAppCloudClient
from . import replies
from .locks import UserLocks

logger = get_logger("medlink.conversation")


class ConversationService:
    """Drives the book-a-bed conversation for every user."""

    def __init__(
        self,
        repository: BookingRepository,
        whatsapp: WhatsAppCloudClient,
        session_store: SessionStore,
        *,
        hospital_menu_limit: int = 5,
        reprompt_while_awaiting: bool = False,
        locks: Optional[UserLocks] = None,
    ):
        self.repository = repository
        self.whatsapp = whatsapp
        self.session_store = session_store
        self.hospital_menu_limit = hospital_menu_limit
        self.reprompt_while_awaiting = reprompt_while_awaiting
        self.locks = locks if locks is not None else UserLocks()

    async def handle_message(self, user_id: str, message: InboundMessage) -> List[OutboundIntent]:
        """Handle one inbound message and return the intents that were sent.

        Never raises: faults are logged and the user gets a generic error
        text while the session stays as it was.
        """
        sent: List[OutboundIntent] = []
        async with self.locks.hold(user_id):
            try:
                log_event("inbound", {"user_id": user_id, "message": repr(message)})
                session = await self.session_store.get(user_id)
                await self._dispatch(user_id, session, message, sent)
            except Exception:
                logger.exception("Message handling error for %s", user_id)
                await self._notify_error(user_id, sent)
        return sent

    async def _dispatch(
        self,
        user_id: str,
        session: Optional[Session],
        message: InboundMessage,
        sent: List[OutboundIntent],
    ) -> None:
        if isinstance(message, Unrecognized):
            logger.info("Ignoring unrecognized message (%s) from %s", message.kind, user_id)
            return

        if session is not None and session.is_awaiting_ambulance_confirmation():
            if isinstance(message, ButtonReply):
                await self._confirm_booking(user_id, session, message, sent)
            elif isinstance(message, (TextMessage, ListReply)):
                await self._ignore_while_awaiting(user_id, message, sent)
            else:
                raise TypeError(f"Unhandled inbound message: {message!r}")
            return

        if isinstance(message, TextMessage):
            await self._handle_text(user_id, message, sent)
        elif isinstance(message, ListReply):
            await self._select_hospital(user_id, message, sent)
        elif isinstance(message, ButtonReply):
            logger.info("Button reply %r from %s without pending selection", message.id, user_id)
        else:
            raise TypeError(f"Unhandled inbound message: {message!r}")

    async def _handle_text(
        self, user_id: str, message: TextMessage, sent: List[OutboundIntent]
    ) -> None:
        if not is_book_hospital_command(message.body):
            await self._send(user_id, PlainText(body=replies.WELCOME), sent)
            return

        hospitals = await self.repository.find_hospitals(limit=self.hospital_menu_limit)
        if not hospitals:
            await self._send(user_id, PlainText(body=replies.NO_HOSPITALS), sent)
            return
        await self._send(user_id, HospitalMenu(hospitals=tuple(hospitals)), sent)

    async def _select_hospital(
        self, user_id: str, message: ListReply, sent: List[OutboundIntent]
    ) -> None:
        hospital = await self.repository.find_hospital_by_id(message.id)
        if hospital is None:
            logger.info("Unknown hospital %r selected by %s", message.id, user_id)
            return

        await self._send(user_id, AmbulanceQuestion(hospital_name=hospital.name), sent)
        await self.session_store.set(
            user_id,
            Session(
                user_id=user_id,
                step=ConversationStep.AWAITING_AMBULANCE_CONFIRMATION,
                hospital_id=hospital.id,
            ),
        )
        self._log_transition(user_id, ConversationStep.NONE, ConversationStep.AWAITING_AMBULANCE_CONFIRMATION)

    async def _confirm_booking(
        self,
        user_id: str,
        session: Session,
        message: ButtonReply,
        sent: List[OutboundIntent],
    ) -> None:
        requires_ambulance = message.id == AMBULANCE_YES
        booking = await self.repository.create_booking(
            user_id=user_id,
            hospital_id=session.hospital_id,
            requires_ambulance=requires_ambulance,
        )
        logger.info("Booking %s created for %s at %s", booking.id, user_id, booking.hospital_id)
        log_event(
            "booking_created",
            {
                "user_id": user_id,
                "booking_id": booking.id,
                "hospital_id": booking.hospital_id,
                "requires_ambulance": requires_ambulance,
            },
        )

        await self._send(user_id, PlainText(body=replies.booking_confirmed(requires_ambulance)), sent)

        # Only a delivered confirmation ends the session
        await self.session_store.delete(user_id)
        self._log_transition(user_id, session.step, ConversationStep.NONE)

    async def _ignore_while_awaiting(
        self, user_id: str, message: InboundMessage, sent: List[OutboundIntent]
    ) -> None:
        logger.info("Ignoring %s from %s while awaiting ambulance answer", type(message).__name__, user_id)
        if self.reprompt_while_awaiting and isinstance(message, TextMessage):
            await self._send(user_id, PlainText(body=replies.AMBULANCE_REPROMPT), sent)

    async def _send(self, user_id: str, intent: OutboundIntent, sent: List[OutboundIntent]) -> None:
        sent.append(intent)
        log_event("outbound", {"user_id": user_id, "intent": type(intent).__name__})
        await self.whatsapp.send(user_id, intent)

    async def _notify_error(self, user_id: str, sent: List[OutboundIntent]) -> None:
        try:
            await self._send(user_id, PlainText(body=replies.GENERIC_ERROR), sent)
        except Exception:
            logger.exception("Could not notify %s about the error", user_id)

    def _log_transition(self, user_id: str, from_step: ConversationStep, to_step: ConversationStep) -> None:
        logger.info("Step %s -> %s for %s", from_step.value, to_step.value, user_id)
        log_event(
            "step_transition",
            {"user_id": user_id, "from": from_step.value, "to": to_step.value},
        )
