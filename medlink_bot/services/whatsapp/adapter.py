"""
Translation between WhatsApp Cloud API payloads and the bot's message types.
"""

from typing import Any, Dict, Optional, Union

from ...core.enums import AMBULANCE_YES, AMBULANCE_NO
from ...core.models import (
    AmbulanceQuestion,
    ButtonReply,
    HospitalMenu,
    InboundEvent,
    InboundMessage,
    ListReply,
    NoMessage,
    OutboundIntent,
    PlainText,
    TextMessage,
    Unrecognized,
)
from ...utils.text import truncate_title

LIST_HEADER = "Nearby Hospitals"
LIST_BODY = "Select a hospital to book a bed:"
LIST_FOOTER = 'Tap "View Hospitals" to see options'
LIST_BUTTON = "View Hospitals"
LIST_SECTION_TITLE = "Available Hospitals"


def _first(value: Any) -> Optional[Dict[str, Any]]:
    """Return ``value[0]`` if it is a non-empty list holding a dict."""
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return None


def _change_value(body: Any) -> Optional[Dict[str, Any]]:
    """Walk ``entry[0].changes[0].value``, returning None at the first missing level."""
    if not isinstance(body, dict):
        return None
    entry = _first(body.get("entry"))
    if entry is None:
        return None
    change = _first(entry.get("changes"))
    if change is None:
        return None
    value = change.get("value")
    return value if isinstance(value, dict) else None


def _reply_id(reply: Any) -> Optional[str]:
    if isinstance(reply, dict):
        reply_id = reply.get("id")
        if isinstance(reply_id, str) and reply_id:
            return reply_id
    return None


def _parse_message(message: Dict[str, Any]) -> InboundMessage:
    msg_type = message.get("type")

    if msg_type == "text":
        text = message.get("text")
        body = text.get("body") if isinstance(text, dict) else None
        if isinstance(body, str):
            return TextMessage(body=body)
        return Unrecognized(kind=msg_type)

    if msg_type == "interactive":
        interactive = message.get("interactive")
        if not isinstance(interactive, dict):
            return Unrecognized(kind=msg_type)
        list_id = _reply_id(interactive.get("list_reply"))
        if list_id is not None:
            return ListReply(id=list_id)
        button_id = _reply_id(interactive.get("button_reply"))
        if button_id is not None:
            return ButtonReply(id=button_id)
        return Unrecognized(kind=msg_type)

    return Unrecognized(kind=msg_type if isinstance(msg_type, str) else None)


def normalize_inbound(body: Any) -> Union[InboundEvent, NoMessage]:
    """Extract the user message from a Cloud API webhook payload.

    Delivery status updates and payloads without a message yield
    :class:`NoMessage`; malformed messages yield :class:`Unrecognized`.
    Never raises.
    """
    value = _change_value(body)
    if value is None:
        return NoMessage(reason="no_message")

    if value.get("statuses"):
        return NoMessage(reason="status_update")

    message = _first(value.get("messages"))
    if message is None:
        return NoMessage(reason="no_message")

    sender = message.get("from")
    if not isinstance(sender, str) or not sender:
        return NoMessage(reason="no_sender")

    message_id = message.get("id")
    return InboundEvent(
        sender=sender,
        message=_parse_message(message),
        message_id=message_id if isinstance(message_id, str) else None,
    )


def render(intent: OutboundIntent) -> Dict[str, Any]:
    """Render an outbound intent as a Cloud API message body, without recipient."""
    if isinstance(intent, PlainText):
        return {"type": "text", "text": {"body": intent.body}}

    if isinstance(intent, HospitalMenu):
        rows = [
            {
                "id": hospital.id,
                "title": truncate_title(hospital.name),
                "description": f"{hospital.available_beds} beds available",
            }
            for hospital in intent.hospitals
        ]
        return {
            "type": "interactive",
            "interactive": {
                "type": "list",
                "header": {"type": "text", "text": LIST_HEADER},
                "body": {"text": LIST_BODY},
                "footer": {"text": LIST_FOOTER},
                "action": {
                    "button": LIST_BUTTON,
                    "sections": [{"title": LIST_SECTION_TITLE, "rows": rows}],
                },
            },
        }

    if isinstance(intent, AmbulanceQuestion):
        return {
            "type": "interactive",
            "interactive": {
                "type": "button",
                "body": {
                    "text": f"You selected {intent.hospital_name}. Do you need an ambulance?"
                },
                "action": {
                    "buttons": [
                        {"type": "reply", "reply": {"id": AMBULANCE_YES, "title": "Yes"}},
                        {"type": "reply", "reply": {"id": AMBULANCE_NO, "title": "No"}},
                    ]
                },
            },
        }

    raise TypeError(f"Cannot render outbound intent: {intent!r}")


def render_fallback_text(intent: OutboundIntent) -> Optional[str]:
    """Plain-text version of an interactive intent, or None for plain text."""
    if isinstance(intent, HospitalMenu):
        lines = [f"- {h.name} ({h.available_beds} beds)" for h in intent.hospitals]
        return "Available Hospitals:\n\n" + "\n".join(lines)
    if isinstance(intent, AmbulanceQuestion):
        return (
            f"You selected {intent.hospital_name}. "
            "Do you need an ambulance? Reply YES or NO."
        )
    return None
