"""
Pytest configuration and fixtures.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from medlink_bot.config import Settings
from medlink_bot.core.exceptions import WhatsAppAPIError
from medlink_bot.core.models import Hospital, OutboundIntent, PlainText
from medlink_bot.services.booking import BookingRepository
from medlink_bot.services.conversation import ConversationService
from medlink_bot.services.memory import InMemorySessionStore
from medlink_bot.utils.event_log import set_log_path


class FakeWhatsApp:
    """Records outbound intents instead of calling the Cloud API."""

    def __init__(self):
        self.sent: List[Tuple[str, OutboundIntent]] = []
        self.fail_on: Tuple[type, ...] = ()

    async def send(self, to: str, intent: OutboundIntent) -> Dict[str, Any]:
        self.sent.append((to, intent))
        if isinstance(intent, self.fail_on):
            raise WhatsAppAPIError("boom", status_code=500)
        return {"messages": [{"id": f"wamid.{len(self.sent)}"}]}

    async def send_text(self, to: str, text: str) -> Dict[str, Any]:
        return await self.send(to, PlainText(body=text))

    def intents(self) -> List[OutboundIntent]:
        return [intent for _, intent in self.sent]


@pytest.fixture(autouse=True)
def no_event_log():
    set_log_path(None)
    yield
    set_log_path(None)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        meta_access_token="test-token",
        whatsapp_phone_number_id="123456",
        webhook_verify_token="verify-secret",
        database_path=str(tmp_path / "medlink.db"),
    )


@pytest.fixture
def repository(settings):
    return BookingRepository(settings.database())


@pytest.fixture
def fake_whatsapp():
    return FakeWhatsApp()


@pytest.fixture
def session_store():
    return InMemorySessionStore(ttl_seconds=1800)


@pytest.fixture
def conversation(repository, fake_whatsapp, session_store):
    return ConversationService(repository, fake_whatsapp, session_store)


@pytest.fixture
def st_mary():
    return Hospital(id="H1", name="St. Mary", available_beds=4, phone="+15550001")


@pytest.fixture
def city_general():
    return Hospital(id="H2", name="City General", available_beds=0)


@pytest.fixture
def make_payload():
    """Build a Cloud API webhook body around a single message."""

    def _make(message: Optional[Dict[str, Any]] = None, statuses: Optional[list] = None) -> Dict[str, Any]:
        value: Dict[str, Any] = {"messaging_product": "whatsapp"}
        if message is not None:
            value["messages"] = [message]
        if statuses is not None:
            value["statuses"] = statuses
        return {
            "object": "whatsapp_business_account",
            "entry": [{"id": "WABA", "changes": [{"field": "messages", "value": value}]}],
        }

    return _make
