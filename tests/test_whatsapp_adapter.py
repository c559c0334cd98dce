"""
Tests for WhatsApp payload normalization and rendering.
"""

import pytest

from medlink_bot.core.models import (
    AmbulanceQuestion,
    ButtonReply,
    Hospital,
    HospitalMenu,
    InboundEvent,
    ListReply,
    NoMessage,
    PlainText,
    TextMessage,
    Unrecognized,
)
from medlink_bot.services.whatsapp import normalize_inbound, render, render_fallback_text


class TestNormalizeInbound:
    """Test normalize_inbound."""

    def test_text_message(self, make_payload):
        body = make_payload({"from": "919800000001", "id": "wamid.1", "type": "text", "text": {"body": "Book Hospital"}})
        event = normalize_inbound(body)
        assert event == InboundEvent(sender="919800000001", message=TextMessage(body="Book Hospital"), message_id="wamid.1")

    def test_list_reply(self, make_payload):
        body = make_payload({
            "from": "u1",
            "type": "interactive",
            "interactive": {"type": "list_reply", "list_reply": {"id": "H1", "title": "St. Mary"}},
        })
        assert normalize_inbound(body).message == ListReply(id="H1")

    def test_button_reply(self, make_payload):
        body = make_payload({
            "from": "u1",
            "type": "interactive",
            "interactive": {"type": "button_reply", "button_reply": {"id": "ambulance_no", "title": "No"}},
        })
        assert normalize_inbound(body).message == ButtonReply(id="ambulance_no")

    def test_status_update_is_no_message(self, make_payload):
        body = make_payload(statuses=[{"id": "wamid.1", "status": "delivered"}])
        assert normalize_inbound(body) == NoMessage(reason="status_update")

    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            {},
            {"entry": []},
            {"entry": [{}]},
            {"entry": [{"changes": []}]},
            {"entry": [{"changes": [{}]}]},
            {"entry": [{"changes": [{"value": {}}]}]},
            {"entry": [{"changes": [{"value": {"messages": []}}]}]},
            {"entry": "nope"},
        ],
    )
    def test_missing_nesting_is_no_message(self, body):
        assert normalize_inbound(body) == NoMessage(reason="no_message")

    def test_message_without_sender(self, make_payload):
        body = make_payload({"type": "text", "text": {"body": "hi"}})
        assert normalize_inbound(body) == NoMessage(reason="no_sender")

    @pytest.mark.parametrize(
        "message, kind",
        [
            ({"from": "u1", "type": "image", "image": {"id": "img"}}, "image"),
            ({"from": "u1", "type": "text"}, "text"),
            ({"from": "u1", "type": "text", "text": {"body": 42}}, "text"),
            ({"from": "u1", "type": "interactive"}, "interactive"),
            ({"from": "u1", "type": "interactive", "interactive": {"type": "nfm_reply"}}, "interactive"),
            ({"from": "u1", "type": "interactive", "interactive": {"list_reply": {}}}, "interactive"),
            ({"from": "u1"}, None),
        ],
    )
    def test_malformed_messages_are_unrecognized(self, make_payload, message, kind):
        event = normalize_inbound(make_payload(message))
        assert isinstance(event, InboundEvent)
        assert event.message == Unrecognized(kind=kind)


class TestRender:
    """Test outbound rendering."""

    def test_plain_text(self):
        assert render(PlainText(body="hello")) == {"type": "text", "text": {"body": "hello"}}

    def test_menu_rows(self):
        menu = HospitalMenu(hospitals=(
            Hospital(id="H1", name="St. Mary", available_beds=4),
            Hospital(id="H2", name="City General", available_beds=0),
        ))
        wire = render(menu)
        assert wire["interactive"]["type"] == "list"
        sections = wire["interactive"]["action"]["sections"]
        assert len(sections) == 1
        assert sections[0]["rows"] == [
            {"id": "H1", "title": "St. Mary", "description": "4 beds available"},
            {"id": "H2", "title": "City General", "description": "0 beds available"},
        ]

    def test_long_name_truncated_to_24(self):
        name = "A" * 10 + "B" * 10 + "C" * 10
        wire = render(HospitalMenu(hospitals=(Hospital(id="H1", name=name, available_beds=1),)))
        title = wire["interactive"]["action"]["sections"][0]["rows"][0]["title"]
        assert title == name[:24]
        assert len(title) == 24

    def test_ambulance_question_buttons(self):
        wire = render(AmbulanceQuestion(hospital_name="St. Mary"))
        interactive = wire["interactive"]
        assert interactive["type"] == "button"
        assert "St. Mary" in interactive["body"]["text"]
        ids = [b["reply"]["id"] for b in interactive["action"]["buttons"]]
        assert ids == ["ambulance_yes", "ambulance_no"]

    def test_render_is_deterministic(self):
        menu = HospitalMenu(hospitals=(Hospital(id="H1", name="St. Mary", available_beds=4),))
        assert render(menu) == render(menu)

    def test_unknown_intent_rejected(self):
        with pytest.raises(TypeError):
            render("not an intent")


class TestFallbackText:
    """Test plain-text fallbacks."""

    def test_menu_fallback(self):
        menu = HospitalMenu(hospitals=(
            Hospital(id="H1", name="St. Mary", available_beds=4),
            Hospital(id="H2", name="City General", available_beds=0),
        ))
        assert render_fallback_text(menu) == (
            "Available Hospitals:\n\n- St. Mary (4 beds)\n- City General (0 beds)"
        )

    def test_question_fallback(self):
        text = render_fallback_text(AmbulanceQuestion(hospital_name="St. Mary"))
        assert text == "You selected St. Mary. Do you need an ambulance? Reply YES or NO."

    def test_plain_text_has_no_fallback(self):
        assert render_fallback_text(PlainText(body="hi")) is None
