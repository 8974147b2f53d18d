"""
Model Tests
-----------
Tests for request/response shapes.

Tests cover:
- Decoding fields from API payloads
- Neutral defaults for partial payloads
- Rendering back to the wire format
- Immutability
"""

import dataclasses

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from plunk.core.models import (
    ContactRequest, ContactResponse, SendRequest, SendResponse, SentEmail,
    SubscriptionResponse, TrackRequest, TrackResponse,
)


class TestRequests:
    """Tests for outgoing bodies."""

    def test_track_request(self):
        assert TrackRequest("a@x.com", "login").to_dict() == {
            "email": "a@x.com",
            "event": "login",
        }
        assert TrackRequest.resource_path == "track"

    def test_contact_request_copies_data(self):
        data = {"plan": "free"}
        body = ContactRequest("a@x.com", False, data).to_dict()

        body["data"]["plan"] = "pro"

        assert data == {"plan": "free"}

    def test_send_request_uses_from_key(self):
        body = SendRequest("team@x.com", ("a@x.com",), "Hi", "Body").to_dict()

        assert body["from"] == "team@x.com"
        assert "from_" not in body
        assert "name" not in body

    def test_send_request_keeps_recipient_order(self):
        body = SendRequest("team@x.com", ("b@x.com", "a@x.com"), "Hi", "Body", "Team").to_dict()

        assert body["to"] == ["b@x.com", "a@x.com"]
        assert body["name"] == "Team"


class TestResponses:
    """Tests for decoded API payloads."""

    def test_track_response_fields(self):
        payload = {
            "success": True,
            "contact": "c_1",
            "event": "e_1",
            "timestamp": "2024-01-02T03:04:05.000Z",
        }

        result = TrackResponse.from_dict(payload)

        assert result.success is True
        assert result.contact == "c_1"
        assert result.event == "e_1"
        assert result.to_dict() == payload

    def test_contact_response_fields(self, contact_body):
        contact = ContactResponse.from_dict(contact_body)

        assert contact.created_at == "2024-01-02T03:04:05.000Z"
        assert contact.updated_at == "2024-01-03T03:04:05.000Z"
        assert contact.to_dict() == contact_body

    def test_contact_response_without_timestamps(self):
        payload = {"id": "c_1", "email": "a@x.com", "subscribed": False, "data": {}}

        assert ContactResponse.from_dict(payload).to_dict() == payload

    def test_subscription_response(self):
        payload = {"success": True, "contact": "c_1", "subscribed": False}

        result = SubscriptionResponse.from_dict(payload)

        assert result.subscribed is False
        assert result.to_dict() == payload

    def test_send_response(self):
        payload = {
            "success": True,
            "emails": [{"contact": {"id": "c_1", "email": "a@x.com"}, "email": "m_1"}],
            "timestamp": "2024-01-02T03:04:05.000Z",
        }

        result = SendResponse.from_dict(payload)

        assert result.emails == (SentEmail(contact_id="c_1", contact_email="a@x.com", email="m_1"),)
        assert result.to_dict() == payload

    @pytest.mark.parametrize("cls", [TrackResponse, SubscriptionResponse, SendResponse])
    def test_partial_payload_defaults(self, cls):
        result = cls.from_dict({})

        assert result.success is False

    def test_send_response_ignores_malformed_emails(self):
        result = SendResponse.from_dict({"success": True, "emails": "oops"})

        assert result.emails == ()
        assert result.recipients == []

    def test_non_dict_payload_treated_as_empty(self):
        contact = ContactResponse.from_dict(None)

        assert contact == ContactResponse(id="", email="", subscribed=False)

    def test_equality_by_fields(self, contact_body):
        assert ContactResponse.from_dict(contact_body) == ContactResponse.from_dict(dict(contact_body))

    def test_contact_data_read_only(self, contact_body):
        contact = ContactResponse.from_dict(contact_body)

        with pytest.raises(TypeError):
            contact.data["plan"] = "mutated"

        assert contact.data["plan"] == "pro"

    def test_contact_data_is_a_copy(self):
        data = {"plan": "free"}
        contact = ContactResponse(id="c_1", email="a@x.com", subscribed=True, data=data)

        data["plan"] = "pro"

        assert contact.data["plan"] == "free"

    def test_contact_hashable(self, contact_body):
        first = ContactResponse.from_dict(contact_body)
        second = ContactResponse.from_dict(dict(contact_body))

        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_frozen(self):
        result = SubscriptionResponse(success=True, contact="c_1", subscribed=True)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.subscribed = False
