"""
Plunk Data Shapes
-----------------
Request and response bodies for the Plunk API.

Responses are immutable and built from decoded JSON. Missing keys decode
to neutral defaults so a partial payload never crashes the caller.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


# =============================================================================
# Requests
# =============================================================================

@dataclass(frozen=True)
class TrackRequest:
    """Body for POST /track."""
    email: str
    event: str
    data: Optional[Dict[str, Any]] = None

    resource_path = "track"

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"email": self.email, "event": self.event}
        if self.data is not None:
            body["data"] = dict(self.data)
        return body


@dataclass(frozen=True)
class ContactRequest:
    """Body for POST /contacts."""
    email: str
    subscribed: bool
    data: Dict[str, Any] = field(default_factory=dict)

    resource_path = "contacts"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "subscribed": self.subscribed,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class SendRequest:
    """Body for POST /send. ``from_`` goes out on the wire as ``from``."""
    from_: str
    to: Tuple[str, ...]
    subject: str
    body: str
    name: Optional[str] = None

    resource_path = "send"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "from": self.from_,
            "to": list(self.to),
            "subject": self.subject,
            "body": self.body,
        }
        if self.name is not None:
            payload["name"] = self.name
        return payload


# =============================================================================
# Responses
# =============================================================================

@dataclass(frozen=True)
class TrackResponse:
    """Result of tracking an event: the contact and event it touched."""
    success: bool
    contact: str
    event: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackResponse":
        data = _as_dict(data)
        return cls(
            success=bool(data.get("success", False)),
            contact=str(data.get("contact", "")),
            event=str(data.get("event", "")),
            timestamp=str(data.get("timestamp", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "contact": self.contact,
            "event": self.event,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ContactResponse:
    """
    A contact record as stored by Plunk.

    ``data`` is a read-only copy of the custom fields and is left out of
    the hash, so contacts can be used in sets and as dict keys.
    """
    id: str
    email: str
    subscribed: bool
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContactResponse":
        data = _as_dict(data)
        return cls(
            id=str(data.get("id", "")),
            email=str(data.get("email", "")),
            subscribed=bool(data.get("subscribed", False)),
            data=_as_dict(data.get("data")),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "email": self.email,
            "subscribed": self.subscribed,
            "data": dict(self.data),
        }
        if self.created_at is not None:
            out["createdAt"] = self.created_at
        if self.updated_at is not None:
            out["updatedAt"] = self.updated_at
        return out


@dataclass(frozen=True)
class SubscriptionResponse:
    """New subscription state of a contact."""
    success: bool
    contact: str
    subscribed: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubscriptionResponse":
        data = _as_dict(data)
        return cls(
            success=bool(data.get("success", False)),
            contact=str(data.get("contact", "")),
            subscribed=bool(data.get("subscribed", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "contact": self.contact,
            "subscribed": self.subscribed,
        }


@dataclass(frozen=True)
class SentEmail:
    """Delivery record for one recipient of a transactional email."""
    contact_id: str
    contact_email: str
    email: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentEmail":
        data = _as_dict(data)
        contact = _as_dict(data.get("contact"))
        return cls(
            contact_id=str(contact.get("id", "")),
            contact_email=str(contact.get("email", "")),
            email=str(data.get("email", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contact": {"id": self.contact_id, "email": self.contact_email},
            "email": self.email,
        }


@dataclass(frozen=True)
class SendResponse:
    """Result of sending a transactional email."""
    success: bool
    emails: Tuple[SentEmail, ...] = ()
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SendResponse":
        data = _as_dict(data)
        emails = data.get("emails")
        return cls(
            success=bool(data.get("success", False)),
            emails=tuple(
                SentEmail.from_dict(item)
                for item in (emails if isinstance(emails, list) else [])
            ),
            timestamp=str(data.get("timestamp", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "emails": [email.to_dict() for email in self.emails],
            "timestamp": self.timestamp,
        }

    @property
    def recipients(self) -> List[str]:
        """Addresses the email was delivered to, in server order."""
        return [email.contact_email for email in self.emails]
