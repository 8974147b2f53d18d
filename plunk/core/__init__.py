# Core module - Data shapes and error taxonomy
# No I/O here: everything is built from and rendered to plain JSON values

from .errors import (
    ErrorKind, PlunkError, InvalidRequestError, UnauthorizedError,
    QuotaExceededError, UnknownError, error_for_status, raise_for_status
)
from .models import (
    TrackRequest, TrackResponse, ContactRequest, ContactResponse,
    SubscriptionResponse, SendRequest, SendResponse, SentEmail
)

__all__ = [
    "ErrorKind", "PlunkError", "InvalidRequestError", "UnauthorizedError",
    "QuotaExceededError", "UnknownError", "error_for_status", "raise_for_status",
    "TrackRequest", "TrackResponse", "ContactRequest", "ContactResponse",
    "SubscriptionResponse", "SendRequest", "SendResponse", "SentEmail",
]
