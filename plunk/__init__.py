# Plunk - Async client for the Plunk email API
# One coroutine per endpoint, typed results, typed errors

__version__ = "0.3.0"

from .api import (
    HttpExecutor, Plunk, Request, RequestMethod, Response, TokenAuthorizer,
    map_response,
)
from .core import (
    ContactRequest, ContactResponse, ErrorKind, InvalidRequestError,
    PlunkError, QuotaExceededError, SendRequest, SendResponse, SentEmail,
    SubscriptionResponse, TrackRequest, TrackResponse, UnauthorizedError,
    UnknownError,
)
from .infra import PlunkConfig, configure_logging, load_config

__all__ = [
    "__version__",
    # Client
    "Plunk",
    "map_response",
    # Transport
    "HttpExecutor",
    "Request",
    "RequestMethod",
    "Response",
    "TokenAuthorizer",
    # Models
    "ContactRequest",
    "ContactResponse",
    "SendRequest",
    "SendResponse",
    "SentEmail",
    "SubscriptionResponse",
    "TrackRequest",
    "TrackResponse",
    # Errors
    "ErrorKind",
    "PlunkError",
    "InvalidRequestError",
    "UnauthorizedError",
    "QuotaExceededError",
    "UnknownError",
    # Config & logging
    "PlunkConfig",
    "load_config",
    "configure_logging",
]
