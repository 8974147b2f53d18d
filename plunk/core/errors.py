"""
Error Handling Module
---------------------
Typed errors for Plunk API failures.

Every non-200 response maps to exactly one error type. Nothing here
retries: the error is the sole outcome of the call.
"""

from enum import Enum, auto
from typing import Any, Dict, Optional, Type


class ErrorKind(Enum):
    """Categories of API failures."""
    INVALID_REQUEST = auto()    # 400 or client-side precondition
    UNAUTHORIZED = auto()       # 401
    QUOTA_EXCEEDED = auto()     # 402
    UNKNOWN = auto()            # Anything else that isn't 200


class PlunkError(Exception):
    """
    Base class for errors returned by the Plunk API.

    Carries the HTTP status code and the raw decoded body so callers
    can inspect what the server said.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, code: int, body: Any = None, message: Optional[str] = None):
        self.code = code
        self.body = body
        self.message = message if message is not None else describe_body(body)
        super().__init__(f"[{code}] {self.message}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class InvalidRequestError(PlunkError):
    """The request was rejected as malformed (400) or failed a local check."""
    kind = ErrorKind.INVALID_REQUEST


class UnauthorizedError(PlunkError):
    """The API key is missing, wrong, or lacks access to the endpoint."""
    kind = ErrorKind.UNAUTHORIZED


class QuotaExceededError(PlunkError):
    """The project has run out of quota."""
    kind = ErrorKind.QUOTA_EXCEEDED


class UnknownError(PlunkError):
    kind = ErrorKind.UNKNOWN


SUCCESS_CODE = 200

STATUS_ERRORS: Dict[int, Type[PlunkError]] = {
    400: InvalidRequestError,
    401: UnauthorizedError,
    402: QuotaExceededError,
}


def describe_body(body: Any) -> str:
    """
    Build a human-readable message from a response body.

    Prefers the server's own ``message`` or ``error`` field and falls
    back to the stringified body.
    """
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if body is None:
        return ""
    return str(body)


def error_for_status(code: int, body: Any = None) -> PlunkError:
    """Create the error matching a non-200 status code."""
    error_cls = STATUS_ERRORS.get(code, UnknownError)
    return error_cls(code, body)


def raise_for_status(code: int, body: Any = None) -> None:
    """Raise the matching error unless the status code is 200."""
    if code == SUCCESS_CODE:
        return
    raise error_for_status(code, body)
