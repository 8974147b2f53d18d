"""
HTTP Transport
--------------
Request/response descriptors plus the two collaborators the client
delegates to: an authorizer that adds credentials and an executor
that performs the call.

Transport failures (DNS, timeouts, resets) are raised by httpx and are
NOT caught here. They reach the caller unchanged.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional
import asyncio
import json

import httpx

from plunk import __version__
from plunk.infra.logging import get_logger


class RequestMethod(Enum):
    """HTTP methods used by the Plunk API."""
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Request:
    """A single outgoing request. Built fresh per call."""
    method: RequestMethod
    url: str
    body: Optional[Any] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def with_headers(self, **extra: str) -> "Request":
        """Return a copy with additional headers."""
        merged = dict(self.headers)
        merged.update(extra)
        return replace(self, headers=merged)


@dataclass(frozen=True)
class Response:
    """Status code and decoded body of a completed call."""
    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class TokenAuthorizer:
    """Attaches a bearer token to every request."""

    def __init__(self, token: str):
        self._token = token

    def authorize(self, request: Request) -> Request:
        return request.with_headers(Authorization=f"Bearer {self._token}")

    def __repr__(self) -> str:
        return "TokenAuthorizer(token=***)"


def decode_payload(content: bytes) -> Any:
    """
    Decode a response payload.

    Empty payloads decode to None. Payloads that aren't JSON are kept
    as text so error bodies from proxies still reach the caller.
    """
    if not content:
        return None
    try:
        return json.loads(content)
    except ValueError:
        return content.decode("utf-8", errors="replace")


class HttpExecutor:
    """
    Executes requests over a shared ``httpx.AsyncClient``.

    When ``use_isolate`` is set, payload decoding runs in a worker thread
    so large bodies don't block the event loop. The decoded value is the
    same either way.
    """

    DEFAULT_HEADERS: Dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": f"plunk-python/{__version__}",
    }

    def __init__(
        self,
        timeout: float = 60.0,
        use_isolate: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.use_isolate = bool(use_isolate)
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=self.DEFAULT_HEADERS,
            transport=transport,
        )
        self._logger = get_logger("api.transport")

    async def execute(self, request: Request, authorizer: TokenAuthorizer) -> Response:
        """Authorize and send a request, returning the decoded response."""
        request = authorizer.authorize(request)
        self._logger.debug(
            f"{request.method.value} {request.url}",
            extra={"method": request.method.value, "url": request.url},
        )

        http_response = await self._client.request(
            method=request.method.value,
            url=request.url,
            json=request.body,
            headers=dict(request.headers),
        )

        content = http_response.content
        if self.use_isolate:
            body = await asyncio.to_thread(decode_payload, content)
        else:
            body = decode_payload(content)

        self._logger.debug(
            f"{request.method.value} {request.url} -> {http_response.status_code}",
            extra={
                "method": request.method.value,
                "url": request.url,
                "status_code": http_response.status_code,
            },
        )
        return Response(status_code=http_response.status_code, body=body)

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed
