"""
Plunk API Client
----------------
One coroutine per Plunk endpoint. Each call builds a request, sends it
through the executor with the bearer-token authorizer, and maps the
status code to either a typed result or a typed error.

Rules:
- Exactly one HTTP round trip per call, never retried
- Local precondition failures raise before anything is sent
- Transport errors from httpx propagate unchanged
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union
from urllib.parse import quote

from plunk.api.transport import (
    HttpExecutor, Request, RequestMethod, Response, TokenAuthorizer
)
from plunk.core.errors import (
    InvalidRequestError, PlunkError, UnknownError, raise_for_status
)
from plunk.core.models import (
    ContactRequest, ContactResponse, SendRequest, SendResponse,
    SubscriptionResponse, TrackRequest, TrackResponse
)
from plunk.infra.config import (
    DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, PlunkConfig
)
from plunk.infra.logging import RequestContext, get_logger

T = TypeVar("T")

logger = get_logger("api.client")


def map_response(response: Response, decode: Callable[[Any], T]) -> T:
    """
    Turn a response into the operation's result.

    200 goes through ``decode``; every other status raises the matching
    PlunkError carrying the code and raw body.
    """
    try:
        raise_for_status(response.status_code, response.body)
    except PlunkError as e:
        logger.warning(
            f"Plunk API error {e.code} ({e.kind.name}): {e.message}",
            extra={"status_code": e.code, "error_kind": e.kind.name},
        )
        raise
    return decode(response.body)


def _object(decode: Callable[[Dict[str, Any]], T]) -> Callable[[Any], T]:
    """Wrap a decoder so a 200 body that is not a JSON object is an error."""
    def decoder(body: Any) -> T:
        if not isinstance(body, dict):
            raise UnknownError(200, body, "Expected a JSON object")
        return decode(body)
    return decoder


def _decode_contacts(body: Any) -> List[ContactResponse]:
    if not isinstance(body, list):
        raise UnknownError(200, body, "Expected a list of contacts")
    return [ContactResponse.from_dict(item) for item in body]


def _decode_count(body: Any) -> int:
    count = body.get("count") if isinstance(body, dict) else None
    # bool is an int subclass; reject it explicitly
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise UnknownError(200, body, "Response is missing a valid 'count'")
    return count


def _require(value: str, message: str, code: int = 400) -> None:
    if not value:
        raise InvalidRequestError(code, None, message)


class Plunk:
    """
    Async client for the Plunk API.

    Usage:
        async with Plunk(api_key="sk_...") as plunk:
            await plunk.track("user@example.com", "signed-up")
    """

    def __init__(
        self,
        api_key: str,
        api_version: str = DEFAULT_API_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        use_isolate: Optional[bool] = None,
        *,
        executor: Optional[HttpExecutor] = None,
        authorizer: Optional[TokenAuthorizer] = None,
    ):
        self.config = PlunkConfig(
            api_key=api_key,
            api_version=api_version,
            base_url=base_url,
            timeout=timeout,
            use_isolate=use_isolate,
        )
        self._authorizer = authorizer or TokenAuthorizer(token=api_key)
        self._owns_executor = executor is None
        self._executor = executor or HttpExecutor(
            timeout=timeout, use_isolate=use_isolate
        )
        self._base_url = self.config.endpoint

    @classmethod
    def from_config(cls, config: PlunkConfig, **kwargs: Any) -> "Plunk":
        """Create a client from a loaded PlunkConfig."""
        return cls(
            api_key=config.api_key,
            api_version=config.api_version,
            base_url=config.base_url,
            timeout=config.timeout,
            use_isolate=config.use_isolate,
            **kwargs,
        )

    async def __aenter__(self) -> "Plunk":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_executor:
            await self._executor.aclose()

    def __repr__(self) -> str:
        return f"Plunk(endpoint={self._base_url!r})"

    def _url(self, *parts: str) -> str:
        # Segments are escaped so an id can never leave the versioned root
        return "/".join([self._base_url, *(quote(part, safe="") for part in parts)])

    async def _call(self, request: Request, decode: Callable[[Any], T]) -> T:
        with RequestContext():
            response = await self._executor.execute(
                request=request, authorizer=self._authorizer
            )
            return map_response(response, decode)

    # =========================================================================
    # Events
    # =========================================================================

    async def track(
        self,
        email: str,
        event: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> TrackResponse:
        """
        Trigger an event for a contact, creating the event if needed.

        Works with both public and secret API keys.
        """
        _require(email, "Invalid email parameter")
        _require(event, "Invalid event parameter")

        track_request = TrackRequest(email=email, event=event, data=data)
        request = Request(
            method=RequestMethod.POST,
            url=self._url(TrackRequest.resource_path),
            body=track_request.to_dict(),
        )
        return await self._call(request, _object(TrackResponse.from_dict))

    # =========================================================================
    # Contacts
    # =========================================================================

    async def get_contact(self, contact_id: str) -> ContactResponse:
        """Get a single contact. Requires a secret API key."""
        # An empty id is reported as not found
        _require(contact_id, "Invalid contactId parameter", code=404)

        request = Request(
            method=RequestMethod.GET,
            url=self._url(ContactRequest.resource_path, contact_id),
        )
        return await self._call(request, _object(ContactResponse.from_dict))

    async def list_contacts(self) -> List[ContactResponse]:
        """
        List every contact in the project, in the order the server
        returns them. Requires a secret API key.
        """
        request = Request(
            method=RequestMethod.GET,
            url=self._url(ContactRequest.resource_path),
        )
        return await self._call(request, _decode_contacts)

    async def count_contacts(self) -> int:
        """Total number of contacts. Works with public and secret keys."""
        request = Request(
            method=RequestMethod.GET,
            url=self._url(ContactRequest.resource_path, "count"),
        )
        return await self._call(request, _decode_count)

    async def create_contact(
        self,
        email: str,
        subscribed: bool,
        data: Optional[Dict[str, Any]] = None,
    ) -> ContactResponse:
        """Create a contact without triggering an event."""
        _require(email, "Invalid email parameter")

        contact = ContactRequest(email=email, subscribed=subscribed, data=data or {})
        request = Request(
            method=RequestMethod.POST,
            url=self._url(ContactRequest.resource_path),
            body=contact.to_dict(),
        )
        return await self._call(request, _object(ContactResponse.from_dict))

    async def subscribe_contact(self, contact_id: str) -> SubscriptionResponse:
        return await self._set_subscription(contact_id, "subscribe")

    async def unsubscribe_contact(self, contact_id: str) -> SubscriptionResponse:
        return await self._set_subscription(contact_id, "unsubscribe")

    async def _set_subscription(self, contact_id: str, action: str) -> SubscriptionResponse:
        _require(contact_id, "Invalid contactId parameter")

        request = Request(
            method=RequestMethod.POST,
            url=self._url(ContactRequest.resource_path, action),
            body={"id": contact_id},
        )
        return await self._call(request, _object(SubscriptionResponse.from_dict))

    async def delete_contact(self, contact_id: str) -> ContactResponse:
        """
        Delete a contact. Returns the contact as it was just before
        deletion. Requires a secret API key.
        """
        _require(contact_id, "Invalid contactId parameter")

        request = Request(
            method=RequestMethod.DELETE,
            url=self._url(ContactRequest.resource_path),
            body={"id": contact_id},
        )
        return await self._call(request, _object(ContactResponse.from_dict))

    # =========================================================================
    # Transactional email
    # =========================================================================

    async def send_email(
        self,
        from_: str,
        to: Union[str, Sequence[str]],
        subject: str,
        body: str,
        name: Optional[str] = None,
    ) -> SendResponse:
        """
        Send a transactional email to one or more recipients.

        Transactional emails are part of an application's workflow:
        password resets, receipts, billing notices. Requires a secret key.
        """
        recipients = (to,) if isinstance(to, str) else tuple(to)
        if not recipients or not all(recipients):
            raise InvalidRequestError(400, None, "At least one recipient is required")

        send_request = SendRequest(
            from_=from_,
            to=recipients,
            subject=subject,
            body=body,
            name=name,
        )
        request = Request(
            method=RequestMethod.POST,
            url=self._url(SendRequest.resource_path),
            body=send_request.to_dict(),
        )
        return await self._call(request, _object(SendResponse.from_dict))
