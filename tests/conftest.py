"""
Plunk Test Configuration
------------------------
Shared fixtures for all tests.

Network isolation: every client built here talks to an
``httpx.MockTransport``, never to the real API.
"""

import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from plunk.api.client import Plunk
from plunk.api.transport import HttpExecutor, Request, Response, TokenAuthorizer

API_KEY = "sk_test_123"
BASE_URL = "https://api.test.local"


class MockPlunkServer:
    """
    Queue of canned responses served through httpx.MockTransport.

    Every request the client sends is recorded for inspection.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: List[Tuple[int, Any]] = []

    def reply(self, status_code: int, body: Any = None) -> None:
        """Queue a response for the next request."""
        self._responses.append((status_code, body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self._responses.pop(0) if self._responses else (200, {})
        if isinstance(body, (bytes, str)):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


class RecordingExecutor:
    """Executor stand-in that records calls and returns a fixed response."""

    def __init__(self, response: Optional[Response] = None):
        self.response = response or Response(status_code=200, body={})
        self.calls: List[Request] = []
        self.closed = False

    async def execute(self, request: Request, authorizer: TokenAuthorizer) -> Response:
        self.calls.append(authorizer.authorize(request))
        return self.response

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def server():
    """A fresh mock Plunk server."""
    return MockPlunkServer()


@pytest_asyncio.fixture
async def executor(server):
    """HttpExecutor wired to the mock server, closed after the test."""
    executor = HttpExecutor(timeout=5.0, transport=httpx.MockTransport(server.handler))
    yield executor
    await executor.aclose()


@pytest.fixture
def client(executor):
    """Plunk client talking to the mock server."""
    return Plunk(api_key=API_KEY, base_url=BASE_URL, executor=executor)


@pytest.fixture
def recording_executor():
    return RecordingExecutor()


@pytest.fixture
def offline_client(recording_executor):
    """Plunk client whose executor never touches the network."""
    return Plunk(api_key=API_KEY, base_url=BASE_URL, executor=recording_executor)


@pytest.fixture
def contact_body():
    """A contact payload as returned by the API."""
    return {
        "id": "c_1",
        "email": "ada@example.com",
        "subscribed": True,
        "data": {"plan": "pro", "seats": 3},
        "createdAt": "2024-01-02T03:04:05.000Z",
        "updatedAt": "2024-01-03T03:04:05.000Z",
    }
