"""
Pytest configuration and fixtures for client tests.

Provides:
- A recording httpx mock transport
- A client factory wired to that transport
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from wetrocloud import WetrocloudClient

TEST_API_KEY = "test-api-key"


# =============================================================================
# Mock Transport
# =============================================================================


@dataclass
class RecordingTransport:
    """
    Mock transport that records every request and replays a canned response.

    The response is built by `responder`, which defaults to a fixed JSON body.
    """

    status_code: int = 200
    body: str = '{"success": true}'
    responder: Optional[Callable[[httpx.Request], httpx.Response]] = None
    requests: List[httpx.Request] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)

    def last_multipart(self) -> Dict[str, str]:
        """Split the last multipart body into a name -> value mapping."""
        request = self.last_request
        boundary = request.headers["Content-Type"].split("boundary=", 1)[1]
        fields = {}
        for part in request.content.split(b"--" + boundary.encode())[1:-1]:
            head, _, value = part[2:-2].partition(b"\r\n\r\n")
            match = re.search(rb'name="([^"]+)"', head)
            assert match, f"part without name: {head!r}"
            assert b"filename=" not in head
            fields[match.group(1).decode()] = value.decode()
        return fields


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def recorder() -> RecordingTransport:
    """Provide a fresh recording transport."""
    return RecordingTransport()


@pytest.fixture
def make_client(recorder: RecordingTransport):
    """
    Factory fixture building a client bound to the recording transport.

    Usage:
        def test_something(make_client, recorder):
            recorder.body = '{"success": true}'
            client = make_client()
    """
    clients = []

    def _create(**kwargs) -> WetrocloudClient:
        kwargs.setdefault("api_key", TEST_API_KEY)
        kwargs.setdefault("transport", recorder.transport)
        client = WetrocloudClient(**kwargs)
        clients.append(client)
        return client

    yield _create

    for client in clients:
        client.close()


@pytest.fixture
def client(make_client) -> WetrocloudClient:
    """Provide a client with default settings."""
    return make_client()
