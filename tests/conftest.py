from __future__ import annotations

import os

# Must be set before social_oauth.core.config builds its settings
os.environ.setdefault("ENV", "test")

import httpx
import pytest

from social_oauth.oauth import OAuthHttpClient


@pytest.fixture
def mock_http():
    """Build an OAuthHttpClient backed by httpx.MockTransport.

    Returns ``(client, requests)``; every request the client sends is
    appended to ``requests`` before *handler* answers it.
    """
    opened: list[httpx.Client] = []

    def _make(handler):
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        raw = httpx.Client(transport=httpx.MockTransport(_record))
        opened.append(raw)
        return OAuthHttpClient(raw), requests

    yield _make
    for raw in opened:
        raw.close()


@pytest.fixture
def unused_http():
    """HTTP client that fails the test if any request is sent."""

    def _fail(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"Unexpected HTTP request: {request.method} {request.url}")

    raw = httpx.Client(transport=httpx.MockTransport(_fail))
    yield OAuthHttpClient(raw)
    raw.close()
