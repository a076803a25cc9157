"""
Shared fixtures for fetch_request tests.
"""

import httpx
import pytest

from fetch_request import config as fetch_config


@pytest.fixture(autouse=True)
def isolated_default_client(monkeypatch):
    """Keep tests from sharing (or creating) a real default client."""
    monkeypatch.delenv(fetch_config.TRACE_ENV_VAR, raising=False)
    previous = fetch_config.set_default_client(None)
    yield
    current = fetch_config.set_default_client(previous)
    if current is not None:
        current.close()


@pytest.fixture
def echo_url_transport():
    """Transport answering every request with its own URL as the body."""
    return httpx.MockTransport(lambda request: httpx.Response(200, text=str(request.url)))


@pytest.fixture
def echo_body_transport():
    """Transport answering with the request body it received."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=request.content,
            headers={"content-type": request.headers.get("content-type", "application/octet-stream")},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def recorded_requests():
    """List that record_transport appends each request to."""
    return []


@pytest.fixture
def record_transport(recorded_requests):
    """Transport recording requests and answering with a JSON summary."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "url": str(request.url),
                "body": request.content.decode("utf-8"),
            },
        )

    return httpx.MockTransport(handler)

