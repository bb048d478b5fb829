"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from typing import Callable

import httpx
import pytest

from app.core.config import ThreadsSettings


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def threads_settings() -> ThreadsSettings:
    return ThreadsSettings(
        client_id="app-123",
        client_secret="shh-secret",
        redirect_uri="https://example.com/api/threads/callback",
        graph_base_url="https://graph.threads.test",
    )


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


def _build_graph(
    *,
    token_status: int = 200,
    token_body: object = None,
    me_status: int = 200,
    me_body: object = None,
) -> RecordingTransport:
    """Build a transport answering the token and ``/me`` endpoints."""
    token_body = {"access_token": "tok123", "user_id": 42} if token_body is None else token_body
    me_body = {"id": "42", "username": "alice"} if me_body is None else me_body

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/access_token":
            return httpx.Response(token_status, json=token_body)
        if request.url.path == "/v1.0/me":
            return httpx.Response(me_status, json=me_body)
        return httpx.Response(404, json={"error": "unexpected path"})

    return RecordingTransport(handler)


@pytest.fixture
def threads_graph() -> Callable[..., RecordingTransport]:
    """Factory fixture for a fake Threads Graph API."""
    return _build_graph
