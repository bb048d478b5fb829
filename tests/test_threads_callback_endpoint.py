try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import httpx
import pytest

from app.clients import ThreadsOAuthClient
from app.core.config import ConfigurationError, get_threads_settings
from app.main import app
from app.services import ThreadsCallbackService


@pytest.fixture()
def graph_override(threads_settings, threads_graph):
    from app import dependencies

    transports = []

    def install(**graph_kwargs):
        transport = threads_graph(**graph_kwargs)
        transports.append(transport)
        service = ThreadsCallbackService(
            ThreadsOAuthClient(threads_settings, transport=transport)
        )
        app.dependency_overrides[dependencies.get_threads_callback_service] = lambda: service
        return transport

    yield install

    app.dependency_overrides.clear()


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    )


@pytest.mark.anyio
async def test_health_reports_environment():
    async with _client() as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.anyio
async def test_callback_success_hides_access_token(graph_override):
    transport = graph_override(
        token_body={"access_token": "tok123"},
        me_body={"id": "42", "username": "alice"},
    )

    async with _client() as client:
        response = await client.get("/api/threads/callback", params={"code": "abc"})

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["threads_user"] == {"id": "42", "username": "alice"}
    assert "access_token is NOT returned" in data["note"]
    assert "tok123" not in response.text
    assert response.headers["cache-control"] == "no-store"
    assert transport.paths() == ["/oauth/access_token", "/v1.0/me"]


@pytest.mark.anyio
@pytest.mark.parametrize("params", [{}, {"code": ""}, {"state": "xyz"}])
async def test_callback_without_code_makes_no_outbound_call(graph_override, params):
    transport = graph_override()

    async with _client() as client:
        response = await client.get("/api/threads/callback", params=params)

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "missing_code"}
    assert transport.requests == []


@pytest.mark.anyio
async def test_callback_token_failure(graph_override):
    transport = graph_override(
        token_status=400,
        token_body={"error": {"message": "Invalid code", "code": 100}, "fbtrace_id": "abc"},
    )

    async with _client() as client:
        response = await client.get("/api/threads/callback", params={"code": "abc"})

    assert response.status_code == 400
    assert response.json() == {
        "ok": False,
        "step": "token_exchange_failed",
        "error": {"message": "Invalid code", "code": 100},
    }
    assert "fbtrace_id" not in response.text
    assert transport.paths() == ["/oauth/access_token"]


@pytest.mark.anyio
async def test_callback_profile_failure(graph_override):
    graph_override(me_status=500, me_body={"error": "server_error"})

    async with _client() as client:
        response = await client.get("/api/threads/callback", params={"code": "abc"})

    assert response.status_code == 400
    assert response.json() == {"ok": False, "step": "me_failed", "error": "server_error"}


@pytest.mark.anyio
async def test_callback_reports_configuration_error(monkeypatch):
    from app import dependencies

    def _unconfigured():
        raise ConfigurationError(["THREADS_APP_SECRET"])

    app.dependency_overrides[dependencies.get_threads_callback_service] = _unconfigured
    try:
        async with _client() as client:
            response = await client.get("/api/threads/callback", params={"code": "abc"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "configuration_error"}


@pytest.mark.anyio
async def test_callback_with_missing_environment(monkeypatch, tmp_path):
    from app.dependencies.clients import get_threads_oauth_client

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("THREADS_APP_SECRET", raising=False)
    get_threads_settings.cache_clear()
    get_threads_oauth_client.cache_clear()
    try:
        async with _client() as client:
            response = await client.get("/api/threads/callback", params={"code": "abc"})
    finally:
        get_threads_settings.cache_clear()
        get_threads_oauth_client.cache_clear()

    assert response.status_code == 500
    assert response.json()["error"] == "configuration_error"
    assert "test-app-id" not in response.text


@pytest.mark.anyio
async def test_callback_rejects_repeated_code(graph_override):
    transport = graph_override()

    async with _client() as client:
        response = await client.get("/api/threads/callback?code=a&code=b")

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "missing_code"}
    assert transport.requests == []
