"""Tests for the HTTP session provider using httpx's mock transport."""

import httpx
import pytest

from board_api.adapters.identity.base import SessionUser
from board_api.adapters.identity.http_provider import HttpSessionProvider
from board_api.core.errors import ProviderAppError


def _provider(handler) -> HttpSessionProvider:
    return HttpSessionProvider("https://auth.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_live_session_maps_user() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(
            200,
            json={
                "session": {"id": "s1"},
                "user": {"id": "u1", "name": "Alice", "email": "alice@example.com", "role": "admin"},
            },
        )

    provider = _provider(handler)
    user = await provider.get_session_user("tok")
    await provider.aclose()

    assert user == SessionUser(id="u1", name="Alice", email="alice@example.com", role="admin")
    assert seen == {"path": "/api/auth/get-session", "auth": "Bearer tok"}


@pytest.mark.asyncio
async def test_null_body_means_no_session() -> None:
    provider = _provider(lambda request: httpx.Response(200, content=b"null"))
    assert await provider.get_session_user("tok") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403, 404])
async def test_rejecting_status_means_no_session(status_code: int) -> None:
    provider = _provider(lambda request: httpx.Response(status_code))
    assert await provider.get_session_user("tok") is None


@pytest.mark.asyncio
async def test_server_error_raises_provider_error() -> None:
    provider = _provider(lambda request: httpx.Response(503))

    with pytest.raises(ProviderAppError) as exc_info:
        await provider.get_session_user("tok")

    assert exc_info.value.code == "auth_provider_error"


@pytest.mark.asyncio
async def test_transport_failure_raises_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    provider = _provider(handler)

    with pytest.raises(ProviderAppError) as exc_info:
        await provider.get_session_user("tok")

    assert exc_info.value.code == "auth_provider_unavailable"


@pytest.mark.asyncio
async def test_invalid_json_raises_provider_error() -> None:
    provider = _provider(lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(ProviderAppError) as exc_info:
        await provider.get_session_user("tok")

    assert exc_info.value.code == "auth_provider_bad_response"
