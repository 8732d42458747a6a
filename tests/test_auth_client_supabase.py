"""Tests for the Supabase auth client against a mocked transport."""

import json

import httpx
import pytest

from shared.clients.auth.AuthClientManager import AuthClientManager
from shared.clients.auth.supabase.AuthClientSupabase import AuthClientSupabase

SESSION_BODY = {
    "access_token": "jwt-token",
    "token_type": "bearer",
    "expires_in": 3600,
    "refresh_token": "refresh-token",
    "user": {"id": "8d0c5f4e", "email": "clerk@example.org", "role": "authenticated"},
}


async def booted_client(helper_config, handler) -> AuthClientSupabase:
    client = AuthClientSupabase(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(handler))
    return client


def test_manager_builds_supabase_client(helper_config):
    assert isinstance(AuthClientManager(helper_config=helper_config).get_client(), AuthClientSupabase)


@pytest.mark.asyncio
async def test_sign_in_returns_session(helper_config):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=SESSION_BODY)

    client = await booted_client(helper_config, handler)
    result = await client.do_sign_in("clerk@example.org", "secret")

    assert result.ok
    assert result.session.access_token == "jwt-token"
    assert result.session.user.email == "clerk@example.org"
    request = seen[0]
    assert request.url.path == "/auth/v1/token"
    assert request.url.params["grant_type"] == "password"
    assert json.loads(request.content) == {"email": "clerk@example.org", "password": "secret"}


@pytest.mark.asyncio
async def test_sign_in_failure_message_is_verbatim(helper_config):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

    client = await booted_client(helper_config, handler)
    result = await client.do_sign_in("clerk@example.org", "wrong")

    assert not result.ok
    assert result.error == "Invalid login credentials"


@pytest.mark.asyncio
async def test_sign_in_network_error_becomes_result(helper_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = await booted_client(helper_config, handler)
    result = await client.do_sign_in("clerk@example.org", "secret")

    assert result.error == "connection refused"


@pytest.mark.asyncio
async def test_get_user_resolves_token(helper_config):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=SESSION_BODY["user"])

    client = await booted_client(helper_config, handler)
    user = await client.do_get_user("jwt-token")

    assert user.id == "8d0c5f4e"
    assert seen[0].headers["authorization"] == "Bearer jwt-token"


@pytest.mark.asyncio
async def test_get_user_with_expired_token_returns_none(helper_config):
    client = await booted_client(helper_config, lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))

    assert await client.do_get_user("expired") is None


@pytest.mark.asyncio
async def test_sign_out_tolerates_invalid_token(helper_config):
    client = await booted_client(helper_config, lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))

    await client.do_sign_out("expired")
