"""Tests for HTTP-based adapters."""

import asyncio
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from photo_editor.adapters.google_oauth_client import (
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    HttpxGoogleOAuthClient,
)


def _client(handler) -> HttpxGoogleOAuthClient:  # type: ignore[no-untyped-def]
    return HttpxGoogleOAuthClient(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://testserver/auth/google/callback",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_authorization_url_carries_client_and_state() -> None:
    client = HttpxGoogleOAuthClient.create(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://testserver/auth/google/callback",
    )

    url = client.authorization_url("state-1", ("openid", "profile", "email"))
    asyncio.run(client.close())

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    assert parsed.netloc == "accounts.google.com"
    assert params["client_id"] == ["client-id"]
    assert params["redirect_uri"] == ["http://testserver/auth/google/callback"]
    assert params["response_type"] == ["code"]
    assert params["scope"] == ["openid profile email"]
    assert params["state"] == ["state-1"]


def test_exchange_code_posts_form() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == GOOGLE_TOKEN_URL
        form = parse_qs(request.content.decode())
        assert form["code"] == ["auth-code"]
        assert form["grant_type"] == ["authorization_code"]
        assert form["client_secret"] == ["client-secret"]
        return httpx.Response(200, json={"access_token": "provider-token"})

    client = _client(handler)

    tokens = asyncio.run(client.exchange_code("auth-code"))

    assert tokens == {"access_token": "provider-token"}


def test_exchange_code_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant"})

    client = _client(handler)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.exchange_code("bad-code"))


def test_fetch_profile_sends_bearer_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == GOOGLE_USERINFO_URL
        assert request.headers["Authorization"] == "Bearer provider-token"
        return httpx.Response(200, json={"sub": "google-1", "name": "Ada"})

    client = _client(handler)

    profile = asyncio.run(client.fetch_profile("provider-token"))

    assert profile == {"sub": "google-1", "name": "Ada"}
