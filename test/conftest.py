"""
Pytest configuration and fixtures for the key-issuance service.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from authkey.config import Settings
from authkey.main import create_app
from support import (
    CALLER_TOKEN,
    SUPABASE_URL,
    TAILNET,
    TAILSCALE_API,
    UpstreamRoutes,
    mock_upstream,
)


@pytest.fixture
def test_settings() -> Settings:
    """Fully configured settings."""
    return Settings(
        app_env="dev",
        supabase_url=SUPABASE_URL,
        supabase_anon_key="anon-key",
        tailscale_oauth_client_id="ts-client",
        tailscale_oauth_client_secret="ts-secret",
        tailnet_name=TAILNET,
        tailscale_api_base_url=TAILSCALE_API,
        http_timeout_seconds=7.5,
    )


@pytest.fixture
def upstream() -> Iterator[UpstreamRoutes]:
    """Outbound calls answered by respx; unconfigured routes return an empty 200."""
    with mock_upstream() as routes:
        yield routes


@pytest.fixture
def verified_operator(upstream: UpstreamRoutes) -> UpstreamRoutes:
    """Identity store answers with a verified operator row."""
    upstream.operators.mock(return_value=httpx.Response(200, json={"verified": True}))
    return upstream


@pytest.fixture
def oauth_ok(verified_operator: UpstreamRoutes) -> UpstreamRoutes:
    verified_operator.token.mock(
        return_value=httpx.Response(
            200,
            json={"access_token": "ts-access-token", "token_type": "Bearer", "expires_in": 3600},
        )
    )
    return verified_operator


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Real outbound client for unit tests of the store and provider client."""
    async with httpx.AsyncClient(timeout=5.0) as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {CALLER_TOKEN}"}
