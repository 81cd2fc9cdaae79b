"""Service test fixtures - fake GitHub over httpx.MockTransport + FastAPI test client.

Invariants:
    - No test touches the network: GitHub API and avatar host are one MockTransport
    - get_http_client and get_settings overridden per test, cleared afterwards
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from contributors_image.config import Settings, get_settings
from contributors_image.infrastructure.http_client import get_http_client
from contributors_image.main import app
from tests.services.mock_github import API_URL, FakeGitHub


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def settings():
    return Settings(
        github_api_url=API_URL,
        github_token=None,
        deploy_url="contrib.example.com",
    )


@pytest.fixture
async def http(fake_github):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_github.handler),
    ) as client:
        yield client


@pytest.fixture
async def client(http, settings):
    """FastAPI test client with outbound HTTP and settings overridden."""
    app.dependency_overrides[get_http_client] = lambda: http
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
