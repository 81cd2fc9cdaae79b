"""GitHub Contributors Client - fetch, truncation and error mapping.

Tests cover:
    - Source order preserved, truncated to max_contributors
    - Token sent only when configured; bounded per_page
    - 404 / 403 / 429 / 5xx / timeout / transport / bad payload mapping
    - 204 (empty repository) → empty list
    - One deadline for the whole exchange, including a slowly streamed body
"""

import json
import time

import httpx
import pytest

from contributors_image.core.domain_types import RepositoryRef
from contributors_image.core.errors import (
    RateLimitedError,
    RepositoryNotFoundError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from contributors_image.infrastructure.github_client import GitHubContributorsClient
from tests.services.mock_github import (
    API_URL,
    dripping_transport,
    github_contributors,
)

ACME = RepositoryRef("acme", "widgets")


def _client(http, **kwargs) -> GitHubContributorsClient:
    return GitHubContributorsClient(http, api_url=API_URL, **kwargs)


async def test_returns_contributors_in_source_order(http, fake_github):
    fake_github.add_repo("acme/widgets", github_contributors(3))
    contributors = await _client(http).fetch_contributors(ACME)
    assert [c.login for c in contributors] == ["dev0", "dev1", "dev2"]
    assert contributors[0].contributions == 1000
    assert contributors[0].html_url == "https://github.com/dev0"


async def test_does_not_resort_locally(http, fake_github):
    entries = github_contributors(3)
    entries.reverse()  # ascending contributions
    fake_github.add_repo("acme/widgets", entries)
    contributors = await _client(http).fetch_contributors(ACME)
    assert [c.login for c in contributors] == ["dev2", "dev1", "dev0"]


async def test_truncates_to_thirty_preserving_order(http, fake_github):
    fake_github.add_repo("acme/widgets", github_contributors(45))
    contributors = await _client(http).fetch_contributors(ACME)
    assert len(contributors) == 30
    assert [c.login for c in contributors] == [f"dev{i}" for i in range(30)]


async def test_request_headers_without_token(http, fake_github):
    fake_github.add_repo("acme/widgets", github_contributors(1))
    await _client(http).fetch_contributors(ACME)
    request = fake_github.api_requests()[0]
    assert request.url.path == "/repos/acme/widgets/contributors"
    assert request.url.params["per_page"] == "30"
    assert request.headers["Accept"] == "application/vnd.github.v3+json"
    assert request.headers["User-Agent"] == "Contributors-Image-Generator"
    assert "Authorization" not in request.headers


async def test_token_attached_when_configured(http, fake_github):
    fake_github.add_repo("acme/widgets", github_contributors(1))
    await _client(http, token="ghp_secret").fetch_contributors(ACME)
    assert fake_github.api_requests()[0].headers["Authorization"] == "token ghp_secret"


async def test_empty_repository_returns_empty_list(http, fake_github):
    fake_github.add_repo("acme/widgets", [])
    assert await _client(http).fetch_contributors(ACME) == []


async def test_404_maps_to_not_found(http, fake_github):
    with pytest.raises(RepositoryNotFoundError) as exc_info:
        await _client(http).fetch_contributors(RepositoryRef("acme", "missing"))
    assert exc_info.value.context.upstream_status == 404


@pytest.mark.parametrize("status_code", [403, 429])
async def test_forbidden_and_too_many_requests_map_to_rate_limited(
    http, fake_github, status_code,
):
    fake_github.statuses["acme/widgets"] = status_code
    with pytest.raises(RateLimitedError) as exc_info:
        await _client(http).fetch_contributors(ACME)
    assert exc_info.value.context.upstream_status == status_code


async def test_server_error_maps_to_upstream_unavailable(http, fake_github):
    fake_github.statuses["acme/widgets"] = 502
    with pytest.raises(UpstreamUnavailableError):
        await _client(http).fetch_contributors(ACME)


async def test_timeout_maps_to_timeout(http, fake_github):
    fake_github.timeouts.add("acme/widgets")
    with pytest.raises(UpstreamTimeoutError):
        await _client(http, timeout_seconds=10).fetch_contributors(ACME)


async def test_transport_failure_maps_to_upstream_unavailable():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as http:
        with pytest.raises(UpstreamUnavailableError):
            await _client(http).fetch_contributors(ACME)


async def test_unexpected_payload_maps_to_upstream_unavailable():
    def weird(request):
        return httpx.Response(200, json={"message": "surprise"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(weird)) as http:
        with pytest.raises(UpstreamUnavailableError):
            await _client(http).fetch_contributors(ACME)


async def test_no_retry_on_failure(http, fake_github):
    fake_github.statuses["acme/widgets"] = 500
    with pytest.raises(UpstreamUnavailableError):
        await _client(http).fetch_contributors(ACME)
    assert len(fake_github.api_requests()) == 1


async def test_slow_body_hits_overall_deadline():
    body = json.dumps(github_contributors(1)).encode()
    transport = dripping_transport(body, delay=0.05)
    async with httpx.AsyncClient(transport=transport) as http:
        started = time.monotonic()
        with pytest.raises(UpstreamTimeoutError):
            await _client(http, timeout_seconds=0.2).fetch_contributors(ACME)
        elapsed = time.monotonic() - started
    assert elapsed < 1.5
