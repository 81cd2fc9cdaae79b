"""GitHub Contributors Client - fetches a repository's contributors with error mapping.

Invariants:
    - Single bounded timeout per fetch covering the whole exchange (connect
      through body), no retries (client retries)
    - 404 → RepositoryNotFoundError; 403/429 → RateLimitedError
    - httpx timeouts and the overall deadline → UpstreamTimeoutError; anything else → UpstreamUnavailableError
    - Result truncated to max_contributors, source order preserved (no re-sort)
    - Authorization header only when a token is configured

Design Decisions:
    - Wraps a caller-owned httpx.AsyncClient: one client per request, closed by
      the FastAPI dependency that created it
    - Payload validated through ContributorRecord (schemas/) before entering core/
"""

import asyncio
import logging

import httpx
from pydantic import ValidationError

from contributors_image.core.domain_types import Contributor, RepositoryRef
from contributors_image.core.errors import (
    ErrorContext,
    RateLimitedError,
    RepositoryNotFoundError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from contributors_image.schemas.contributor import ContributorList

logger = logging.getLogger(__name__)

USER_AGENT = "Contributors-Image-Generator"
_RATE_LIMIT_STATUSES = (403, 429)


class GitHubContributorsClient:
    """Reads /repos/{owner}/{repo}/contributors from the GitHub REST API."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_url: str = "https://api.github.com",
        token: str | None = None,
        timeout_seconds: float = 10.0,
        max_contributors: int = 30,
    ):
        self.http = http
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout_seconds = timeout_seconds
        self.max_contributors = max_contributors

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def fetch_contributors(self, ref: RepositoryRef) -> list[Contributor]:
        """Fetch at most max_contributors contributors, in source order."""
        context = ErrorContext(owner=ref.owner, repo=ref.repo)
        url = f"{self.api_url}/repos/{ref.owner}/{ref.repo}/contributors"
        try:
            # httpx timeouts are per phase; the deadline bounds the whole body
            async with asyncio.timeout(self.timeout_seconds):
                response = await self.http.get(
                    url,
                    headers=self._headers(),
                    params={"per_page": self.max_contributors},
                    timeout=self.timeout_seconds,
                    follow_redirects=True,
                )
        except (httpx.TimeoutException, TimeoutError):
            raise UpstreamTimeoutError(self.timeout_seconds, context=context)
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"{type(e).__name__}: {e}", context=context,
            )

        self._raise_for_status(response, ref, context)
        contributors = self._parse(response, context)
        logger.info(
            "Fetched contributors",
            extra={
                "owner": ref.owner, "repo": ref.repo,
                "contributor_count": len(contributors),
            },
        )
        return contributors

    def _raise_for_status(
        self, response: httpx.Response, ref: RepositoryRef,
        context: ErrorContext,
    ) -> None:
        """Map upstream HTTP status to domain errors."""
        status_code = response.status_code
        if status_code < 400:
            return
        context.upstream_status = status_code
        logger.warning(
            f"GitHub answered {status_code} for {ref.full_name}",
            extra={"owner": ref.owner, "repo": ref.repo, "status_code": status_code},
        )
        if status_code == 404:
            raise RepositoryNotFoundError(ref.owner, ref.repo, context=context)
        if status_code in _RATE_LIMIT_STATUSES:
            raise RateLimitedError(status_code, context=context)
        raise UpstreamUnavailableError(f"HTTP {status_code}", context=context)

    def _parse(
        self, response: httpx.Response, context: ErrorContext,
    ) -> list[Contributor]:
        # 204: repository has no commits yet
        if response.status_code == 204 or not response.content:
            return []
        try:
            records = ContributorList.validate_json(response.content)
        except ValidationError as e:
            raise UpstreamUnavailableError(
                f"unexpected payload ({e.error_count()} errors)", context=context,
            )
        return [
            record.to_domain() for record in records[: self.max_contributors]
        ]
