"""HTTP Client Dependency - one httpx.AsyncClient per request.

Invariants:
    - Client is closed when the request finishes (async with)
    - No client is shared across requests: no cross-request state
    - Per-call timeouts are set by the callers (GitHub fetch, avatar fetch)

Design Decisions:
    - FastAPI dependency with yield: tests swap it via dependency_overrides
"""

from typing import AsyncGenerator

import httpx

from contributors_image.config import get_settings


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """FastAPI dependency for outbound HTTP (GitHub API + avatar hosts)."""
    settings = get_settings()
    async with httpx.AsyncClient(
        timeout=settings.github_timeout_seconds,
    ) as client:
        yield client
