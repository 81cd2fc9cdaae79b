"""Avatar Loader - concurrent avatar fetch + decode with per-avatar fallback.

Invariants:
    - One task per contributor, joined with asyncio.gather before drawing
    - Each avatar download is bounded as a whole by timeout_seconds
    - Every per-avatar failure (HTTP, transport, timeout, decode) becomes an
      AvatarPlaceholder; it never cancels siblings and never propagates
    - Results are returned in input order, one per contributor

Design Decisions:
    - Failure converted to a value inside each task: gather never sees an exception
    - Decoded eagerly (Image.load) so corrupt bytes fail here, not mid-draw
"""

import asyncio
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx
from PIL import Image

from contributors_image.core.domain_types import Contributor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedAvatar:
    login: str
    image: Image.Image


@dataclass(frozen=True)
class AvatarPlaceholder:
    """Drawn instead of an avatar that could not be fetched or decoded."""
    login: str
    initial: str
    reason: str


AvatarResult = LoadedAvatar | AvatarPlaceholder


class AvatarLoader:
    """Fetches avatar images over a caller-owned httpx.AsyncClient."""

    def __init__(self, http: httpx.AsyncClient, timeout_seconds: float = 10.0):
        self.http = http
        self.timeout_seconds = timeout_seconds

    async def load_all(
        self, contributors: Sequence[Contributor],
    ) -> list[AvatarResult]:
        """Load every avatar concurrently; failures come back as placeholders."""
        results = await asyncio.gather(
            *(self.load(c) for c in contributors),
        )
        failed = sum(isinstance(r, AvatarPlaceholder) for r in results)
        if failed:
            logger.warning(
                f"{failed}/{len(results)} avatars replaced by placeholders",
                extra={"failed_avatars": failed},
            )
        return list(results)

    async def load(self, contributor: Contributor) -> AvatarResult:
        try:
            async with asyncio.timeout(self.timeout_seconds):
                response = await self.http.get(
                    contributor.avatar_url,
                    timeout=self.timeout_seconds,
                    follow_redirects=True,
                )
            response.raise_for_status()
            image = _decode(response.content)
        except Exception as e:
            logger.warning(
                f"Failed to load avatar for {contributor.login}: {e}",
                extra={"login": contributor.login},
            )
            return AvatarPlaceholder(
                login=contributor.login,
                initial=contributor.initial,
                reason=type(e).__name__,
            )
        return LoadedAvatar(login=contributor.login, image=image)


def _decode(content: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(content))
    image.load()
    return image.convert("RGBA")
