"""Contributor Gallery - request-level orchestration for both access paths.

Invariants:
    - Every call re-fetches and re-renders: no cache, no shared state
    - build_gallery never returns partial results: all of contributors, PNG,
      SVG and embed code, or a ContributorsImageError
    - Empty contributor list: build_gallery raises NoContributorsError,
      render_repository_image degenerates to a header-only image
    - PANEL_STYLE for the JSON path, BADGE_STYLE for the image endpoint

Design Decisions:
    - Takes the httpx client and Settings as arguments: routes own the lifetimes
"""

import logging
from dataclasses import dataclass

import httpx

from contributors_image.config import Settings
from contributors_image.core.domain_types import (
    Contributor,
    ImageFormat,
    RepositoryRef,
    gallery_title,
)
from contributors_image.core.embed_code import compose_embed, resolve_base_url
from contributors_image.core.errors import (
    ErrorContext,
    InvalidInputError,
    NoContributorsError,
)
from contributors_image.core.render_style import BADGE_STYLE, PANEL_STYLE
from contributors_image.core.repo_url import parse_github_url
from contributors_image.core.vector_renderer import render_vector
from contributors_image.infrastructure.avatar_loader import AvatarLoader
from contributors_image.infrastructure.github_client import GitHubContributorsClient
from contributors_image.services.raster_renderer import (
    encode_data_uri,
    render_raster,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GalleryResult:
    """Everything the JSON endpoint returns on success."""
    contributors: list[Contributor]
    png_data_uri: str
    svg: str
    embed_code: str


@dataclass(frozen=True)
class RenderedImage:
    content: bytes
    media_type: str


def _github_client(http: httpx.AsyncClient, settings: Settings) -> GitHubContributorsClient:
    return GitHubContributorsClient(
        http,
        api_url=settings.github_api_url,
        token=settings.github_token,
        timeout_seconds=settings.github_timeout_seconds,
        max_contributors=settings.max_contributors,
    )


def _avatar_loader(http: httpx.AsyncClient, settings: Settings) -> AvatarLoader:
    return AvatarLoader(http, timeout_seconds=settings.avatar_timeout_seconds)


async def build_gallery(
    repo_url: str, http: httpx.AsyncClient, settings: Settings,
) -> GalleryResult:
    """Fetch, render both formats and compose embed code for a repo URL."""
    ref = parse_github_url(repo_url)
    if ref is None:
        raise InvalidInputError(
            "Invalid GitHub repository URL", field="repoUrl",
        )

    contributors = await _github_client(http, settings).fetch_contributors(ref)
    if not contributors:
        raise NoContributorsError(
            ref.owner, ref.repo,
            context=ErrorContext(owner=ref.owner, repo=ref.repo),
        )

    title = gallery_title(ref)
    png = await render_raster(
        contributors, title, _avatar_loader(http, settings), PANEL_STYLE,
    )
    svg = render_vector(contributors, title, PANEL_STYLE)
    embed = compose_embed(
        ref.owner, ref.repo, repo_url.strip(),
        resolve_base_url(settings.deploy_url),
    )
    logger.info(
        "Gallery generated",
        extra={
            "owner": ref.owner, "repo": ref.repo,
            "contributor_count": len(contributors),
        },
    )
    return GalleryResult(
        contributors=contributors,
        png_data_uri=encode_data_uri(png),
        svg=svg,
        embed_code=embed,
    )


async def render_repository_image(
    ref: RepositoryRef,
    image_format: ImageFormat,
    http: httpx.AsyncClient,
    settings: Settings,
) -> RenderedImage:
    """Fetch contributors and render a single format for the image endpoint."""
    contributors = await _github_client(http, settings).fetch_contributors(ref)
    title = gallery_title(ref)
    if image_format is ImageFormat.SVG:
        content = render_vector(contributors, title, BADGE_STYLE).encode("utf-8")
    else:
        content = await render_raster(
            contributors, title, _avatar_loader(http, settings), BADGE_STYLE,
        )
    logger.info(
        "Image generated",
        extra={
            "owner": ref.owner, "repo": ref.repo,
            "image_format": image_format.value,
            "contributor_count": len(contributors),
        },
    )
    return RenderedImage(content=content, media_type=image_format.media_type)
