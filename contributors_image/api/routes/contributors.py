"""Contributors Routes - JSON gallery endpoint and direct image endpoint.

Invariants:
    - POST /api/contributors ALWAYS answers HTTP 200; the success flag carries
      the outcome ({success, contributors, images, embedCode} or {success, error})
    - GET /api/contributors/image answers image bytes/markup with
      Cache-Control public, max-age=3600 and an open CORS origin, or a
      plain-text error with 400/404/429/500, produced by the global error
      handlers (api/error_handlers.py)
    - Routes never contain business logic (delegate to contributor_gallery)

Design Decisions:
    - Always-200 JSON contract kept for front-end compatibility, even though
      status codes would be the REST norm
    - Body read manually (not a typed parameter): a malformed body must still
      produce {success: false}, never FastAPI's 400 validation envelope
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from contributors_image.config import Settings, get_settings
from contributors_image.core.domain_types import ImageFormat, RepositoryRef
from contributors_image.core.errors import (
    ContributorsImageError,
    InvalidInputError,
)
from contributors_image.infrastructure.http_client import get_http_client
from contributors_image.schemas.contributor import (
    ContributorRecord,
    ContributorsFailure,
    ContributorsRequest,
    ContributorsSuccess,
    RenderedImages,
)
from contributors_image.services.contributor_gallery import (
    build_gallery,
    render_repository_image,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/contributors", tags=["contributors"])

IMAGE_HEADERS = {
    "Cache-Control": "public, max-age=3600",
    "Access-Control-Allow-Origin": "*",
}
GENERIC_FETCH_ERROR = (
    "Failed to fetch contributors. Please check the repository URL and try again."
)


def _failure(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=ContributorsFailure(error=message).model_dump(),
    )


async def _read_request(request: Request) -> ContributorsRequest:
    try:
        payload = await request.json()
        return ContributorsRequest.model_validate(payload)
    except (ValueError, ValidationError):
        raise InvalidInputError("Repository URL is required", field="repoUrl")


@router.post("")
async def generate_gallery(
    request: Request,
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Fetch contributors and return PNG + SVG renderings with embed code."""
    try:
        body = await _read_request(request)
        result = await build_gallery(body.repo_url, http, settings)
    except ContributorsImageError as e:
        logger.warning(
            f"Gallery request failed: {e.message}",
            extra={
                "error_code": e.code, "path": request.url.path,
                "owner": e.context.owner, "repo": e.context.repo,
            },
        )
        return _failure(e.user_message)
    except Exception as e:
        logger.error(f"Unexpected gallery failure: {e}", exc_info=True)
        return _failure(GENERIC_FETCH_ERROR)

    response = ContributorsSuccess(
        contributors=[
            ContributorRecord.from_domain(c) for c in result.contributors
        ],
        images=RenderedImages(png=result.png_data_uri, svg=result.svg),
        embed_code=result.embed_code,
    )
    return JSONResponse(content=response.model_dump(by_alias=True))


@router.get("/image")
async def contributors_image(
    owner: str | None = Query(None),
    repo: str | None = Query(None),
    image_format: str | None = Query(None, alias="format"),
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Render one format (png default, svg) for inline embedding."""
    if not owner or not repo:
        raise InvalidInputError(
            "Missing owner or repo parameter",
            field="repo" if owner else "owner",
        )
    image = await render_repository_image(
        RepositoryRef(owner=owner, repo=repo), ImageFormat.parse(image_format),
        http, settings,
    )
    return Response(
        content=image.content, media_type=image.media_type,
        headers=IMAGE_HEADERS,
    )
