"""Error Handlers - global exception handlers producing the image endpoint's plain-text errors.

Invariants:
    - The JSON gallery endpoint answers 200 for every outcome and never lets an
      error reach these handlers; the image endpoint lets every failure through
    - InvalidInputError → 400, RepositoryNotFoundError → 404,
      RateLimitedError → 429, each with its fixed plain-text body
    - Any other ContributorsImageError, and any unexpected exception, → 500
      "Failed to generate image"; internals never leak into the body

Design Decisions:
    - Two-layer handler: domain (ContributorsImageError), catch-all (Exception)
    - Kept out of main.py so the app module stays wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from contributors_image.core.errors import (
    ContributorsImageError,
    InvalidInputError,
    RateLimitedError,
    RepositoryNotFoundError,
)

logger = logging.getLogger(__name__)

IMAGE_FAILURE_TEXT = "Failed to generate image"
_CLIENT_ERROR_TEXT = {
    RepositoryNotFoundError: "Repository not found",
    RateLimitedError: "GitHub API rate limit exceeded",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(ContributorsImageError)
    async def contributors_image_error_handler(
        request: Request, exc: ContributorsImageError,
    ):
        """Translate domain errors into the plain-text status contract."""
        status_code, text = _plain_text_for(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "status_code": status_code,
                "owner": exc.context.owner, "repo": exc.context.repo,
            },
        )
        return PlainTextResponse(text, status_code=status_code)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return PlainTextResponse(
            IMAGE_FAILURE_TEXT,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _plain_text_for(exc: ContributorsImageError) -> tuple[int, str]:
    if isinstance(exc, InvalidInputError):
        return exc.http_status, exc.message
    for error_type, text in _CLIENT_ERROR_TEXT.items():
        if isinstance(exc, error_type):
            return exc.http_status, text
    return status.HTTP_500_INTERNAL_SERVER_ERROR, IMAGE_FAILURE_TEXT
