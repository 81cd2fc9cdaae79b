"""Contributors Image API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map errors escaping the image endpoint to plain-text statuses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - No startup resources beyond logging: HTTP clients are per request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contributors_image.api.error_handlers import register_error_handlers
from contributors_image.api.routes import contributors, health
from contributors_image.config import get_settings
from contributors_image.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if not settings.github_token:
        logger.info("GITHUB_TOKEN not set, using unauthenticated GitHub rate limits")
    logger.info("Contributors Image API started")
    yield
    logger.info("Contributors Image API shutting down")


app = FastAPI(
    title="Contributors Image API", version=health.SERVICE_VERSION,
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(contributors.router)

register_error_handlers(app)
