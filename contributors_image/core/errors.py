"""Error Hierarchy - typed, categorized exceptions for every failure mode of the service.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries user_message: the exact text shown by the JSON endpoint
    - http_status is what the direct image endpoint answers with
    - Per-avatar failures never become one of these (recovered in the avatar loader)

Design Decisions:
    - Single hierarchy with ContributorsImageError base: one FastAPI handler covers all
    - ErrorContext as dataclass: owner/repo travel with the error into logs
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RATE_LIMIT = "rate_limit"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    RENDERING = "rendering"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    owner: str | None = None
    repo: str | None = None
    upstream_status: int | None = None


class ContributorsImageError(Exception):
    """Base exception for all contributors-image errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.user_message = user_message or message


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidInputError(ContributorsImageError):
    """Malformed repository URL or missing parameters."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class RepositoryNotFoundError(ContributorsImageError):
    """Upstream reports the repository does not exist (or is private)."""
    def __init__(self, owner: str, repo: str, context: ErrorContext | None = None):
        super().__init__(
            f"Repository '{owner}/{repo}' not found",
            "REPOSITORY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
            user_message="Repository not found or is private",
        )


class RateLimitedError(ContributorsImageError):
    """Upstream refused the request (403 forbidden or 429 too many requests)."""
    def __init__(self, upstream_status: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.upstream_status = upstream_status
        super().__init__(
            f"GitHub API rate limit exceeded (HTTP {upstream_status})",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, ctx, 429,
            user_message="GitHub API rate limit exceeded. Please try again later.",
        )


class NoContributorsError(ContributorsImageError):
    """Repository exists but has no contributors to render."""
    def __init__(self, owner: str, repo: str, context: ErrorContext | None = None):
        super().__init__(
            f"No contributors found for '{owner}/{repo}'",
            "NO_CONTRIBUTORS", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
            user_message="No contributors found for this repository",
        )


# ─── Upstream / Infrastructure Errors (500-level) ───────────────

class UpstreamTimeoutError(ContributorsImageError):
    """Contributor fetch exceeded its bounded timeout."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"GitHub API did not answer within {timeout_seconds}s",
            "UPSTREAM_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 500,
            user_message="Request timeout. Please try again.",
        )


class UpstreamUnavailableError(ContributorsImageError):
    """Any other transport or upstream failure."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"GitHub API unavailable: {message}",
            "UPSTREAM_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
            user_message=(
                "Failed to fetch contributors. "
                "Please check the repository URL and try again."
            ),
        )


class RenderFailureError(ContributorsImageError):
    """Surface or markup construction failed (not avatar-specific)."""
    def __init__(self, image_format: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to render {image_format} image: {message}",
            "RENDER_FAILURE", ErrorCategory.RENDERING,
            ErrorSeverity.CRITICAL, context, 500,
            user_message="Failed to generate image",
        )
        self.image_format = image_format
