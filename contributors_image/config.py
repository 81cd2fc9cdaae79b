"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) - single instance per process
    - Missing GITHUB_TOKEN or deploy URL never breaks rendering

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - deploy_url reads the hosting platform's variables (VERCEL_URL first)
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # GitHub
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    github_timeout_seconds: float = 10.0
    avatar_timeout_seconds: float = 10.0
    max_contributors: int = Field(30, ge=1, le=100)

    @field_validator("github_token", mode="before")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        """An empty GITHUB_TOKEN= line in .env means 'no token'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Embed code
    deploy_url: str = Field(
        "localhost:3000",
        validation_alias=AliasChoices(
            "deploy_url", "vercel_url", "next_public_vercel_url",
        ),
    )

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
