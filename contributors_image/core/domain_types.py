"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - Contributor is immutable once fetched (frozen dataclass)
    - Contributor.contributions is never negative
    - Image formats encoded as an Enum - no raw string matching

Design Decisions:
    - Dataclasses in core/, Pydantic only at the HTTP boundary (schemas/)
    - str Enum: serializes into query strings and JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Contributor:
    """One entry of a repository's contributor list, in source order."""
    login: str
    avatar_url: str
    contributions: int
    html_url: str

    def __post_init__(self):
        if not self.login:
            raise ValueError("login cannot be empty")
        if self.contributions < 0:
            raise ValueError("contributions cannot be negative")

    @property
    def initial(self) -> str:
        """First letter of the login, uppercased (placeholder glyph)."""
        return self.login[0].upper()

    @property
    def tooltip(self) -> str:
        return f"{self.login} - {self.contributions} contributions"


@dataclass(frozen=True)
class RepositoryRef:
    """owner/repo pair identifying a GitHub repository."""
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


# ─── Enums ───────────────────────────────────────────────────────

class ImageFormat(str, Enum):
    """Output formats served by the image endpoint."""
    PNG = "png"
    SVG = "svg"

    @property
    def media_type(self) -> str:
        return "image/svg+xml" if self is ImageFormat.SVG else "image/png"

    @classmethod
    def parse(cls, value: str | None) -> "ImageFormat":
        """Anything other than 'svg' falls back to PNG."""
        if value and value.lower() == cls.SVG.value:
            return cls.SVG
        return cls.PNG


def gallery_title(ref: RepositoryRef) -> str:
    """Header text drawn above the avatar grid."""
    return f"Contributors to {ref.full_name}"
