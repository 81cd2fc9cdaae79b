"""Contributor Schemas - Pydantic models for the GitHub payload and the JSON API.

Invariants:
    - ContributorRecord validates each upstream entry (login non-empty, contributions >= 0)
    - Unknown upstream fields ignored (GitHub returns ~20 per entry)
    - ContributorsRequest accepts the front-end's camelCase repoUrl
    - Success/failure envelopes serialize with camelCase aliases (embedCode)

Design Decisions:
    - TypeAdapter for the list payload: validates straight from bytes
    - Failure envelope has no images field at all (not null)
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter

from contributors_image.core.domain_types import Contributor


class ContributorRecord(BaseModel):
    """One entry of GET /repos/{owner}/{repo}/contributors."""
    model_config = ConfigDict(extra="ignore")

    login: str = Field(min_length=1)
    avatar_url: str
    contributions: int = Field(ge=0)
    html_url: str

    def to_domain(self) -> Contributor:
        return Contributor(
            login=self.login,
            avatar_url=self.avatar_url,
            contributions=self.contributions,
            html_url=self.html_url,
        )

    @classmethod
    def from_domain(cls, contributor: Contributor) -> "ContributorRecord":
        return cls(
            login=contributor.login,
            avatar_url=contributor.avatar_url,
            contributions=contributor.contributions,
            html_url=contributor.html_url,
        )


ContributorList = TypeAdapter(list[ContributorRecord])


class ContributorsRequest(BaseModel):
    """POST /api/contributors body."""
    repo_url: StrictStr = Field(alias="repoUrl", min_length=1)


class RenderedImages(BaseModel):
    png: str
    svg: str


class ContributorsSuccess(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    contributors: list[ContributorRecord]
    images: RenderedImages
    embed_code: str = Field(alias="embedCode")


class ContributorsFailure(BaseModel):
    success: Literal[False] = False
    error: str
