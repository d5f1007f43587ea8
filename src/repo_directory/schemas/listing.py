"""Listing-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repo_directory.services.tags import normalize_tags

ListingType = Literal["GitHub", "Replit"]
DEFAULT_ICON = "/icons/default.png"


class RepoSubmission(BaseModel):
    """Schema for a new listing submitted through ``POST /submit-repo``."""

    name: str
    description: str
    type: ListingType = "GitHub"
    url: str
    tags: list[str] = Field(default_factory=list)
    language: str
    icon: str = DEFAULT_ICON
    owner: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", "description", "url", "owner", "language")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @field_validator("icon", mode="before")
    @classmethod
    def _default_icon(cls, value: Any) -> Any:
        return value or DEFAULT_ICON


class ListingRecord(BaseModel):
    """Typed view of a ``repos`` row."""

    id: int
    name: str
    description: str
    type: ListingType
    url: str
    tags: list[str]
    language: str | None = None
    icon: str | None = None
    owner: str
    upvotes: int = Field(ge=0)
    user_id: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        # Legacy rows may hold a raw comma string or NULL.
        return normalize_tags(value)


class StarSlotsOut(BaseModel):
    """Filled and empty star counts for display."""

    full: int
    empty: int


class AnnotatedListing(ListingRecord):
    """Listing together with its derived rating."""

    average_rating: float | None = None
    review_count: int = 0
    stars: StarSlotsOut | None = None


class ListingSets(BaseModel):
    """The two home page sections."""

    featured: list[AnnotatedListing]
    new: list[AnnotatedListing]


class ListingWindowResponse(BaseModel):
    """One pagination window over a fetched section."""

    section: Literal["featured", "new"]
    start: int
    size: int
    total: int
    items: list[AnnotatedListing]
    has_previous: bool
    has_next: bool
    previous_start: int
    next_start: int


class SubmissionResponse(BaseModel):
    """Body returned after a successful submission."""

    message: str
    repo: ListingRecord
