"""List (tag) related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ListCreate(BaseModel):
    """Schema for creating a list."""

    name: str


class ListRecord(BaseModel):
    """Typed view of a ``lists`` row."""

    id: int
    user_id: str
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SavedListingRecord(BaseModel):
    """A saved listing and the ids of the caller's lists that contain it."""

    id: int
    name: str
    description: str
    url: str
    list_ids: list[int] = Field(default_factory=list)


class MembershipState(BaseModel):
    """Membership of one listing in one list after a change."""

    list_id: int
    listing_id: int
    member: bool


class SaveResult(BaseModel):
    """Outcome of the bookmark action."""

    listing_id: int
    list_id: int
    upvotes: int
    newly_saved: bool
