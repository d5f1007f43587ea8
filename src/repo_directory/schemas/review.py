"""Review-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReviewCreate(BaseModel):
    """Schema for submitting a review; range checks happen in the service."""

    content: str
    rating: int


class ReviewRecord(BaseModel):
    """Typed view of a ``reviews`` row."""

    id: int
    repo_id: int
    user_id: str | None
    rating: int
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
