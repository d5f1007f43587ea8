"""Review endpoints nested under listings."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, HTTPException, status

from repo_directory.models import Review
from repo_directory.schemas.review import ReviewCreate, ReviewRecord
from repo_directory.services.errors import NotFoundError, ReviewValidationError, StoreError
from repo_directory.services.reviews import create_review, list_reviews

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/listings", tags=["reviews"])


@router.get("/{listing_id}/reviews", response_model=list[ReviewRecord])
async def read_reviews(listing_id: int, db: SessionDep) -> Sequence[Review]:
    """List reviews of a listing, newest first."""
    return list_reviews(db, listing_id)


@router.post(
    "/{listing_id}/reviews",
    response_model=ReviewRecord,
    status_code=status.HTTP_201_CREATED,
)
async def submit_review(
    listing_id: int,
    review_data: ReviewCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Review:
    """Add a review to a listing."""
    try:
        return create_review(
            db,
            listing_id=listing_id,
            author_id=current_user.id,
            content=review_data.content,
            rating=review_data.rating,
        )
    except ReviewValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit review. Please try again later.",
        ) from exc
