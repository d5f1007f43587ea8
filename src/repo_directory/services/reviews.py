"""Creation and retrieval of listing reviews."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repo_directory.models import Listing, Review
from repo_directory.services.errors import NotFoundError, ReviewValidationError, StoreError

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_review(content: str, rating: int) -> None:
    """Reject blank content and ratings outside 1..5 (0 means "not chosen")."""
    if not content.strip():
        raise ReviewValidationError("Review content must not be empty")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ReviewValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


def create_review(
    db: Session,
    *,
    listing_id: int,
    author_id: str,
    content: str,
    rating: int,
) -> Review:
    """Store a new review for ``listing_id``."""
    validate_review(content, rating)
    if db.get(Listing, listing_id) is None:
        raise NotFoundError("Repo not found")

    review = Review(repo_id=listing_id, user_id=author_id, content=content, rating=rating)
    db.add(review)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to store review for repo %s: %s", listing_id, exc)
        raise StoreError("Failed to submit review", details=str(exc)) from exc
    db.refresh(review)
    logger.info("Review %s (%s stars) added to repo %s", review.id, rating, listing_id)
    return review


def list_reviews(db: Session, listing_id: int) -> Sequence[Review]:
    """Return reviews of ``listing_id``, newest first."""
    return db.scalars(
        select(Review)
        .where(Review.repo_id == listing_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    ).all()
