"""Adapters converting ORM rows into typed records."""

from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from repo_directory.models import Listing
from repo_directory.schemas.listing import AnnotatedListing, ListingRecord, StarSlotsOut
from repo_directory.services.errors import RecordShapeError
from repo_directory.services.ratings import aggregate_rating, star_slots

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def to_record(record_type: type[RecordT], row: object) -> RecordT:
    """Validate ``row`` against ``record_type``.

    Raises:
        RecordShapeError: If the row is missing fields or holds values of
            the wrong type.
    """
    try:
        return record_type.model_validate(row)
    except ValidationError as exc:
        logger.error("Malformed %s row: %s", record_type.__name__, exc)
        raise RecordShapeError(
            f"Malformed {record_type.__name__} row",
            details=exc.errors(include_url=False),
        ) from exc


def annotate_listing(listing: Listing) -> AnnotatedListing:
    """Attach the derived rating of ``listing`` computed from its reviews."""
    base = to_record(ListingRecord, listing)
    ratings = [review.rating for review in listing.reviews]
    average = aggregate_rating(ratings)
    slots = star_slots(average)
    return AnnotatedListing(
        **base.model_dump(),
        average_rating=average,
        review_count=len(ratings),
        stars=StarSlotsOut(full=slots.full, empty=slots.empty) if slots else None,
    )
