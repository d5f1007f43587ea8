"""Query helpers for browsing, searching and upvoting listings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session, selectinload

from repo_directory.core.settings import settings
from repo_directory.models import Listing
from repo_directory.schemas.listing import AnnotatedListing, ListingSets
from repo_directory.services.errors import NotFoundError
from repo_directory.services.records import annotate_listing

__all__ = [
    "fetch_listing_sets",
    "get_listing",
    "increment_upvotes",
    "list_all_listings",
    "search_listings",
]


def search_listings(
    db: Session,
    search: str | None = None,
    *,
    newest_first: bool,
    limit: int | None = None,
    listing_type: str | None = None,
) -> list[Listing]:
    """Return listings ordered by creation time, optionally filtered.

    Args:
        db: Database session.
        search: Case-insensitive substring matched against name, description
            or owner. Empty or ``None`` applies no filter.
        newest_first: Sort descending by creation time when true.
        limit: Maximum number of rows.
        listing_type: Restrict to ``GitHub`` or ``Replit`` listings.
    """
    stmt = select(Listing).options(selectinload(Listing.reviews))

    if search:
        stmt = stmt.where(
            or_(
                Listing.name.icontains(search, autoescape=True),
                Listing.description.icontains(search, autoescape=True),
                Listing.owner.icontains(search, autoescape=True),
            )
        )
    if listing_type:
        stmt = stmt.where(Listing.type == listing_type)

    # Secondary key keeps ordering stable for rows created in the same instant.
    if newest_first:
        stmt = stmt.order_by(Listing.created_at.desc(), Listing.id.desc())
    else:
        stmt = stmt.order_by(Listing.created_at.asc(), Listing.id.asc())

    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def fetch_listing_sets(
    db: Session,
    search: str | None = None,
    listing_type: str | None = None,
) -> ListingSets:
    """Return the featured (oldest first) and new (newest first) sections."""
    limit = settings.listing_section_limit
    featured = search_listings(
        db, search, newest_first=False, limit=limit, listing_type=listing_type
    )
    new = search_listings(db, search, newest_first=True, limit=limit, listing_type=listing_type)
    return ListingSets(
        featured=[annotate_listing(listing) for listing in featured],
        new=[annotate_listing(listing) for listing in new],
    )


def get_listing(db: Session, listing_id: int) -> AnnotatedListing:
    """Return one listing with its derived rating."""
    listing = db.scalars(
        select(Listing).options(selectinload(Listing.reviews)).where(Listing.id == listing_id)
    ).first()
    if listing is None:
        raise NotFoundError("Repo not found")
    return annotate_listing(listing)


def list_all_listings(db: Session) -> Sequence[Listing]:
    """Return every listing row."""
    return db.scalars(select(Listing).order_by(Listing.id)).all()


def increment_upvotes(db: Session, listing_id: int) -> int:
    """Increment the upvote counter in the store and return the new value.

    The increment is evaluated by the database, so concurrent saves never
    lose updates.
    """
    new_count = db.execute(
        update(Listing)
        .where(Listing.id == listing_id)
        .values(upvotes=Listing.upvotes + 1)
        .returning(Listing.upvotes)
    ).scalar_one_or_none()
    if new_count is None:
        raise NotFoundError("Repo not found")
    return int(new_count)
