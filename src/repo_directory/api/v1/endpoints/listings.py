"""Listing browse, search and bookmark endpoints."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, HTTPException, Query, status

from repo_directory.core.settings import settings
from repo_directory.schemas.listing import (
    AnnotatedListing,
    ListingSets,
    ListingType,
    ListingWindowResponse,
)
from repo_directory.schemas.lists import SaveResult
from repo_directory.services.errors import NotFoundError, StoreError
from repo_directory.services.listings import fetch_listing_sets, get_listing
from repo_directory.services.lists import ListMembershipManager
from repo_directory.services.pagination import ListingWindow

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/listings", tags=["listings"])

SearchQuery = Annotated[str | None, Query(max_length=200, description="Matches name, description or owner")]
TypeQuery = Annotated[ListingType | None, Query(alias="type", description="GitHub or Replit")]


@router.get("/", response_model=ListingSets)
async def browse_listings(
    db: SessionDep,
    search: SearchQuery = None,
    listing_type: TypeQuery = None,
) -> ListingSets:
    """Return the featured and new sections, optionally filtered."""
    return fetch_listing_sets(db, search=search, listing_type=listing_type)


@router.get("/{section}/window", response_model=ListingWindowResponse)
async def listing_window(
    section: Literal["featured", "new"],
    db: SessionDep,
    search: SearchQuery = None,
    listing_type: TypeQuery = None,
    start: Annotated[int, Query(ge=0)] = 0,
) -> ListingWindowResponse:
    """Return one page-sized window of a section."""
    sets = fetch_listing_sets(db, search=search, listing_type=listing_type)
    items = sets.featured if section == "featured" else sets.new
    window = ListingWindow(items, size=settings.listing_window_size, start=start)
    return ListingWindowResponse(
        section=section,
        start=window.start,
        size=window.size,
        total=len(items),
        items=window.visible,
        has_previous=window.has_previous,
        has_next=window.has_next,
        previous_start=window.previous_start,
        next_start=window.next_start,
    )


@router.get("/{listing_id}", response_model=AnnotatedListing)
async def read_listing(listing_id: int, db: SessionDep) -> AnnotatedListing:
    """Return a single listing with its derived rating."""
    try:
        return get_listing(db, listing_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc


@router.post("/{listing_id}/save", response_model=SaveResult)
async def save_listing(
    listing_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SaveResult:
    """Upvote a listing and add it to the caller's default list."""
    manager = ListMembershipManager(db)
    try:
        return manager.save_listing(current_user.id, listing_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save repo. Please try again.",
        ) from exc
