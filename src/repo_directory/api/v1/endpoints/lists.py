"""Endpoints for user lists (tags) and their memberships."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from repo_directory.models import SavedList
from repo_directory.schemas.lists import ListCreate, ListRecord, MembershipState, SavedListingRecord
from repo_directory.services.errors import ListValidationError, NotFoundError, StoreError
from repo_directory.services.lists import ListMembershipManager

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/lists", tags=["lists"])


def _owned_list_or_404(manager: ListMembershipManager, owner_id: str, list_id: int) -> SavedList:
    try:
        return manager.get_owned_list(owner_id, list_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc


def _store_failure(action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}. Please try again.",
    )


@router.get("/", response_model=list[ListRecord])
async def read_lists(current_user: CurrentUserDep, db: SessionDep) -> list[SavedList]:
    """List the caller's lists ordered by name."""
    return ListMembershipManager(db).lists_for(current_user.id)


@router.post("/", response_model=ListRecord, status_code=status.HTTP_201_CREATED)
async def create_list(
    list_data: ListCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SavedList:
    """Create a list for the caller."""
    try:
        return ListMembershipManager(db).create_list(current_user.id, list_data.name)
    except ListValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except StoreError as exc:
        raise _store_failure("create tag") from exc


@router.delete(
    "/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_list(list_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete one of the caller's lists and its memberships."""
    manager = ListMembershipManager(db)
    saved_list = _owned_list_or_404(manager, current_user.id, list_id)
    try:
        manager.delete_list(saved_list)
    except StoreError as exc:
        raise _store_failure("delete tag") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/saved", response_model=list[SavedListingRecord])
async def read_saved_listings(current_user: CurrentUserDep, db: SessionDep) -> list[SavedListingRecord]:
    """Return listings in the caller's default list with their list ids."""
    return ListMembershipManager(db).saved_listings(current_user.id)


@router.post("/{list_id}/listings/{listing_id}/toggle", response_model=MembershipState)
async def toggle_listing(
    list_id: int,
    listing_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipState:
    """Add the listing to the list if absent, remove it otherwise."""
    manager = ListMembershipManager(db)
    saved_list = _owned_list_or_404(manager, current_user.id, list_id)
    try:
        member = manager.toggle_membership(saved_list, listing_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except StoreError as exc:
        raise _store_failure("update tag") from exc
    return MembershipState(list_id=list_id, listing_id=listing_id, member=member)


@router.put("/{list_id}/listings/{listing_id}", response_model=MembershipState)
async def add_listing(
    list_id: int,
    listing_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipState:
    """Put the listing into the list; repeating the call is harmless."""
    manager = ListMembershipManager(db)
    saved_list = _owned_list_or_404(manager, current_user.id, list_id)
    try:
        manager.add_membership(saved_list, listing_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    return MembershipState(list_id=list_id, listing_id=listing_id, member=True)


@router.delete("/{list_id}/listings/{listing_id}", response_model=MembershipState)
async def remove_listing(
    list_id: int,
    listing_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipState:
    """Take the listing out of the list."""
    manager = ListMembershipManager(db)
    saved_list = _owned_list_or_404(manager, current_user.id, list_id)
    try:
        manager.remove_membership(saved_list, listing_id)
    except StoreError as exc:
        raise _store_failure("remove tag from repo") from exc
    return MembershipState(list_id=list_id, listing_id=listing_id, member=False)
