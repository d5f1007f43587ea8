"""Management of user lists (tags) and the listings they contain."""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from repo_directory.models import Listing, ListMembership, SavedList
from repo_directory.models.lists import DEFAULT_LIST_NAME
from repo_directory.schemas.lists import SavedListingRecord, SaveResult
from repo_directory.services.errors import ListValidationError, NotFoundError, StoreError
from repo_directory.services.listings import increment_upvotes

__all__ = ["ListMembershipManager"]

logger = logging.getLogger(__name__)


class ListMembershipManager:
    """Maintains the many-to-many relation between lists and listings.

    Every public method commits its own work. Multi-step flows such as
    :meth:`save_listing` are therefore not atomic: a failure part way through
    leaves the earlier steps applied, and repeating the action completes it.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the manager with a SQLAlchemy session."""
        self.session = session

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to %s: %s", action, exc)
            raise StoreError(f"Failed to {action}", details=str(exc)) from exc

    def _find_default_list(self, owner_id: str) -> SavedList | None:
        return self.session.scalars(
            select(SavedList).where(
                SavedList.user_id == owner_id,
                SavedList.name == DEFAULT_LIST_NAME,
            )
        ).first()

    def _require_listing(self, listing_id: int) -> None:
        if self.session.get(Listing, listing_id) is None:
            raise NotFoundError("Repo not found")

    def ensure_default_list(self, owner_id: str) -> SavedList:
        """Return the owner's default list, creating it on first use.

        Two concurrent callers cannot both create the list: the store holds a
        partial unique index on the default list per owner, and the loser of
        the race falls back to the row the winner inserted.
        """
        existing = self._find_default_list(owner_id)
        if existing is not None:
            return existing

        saved = SavedList(user_id=owner_id, name=DEFAULT_LIST_NAME)
        self.session.add(saved)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self._find_default_list(owner_id)
            if existing is None:
                raise StoreError("Failed to create the default list") from None
            logger.info("Default list for %s was created concurrently; reusing it", owner_id)
            return existing
        logger.info("Created default list %s for %s", saved.id, owner_id)
        return saved

    def get_owned_list(self, owner_id: str, list_id: int) -> SavedList:
        """Return ``list_id`` if it exists and belongs to ``owner_id``."""
        saved = self.session.get(SavedList, list_id)
        if saved is None or saved.user_id != owner_id:
            raise NotFoundError("List not found")
        return saved

    def lists_for(self, owner_id: str) -> list[SavedList]:
        """Return the owner's lists ordered by name."""
        return list(
            self.session.scalars(
                select(SavedList)
                .where(SavedList.user_id == owner_id)
                .order_by(SavedList.name, SavedList.id)
            )
        )

    def create_list(self, owner_id: str, name: str) -> SavedList:
        """Create a named list for ``owner_id``.

        Raises:
            ListValidationError: If ``name`` is blank.
        """
        name = name.strip()
        if not name:
            raise ListValidationError("List name must not be empty")
        if name == DEFAULT_LIST_NAME:
            return self.ensure_default_list(owner_id)

        saved = SavedList(user_id=owner_id, name=name)
        self.session.add(saved)
        self._commit("create list")
        logger.info("Created list %s (%r) for %s", saved.id, name, owner_id)
        return saved

    def delete_list(self, saved_list: SavedList) -> None:
        """Delete a list together with all of its membership rows."""
        list_id = saved_list.id
        self.session.execute(delete(ListMembership).where(ListMembership.list_id == list_id))
        self.session.delete(saved_list)
        self._commit("delete list")
        logger.info("Deleted list %s", list_id)

    def is_member(self, saved_list: SavedList, listing_id: int) -> bool:
        return self.session.get(ListMembership, (saved_list.id, listing_id)) is not None

    def add_membership(self, saved_list: SavedList, listing_id: int) -> bool:
        """Put ``listing_id`` into ``saved_list``; returns False if already there."""
        if self.is_member(saved_list, listing_id):
            return False
        self._require_listing(listing_id)
        self.session.add(ListMembership(list_id=saved_list.id, repo_id=listing_id))
        try:
            self.session.commit()
        except IntegrityError:
            # Inserted concurrently; the composite key kept a single row.
            self.session.rollback()
            return False
        return True

    def remove_membership(self, saved_list: SavedList, listing_id: int) -> bool:
        """Take ``listing_id`` out of ``saved_list``; returns False if absent."""
        result = self.session.execute(
            delete(ListMembership).where(
                ListMembership.list_id == saved_list.id,
                ListMembership.repo_id == listing_id,
            )
        )
        self._commit("remove listing from list")
        return bool(result.rowcount)

    def toggle_membership(self, saved_list: SavedList, listing_id: int) -> bool:
        """Flip membership of ``listing_id`` in ``saved_list``.

        Returns:
            The membership state after the toggle.
        """
        if self.is_member(saved_list, listing_id):
            self.remove_membership(saved_list, listing_id)
            logger.debug("Removed repo %s from list %s", listing_id, saved_list.id)
            return False
        self.add_membership(saved_list, listing_id)
        logger.debug("Added repo %s to list %s", listing_id, saved_list.id)
        return True

    def saved_listings(self, owner_id: str) -> list[SavedListingRecord]:
        """Return listings in the owner's default list with their list ids."""
        default_list = self._find_default_list(owner_id)
        if default_list is None:
            return []

        listings = self.session.scalars(
            select(Listing)
            .join(ListMembership, ListMembership.repo_id == Listing.id)
            .where(ListMembership.list_id == default_list.id)
            .order_by(Listing.id)
        ).all()
        if not listings:
            return []

        owner_list_ids = select(SavedList.id).where(SavedList.user_id == owner_id)
        rows = self.session.execute(
            select(ListMembership.repo_id, ListMembership.list_id)
            .where(
                ListMembership.list_id.in_(owner_list_ids),
                ListMembership.repo_id.in_([listing.id for listing in listings]),
            )
            .order_by(ListMembership.list_id)
        ).all()
        memberships: dict[int, list[int]] = defaultdict(list)
        for repo_id, list_id in rows:
            memberships[repo_id].append(list_id)

        return [
            SavedListingRecord(
                id=listing.id,
                name=listing.name,
                description=listing.description,
                url=listing.url,
                list_ids=memberships[listing.id],
            )
            for listing in listings
        ]

    def save_listing(self, owner_id: str, listing_id: int) -> SaveResult:
        """Bookmark a listing: upvote it and put it in the default list.

        The upvote is counted on every save, including repeated saves of an
        already bookmarked listing.
        """
        upvotes = increment_upvotes(self.session, listing_id)
        self._commit("upvote repo")

        default_list = self.ensure_default_list(owner_id)
        newly_saved = self.add_membership(default_list, listing_id)
        logger.info(
            "Repo %s saved by %s (upvotes=%s, new=%s)", listing_id, owner_id, upvotes, newly_saved
        )
        return SaveResult(
            listing_id=listing_id,
            list_id=default_list.id,
            upvotes=upvotes,
            newly_saved=newly_saved,
        )
