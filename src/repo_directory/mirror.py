"""Client-side mirror of fetched listing sections.

The mirror is advisory: the store is the source of truth, and every cached
upvote count is reconciled against the value the store reports.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import count

from repo_directory.schemas.listing import AnnotatedListing, ListingSets


@dataclass(frozen=True)
class PendingUpvote:
    """Handle for an optimistic increment awaiting the store's answer."""

    token: int
    listing_id: int


class ListingMirror:
    """Cached featured/new sections with optimistic upvote reconciliation.

    ``apply_optimistic_upvote`` bumps the displayed count immediately.
    ``confirm`` adopts the count reported by the store and ``rollback``
    discards the increment. Either way the displayed count becomes the
    highest store value seen plus any increments still in flight.
    """

    def __init__(self) -> None:
        self.featured: list[AnnotatedListing] = []
        self.new: list[AnnotatedListing] = []
        self._known: dict[int, int] = {}
        self._pending: dict[int, set[int]] = defaultdict(set)
        self._tokens = count(1)

    def replace(self, sets: ListingSets) -> None:
        """Swap in freshly fetched sections; fetched counts become the known values."""
        self.featured = list(sets.featured)
        self.new = list(sets.new)
        self._known = {item.id: item.upvotes for item in self._items()}
        self._pending.clear()

    def _items(self) -> list[AnnotatedListing]:
        return [*self.featured, *self.new]

    def upvotes(self, listing_id: int) -> int | None:
        """Displayed upvote count of ``listing_id``, if it is cached."""
        for item in self._items():
            if item.id == listing_id:
                return item.upvotes
        return None

    def _render(self, listing_id: int) -> None:
        if listing_id not in self._known:
            return
        value = self._known[listing_id] + len(self._pending[listing_id])
        for item in self._items():
            if item.id == listing_id:
                item.upvotes = value

    def apply_optimistic_upvote(self, listing_id: int) -> PendingUpvote:
        pending = PendingUpvote(token=next(self._tokens), listing_id=listing_id)
        self._pending[listing_id].add(pending.token)
        self._render(listing_id)
        return pending

    def confirm(self, pending: PendingUpvote, store_value: int) -> None:
        """Settle ``pending`` with the count the store reported.

        Upvotes never decrease in the store, so a response that arrives
        after a newer one cannot lower the known value.
        """
        self._pending[pending.listing_id].discard(pending.token)
        if pending.listing_id in self._known:
            self._known[pending.listing_id] = max(self._known[pending.listing_id], store_value)
        self._render(pending.listing_id)

    def rollback(self, pending: PendingUpvote) -> None:
        """Drop ``pending`` and fall back to the last known store value."""
        self._pending[pending.listing_id].discard(pending.token)
        self._render(pending.listing_id)
