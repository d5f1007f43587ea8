"""Fixed-size window sliding over an already fetched sequence."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

ItemT = TypeVar("ItemT")

DEFAULT_WINDOW_SIZE = 6


class ListingWindow(Generic[ItemT]):
    """Window of ``size`` items over ``items``.

    The start index always stays within ``[0, max(0, len(items) - size)]``,
    so a full window is shown whenever the sequence holds at least ``size``
    items. With 14 items and a size of 6, repeated :meth:`next` calls move
    the start 0 -> 6 -> 8 -> 8.
    """

    def __init__(self, items: Sequence[ItemT], size: int = DEFAULT_WINDOW_SIZE, start: int = 0) -> None:
        if size < 1:
            raise ValueError("window size must be positive")
        self.items = items
        self.size = size
        self.start = self._clamp(start)

    @property
    def max_start(self) -> int:
        return max(0, len(self.items) - self.size)

    def _clamp(self, start: int) -> int:
        return max(0, min(start, self.max_start))

    @property
    def visible(self) -> list[ItemT]:
        """Items currently inside the window."""
        return list(self.items[self.start:self.start + self.size])

    @property
    def has_previous(self) -> bool:
        return self.start > 0

    @property
    def has_next(self) -> bool:
        return self.start < self.max_start

    @property
    def next_start(self) -> int:
        return self._clamp(self.start + self.size)

    @property
    def previous_start(self) -> int:
        return self._clamp(self.start - self.size)

    def next(self) -> int:
        """Advance one window and return the new start index."""
        self.start = self.next_start
        return self.start

    def previous(self) -> int:
        """Step back one window and return the new start index."""
        self.start = self.previous_start
        return self.start
