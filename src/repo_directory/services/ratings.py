"""Derived ratings computed from review rows at read time."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import NamedTuple

TOTAL_STARS = 5


class StarSlots(NamedTuple):
    """Number of filled and empty stars to render."""

    full: int
    empty: int


def aggregate_rating(ratings: Iterable[int]) -> float | None:
    """Return the mean of ``ratings``, or ``None`` when there are none.

    ``None`` means "no rating" and is distinct from zero. The result is not
    rounded; rendering granularity is decided by :func:`star_slots`.
    """
    values = list(ratings)
    if not values:
        return None
    return sum(values) / len(values)


def star_slots(rating: float | None) -> StarSlots | None:
    """Project a derived rating onto the fixed row of five stars."""
    if rating is None:
        return None
    full = max(0, min(TOTAL_STARS, math.floor(rating)))
    return StarSlots(full=full, empty=TOTAL_STARS - full)
