"""Tag list normalization shared by request validation and persistence."""

from __future__ import annotations

from typing import Any


def normalize_tags(value: Any) -> list[str]:
    """Coerce a submitted tags value into an ordered list of strings.

    A comma-separated string is split, each piece trimmed, and empty pieces
    dropped; order and duplicates are kept. A list or tuple is taken as
    already structured and passed through without per-element trimming.
    Anything else yields an empty list.

    >>> normalize_tags("a, b ,,c")
    ['a', 'b', 'c']
    >>> normalize_tags(["x", " y "])
    ['x', ' y ']
    """
    if isinstance(value, str):
        return [piece.strip() for piece in value.split(",") if piece.strip()]
    if isinstance(value, list | tuple):
        return list(value)
    return []
