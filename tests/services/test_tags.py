# tests/services/test_tags.py
"""Tests for tag normalization."""

import doctest

import pytest

from repo_directory.services import tags
from repo_directory.services.tags import normalize_tags


def test_comma_string_is_split_and_trimmed() -> None:
    """Pieces are trimmed and empty pieces dropped."""
    assert normalize_tags("go, rust ,  ") == ["go", "rust"]
    assert normalize_tags("a, b ,,c") == ["a", "b", "c"]


def test_order_and_duplicates_are_kept() -> None:
    """Normalization does not sort or deduplicate."""
    assert normalize_tags("b,a,b") == ["b", "a", "b"]


@pytest.mark.parametrize("value", ["", "   ", ",,", " , , "])
def test_blank_strings_yield_empty_list(value: str) -> None:
    """Strings without content produce no tags."""
    assert normalize_tags(value) == []


def test_sequences_pass_through_unchanged() -> None:
    """Already structured input is not trimmed element-wise."""
    assert normalize_tags(["x", " y "]) == ["x", " y "]
    assert normalize_tags(("a", "b")) == ["a", "b"]


@pytest.mark.parametrize("value", [None, 42, {"a": 1}])
def test_other_values_yield_empty_list(value: object) -> None:
    """Unsupported shapes normalize to an empty list."""
    assert normalize_tags(value) == []


def test_normalize_is_idempotent() -> None:
    """Normalizing the output of a string normalization changes nothing."""
    once = normalize_tags(" python ,web,, api ")
    assert normalize_tags(once) == once
    assert normalize_tags(",".join(once)) == once


def test_docstring_examples() -> None:
    """The examples in the module docstrings hold."""
    result = doctest.testmod(tags)
    assert result.failed == 0
