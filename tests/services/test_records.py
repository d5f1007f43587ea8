# tests/services/test_records.py
"""Tests for typed record adapters."""

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from repo_directory.schemas.listing import ListingRecord
from repo_directory.services.errors import RecordShapeError
from repo_directory.services.records import to_record


def _row(**overrides):
    values = {
        "id": 1,
        "name": "repo",
        "description": "desc",
        "type": "GitHub",
        "url": "https://github.com/acme/repo",
        "tags": ["a"],
        "language": "Python",
        "icon": None,
        "owner": "acme",
        "upvotes": 0,
        "user_id": None,
        "created_at": datetime(2024, 1, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_to_record_accepts_well_formed_row() -> None:
    """Rows with the expected shape validate."""
    record = to_record(ListingRecord, _row())
    assert record.name == "repo"


def test_to_record_normalizes_legacy_tag_strings() -> None:
    """Tags stored as a comma string come back as a list."""
    record = to_record(ListingRecord, _row(tags="web, api"))
    assert record.tags == ["web", "api"]


@pytest.mark.parametrize("overrides", [{"upvotes": -1}, {"type": "GitLab"}, {"name": None}])
def test_to_record_rejects_malformed_rows(overrides) -> None:
    """Rows with wrong values raise RecordShapeError."""
    with pytest.raises(RecordShapeError) as excinfo:
        to_record(ListingRecord, _row(**overrides))
    assert excinfo.value.details
