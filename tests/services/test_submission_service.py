# tests/services/test_submission_service.py
"""Tests for submission parsing and persistence."""

from typing import get_args
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from repo_directory.models import LISTING_TYPES, Listing
from repo_directory.schemas.listing import DEFAULT_ICON, ListingType
from repo_directory.services.errors import StoreError, SubmissionValidationError
from repo_directory.services.submission import create_listing, parse_submission


def _payload(**overrides):
    payload = {
        "name": "htmx-examples",
        "description": "Small htmx demos",
        "type": "GitHub",
        "url": "https://github.com/acme/htmx-examples",
        "tags": "go, rust ,  ",
        "language": "Go",
        "owner": "acme",
    }
    payload.update(overrides)
    return payload


def test_parse_normalizes_tag_string() -> None:
    """A comma string becomes a trimmed list."""
    submission = parse_submission(_payload())
    assert submission.tags == ["go", "rust"]


def test_parse_defaults_icon_and_ignores_unknown_fields() -> None:
    """Missing icon gets the default; unknown keys are dropped."""
    submission = parse_submission(_payload(id=99, upvotes=1000))
    assert submission.icon == DEFAULT_ICON
    assert "upvotes" not in submission.model_dump()


@pytest.mark.parametrize("field", ["name", "description", "url", "owner", "language"])
def test_parse_rejects_missing_required_field(field: str) -> None:
    """Each required field must be present."""
    payload = _payload()
    del payload[field]
    with pytest.raises(SubmissionValidationError) as excinfo:
        parse_submission(payload)
    assert excinfo.value.details[0]["field"] == field


def test_parse_rejects_blank_field() -> None:
    """Whitespace-only values count as missing."""
    with pytest.raises(SubmissionValidationError):
        parse_submission(_payload(name="   "))


def test_parse_rejects_unknown_type() -> None:
    """Only GitHub and Replit listings exist."""
    with pytest.raises(SubmissionValidationError) as excinfo:
        parse_submission(_payload(type="GitLab"))
    assert excinfo.value.details[0]["field"] == "type"


def test_create_listing_starts_with_zero_upvotes(db_session, test_user) -> None:
    """New listings are stored with zero upvotes and the submitter id."""
    listing = create_listing(db_session, parse_submission(_payload()), test_user.id)
    assert listing.id is not None
    assert listing.upvotes == 0
    assert listing.user_id == test_user.id
    assert listing.tags == ["go", "rust"]
    assert listing.created_at is not None


def test_create_listing_anonymous(db_session) -> None:
    """Submissions without an account are stored without an owner id."""
    listing = create_listing(db_session, parse_submission(_payload()), None)
    assert listing.user_id is None


def test_create_listing_wraps_store_errors(db_session) -> None:
    """Store failures surface as StoreError and nothing is persisted."""
    failure = OperationalError("INSERT INTO repos", {}, Exception("disk I/O error"))
    with patch.object(db_session, "commit", side_effect=failure):
        with pytest.raises(StoreError) as excinfo:
            create_listing(db_session, parse_submission(_payload()), None)
    assert "disk I/O error" in excinfo.value.message
    assert excinfo.value.details == "OperationalError"
    assert db_session.query(Listing).count() == 0


def test_listing_types_match_schema() -> None:
    """The stored type constraint accepts exactly the submittable types."""
    assert set(get_args(ListingType)) == set(LISTING_TYPES)


def test_store_rejects_unknown_type(db_session) -> None:
    """Rows bypassing validation still cannot hold an unknown type."""
    db_session.add(
        Listing(name="n", description="d", type="GitLab", url="u", tags=[], owner="o", upvotes=0)
    )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
