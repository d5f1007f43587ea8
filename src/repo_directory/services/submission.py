"""Validation and persistence of new listing submissions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repo_directory.db.time import utcnow
from repo_directory.models import Listing
from repo_directory.schemas.listing import RepoSubmission
from repo_directory.services.errors import StoreError, SubmissionValidationError

logger = logging.getLogger(__name__)


def parse_submission(payload: Mapping[str, Any]) -> RepoSubmission:
    """Validate a raw submission body.

    Tags are normalized as part of validation, so a comma string such as
    ``"go, rust ,  "`` arrives as ``["go", "rust"]``.

    Raises:
        SubmissionValidationError: If a required field is missing or blank,
            or ``type`` is not one of the supported listing types.
    """
    try:
        return RepoSubmission.model_validate(dict(payload))
    except ValidationError as exc:
        details = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in exc.errors(include_url=False, include_context=False)
        ]
        raise SubmissionValidationError("Invalid submission", details=details) from exc


def create_listing(db: Session, submission: RepoSubmission, user_id: str | None) -> Listing:
    """Insert a validated submission and return the stored row.

    Args:
        db: Session used for the insert.
        submission: Validated submission.
        user_id: Submitting account, or ``None`` for anonymous submissions.

    Raises:
        StoreError: If the store rejects the row.
    """
    listing = Listing(
        **submission.model_dump(),
        upvotes=0,
        user_id=user_id,
        created_at=utcnow(),
    )
    logger.info("Inserting listing %r submitted by %s", submission.name, user_id or "anonymous")
    try:
        db.add(listing)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store rejected listing %r: %s", submission.name, exc)
        raise StoreError(
            str(getattr(exc, "orig", None) or exc),
            details=type(exc).__name__,
        ) from exc
    db.refresh(listing)
    return listing
