"""Submission endpoints kept at the unversioned paths existing clients call."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from repo_directory.schemas.listing import ListingRecord, SubmissionResponse
from repo_directory.services.errors import RecordShapeError, StoreError, SubmissionValidationError
from repo_directory.services.listings import list_all_listings
from repo_directory.services.records import to_record
from repo_directory.services.submission import create_listing, parse_submission

from ..dependencies import OptionalUserIdDep, SessionDep

router = APIRouter(tags=["submissions"])
logger = logging.getLogger(__name__)


@router.post(
    "/submit-repo",
    status_code=status.HTTP_201_CREATED,
    response_model=SubmissionResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Invalid submission or store rejection"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Unexpected failure"},
    },
)
async def submit_repo(
    payload: Annotated[dict[str, Any], Body()],
    db: SessionDep,
    user_id: OptionalUserIdDep,
) -> JSONResponse:
    """Accept a new listing.

    A bearer token, when present and valid, only attributes the submission
    to its user; anonymous submissions are accepted.
    """
    logger.info("Received repo submission: %s", payload)
    try:
        submission = parse_submission(payload)
    except SubmissionValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message, "details": exc.details, "data": jsonable_encoder(payload)},
        )

    try:
        listing = create_listing(db, submission, user_id)
        repo = to_record(ListingRecord, listing)
    except StoreError as exc:
        data = {**submission.model_dump(), "user_id": user_id}
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message, "details": exc.details, "data": jsonable_encoder(data)},
        )
    except Exception as exc:
        logger.exception("Server error while submitting repo")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "details": str(exc)},
        )

    body = SubmissionResponse(message="Repo submitted successfully", repo=repo)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=jsonable_encoder(body))


@router.get("/repos", response_model=list[ListingRecord])
async def list_repos(db: SessionDep) -> Any:
    """Return every listing row."""
    try:
        return [to_record(ListingRecord, listing) for listing in list_all_listings(db)]
    except (SQLAlchemyError, RecordShapeError) as exc:
        logger.error("Error fetching repos: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Error fetching repos", "error": str(exc)},
        )
