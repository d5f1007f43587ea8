"""Domain exceptions raised by the service layer."""

from __future__ import annotations

from typing import Any


class DirectoryError(RuntimeError):
    """Base exception for all Repo Directory failures.

    Carries a user-facing message and an optional details payload.
    """

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class SubmissionValidationError(DirectoryError):
    """A submission is missing required fields or has an unknown type."""


class ListValidationError(DirectoryError):
    """A list name is blank."""


class ReviewValidationError(DirectoryError):
    """A review has blank content or a rating outside 1..5."""


class AuthenticationError(DirectoryError):
    """Credentials or tokens were rejected."""


class NotFoundError(DirectoryError):
    """The requested row does not exist or is not visible to the caller."""


class StoreError(DirectoryError):
    """The data store rejected an operation."""


class RecordShapeError(DirectoryError):
    """A store row does not have the shape its typed record expects."""
