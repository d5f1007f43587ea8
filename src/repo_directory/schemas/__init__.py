"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and
validation, and double as the typed records that store rows are converted
into before they reach the rest of the application.
"""

from .listing import (
    AnnotatedListing,
    ListingRecord,
    ListingSets,
    ListingWindowResponse,
    RepoSubmission,
    StarSlotsOut,
    SubmissionResponse,
)
from .lists import ListCreate, ListRecord, MembershipState, SavedListingRecord, SaveResult
from .review import ReviewCreate, ReviewRecord
from .user import Credentials, SessionResponse, SignUpRequest, UserRecord

__all__ = [
    "AnnotatedListing", "ListingRecord", "ListingSets", "ListingWindowResponse",
    "RepoSubmission", "StarSlotsOut", "SubmissionResponse",
    "ListCreate", "ListRecord", "MembershipState", "SavedListingRecord", "SaveResult",
    "ReviewCreate", "ReviewRecord",
    "Credentials", "SessionResponse", "SignUpRequest", "UserRecord",
]
