"""SQLAlchemy models for the Repo Directory application."""

from .listing import LISTING_TYPES, Listing
from .lists import ListMembership, SavedList
from .review import Review
from .user import User

__all__ = [
    "LISTING_TYPES", "Listing",
    "ListMembership", "SavedList",
    "Review",
    "User",
]
