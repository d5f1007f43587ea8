"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .listings import router as listings_router
from .lists import router as lists_router
from .reviews import router as reviews_router
from .submissions import router as submissions_router

__all__ = [
    "auth_router",
    "listings_router",
    "lists_router",
    "reviews_router",
    "submissions_router",
]
