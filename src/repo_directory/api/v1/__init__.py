"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    listings_router,
    lists_router,
    reviews_router,
    submissions_router,
)

__all__ = [
    "auth_router",
    "listings_router",
    "lists_router",
    "reviews_router",
    "submissions_router",
]
