"""Async HTTP client for the Repo Directory API.

The client is constructed explicitly and owns its ``httpx.AsyncClient``; it
keeps a :class:`~repo_directory.mirror.ListingMirror` of the last fetched
sections so that saves can update counts optimistically.

Example:
    async with DirectoryClient("http://localhost:4000") as client:
        await client.sign_in("me@example.com", "secret123")
        sets = await client.fetch_listings(search="fastapi")
        await client.save_listing(sets.new[0].id)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

import httpx

from repo_directory.mirror import ListingMirror
from repo_directory.schemas.listing import (
    AnnotatedListing,
    ListingRecord,
    ListingSets,
    ListingWindowResponse,
)
from repo_directory.schemas.lists import ListRecord, MembershipState, SavedListingRecord, SaveResult
from repo_directory.schemas.review import ReviewRecord
from repo_directory.schemas.user import SessionResponse, UserRecord
from repo_directory.services.errors import ListValidationError
from repo_directory.services.reviews import validate_review
from repo_directory.services.submission import parse_submission

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class DirectoryClientError(RuntimeError):
    """Raised for transport failures and non-2xx responses."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", None
    if isinstance(body, dict):
        message = body.get("detail") or body.get("error") or body.get("message")
        return str(message or f"HTTP {response.status_code}"), body.get("details")
    return f"HTTP {response.status_code}", body


class DirectoryClient:
    """Typed wrapper around the Repo Directory HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.mirror = ListingMirror()
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def __aenter__(self) -> DirectoryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = await self._http.request(method, path, json=json, params=query, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise DirectoryClientError(f"Network error: {exc}") from exc

        if response.is_error:
            message, details = _error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise DirectoryClientError(message, status_code=response.status_code, details=details)
        if not response.content:
            return None
        return response.json()

    # Authentication

    async def sign_up(self, email: str, password: str, username: str | None = None) -> SessionResponse:
        data = await self._request(
            "POST",
            "/api/v1/auth/signup",
            json={"email": email, "password": password, "username": username},
        )
        session = SessionResponse.model_validate(data)
        self.token = session.access_token
        return session

    async def sign_in(self, email: str, password: str) -> SessionResponse:
        data = await self._request(
            "POST", "/api/v1/auth/signin", json={"email": email, "password": password}
        )
        session = SessionResponse.model_validate(data)
        self.token = session.access_token
        return session

    async def sign_out(self) -> None:
        if self.token:
            await self._request("POST", "/api/v1/auth/signout")
        self.token = None

    async def session(self) -> UserRecord:
        return UserRecord.model_validate(await self._request("GET", "/api/v1/auth/session"))

    # Listings

    async def fetch_listings(
        self,
        search: str | None = None,
        listing_type: Literal["GitHub", "Replit"] | None = None,
    ) -> ListingSets:
        """Fetch both sections and refresh the local mirror."""
        data = await self._request(
            "GET", "/api/v1/listings/", params={"search": search or None, "type": listing_type}
        )
        sets = ListingSets.model_validate(data)
        self.mirror.replace(sets)
        return sets

    async def listing_window(
        self,
        section: Literal["featured", "new"],
        start: int = 0,
        search: str | None = None,
        listing_type: Literal["GitHub", "Replit"] | None = None,
    ) -> ListingWindowResponse:
        data = await self._request(
            "GET",
            f"/api/v1/listings/{section}/window",
            params={"start": start, "search": search or None, "type": listing_type},
        )
        return ListingWindowResponse.model_validate(data)

    async def get_listing(self, listing_id: int) -> AnnotatedListing:
        return AnnotatedListing.model_validate(
            await self._request("GET", f"/api/v1/listings/{listing_id}")
        )

    async def all_repos(self) -> list[ListingRecord]:
        data = await self._request("GET", "/repos")
        return [ListingRecord.model_validate(row) for row in data]

    async def submit_repo(self, submission: Mapping[str, Any]) -> ListingRecord:
        """Validate locally, then submit; invalid input never reaches the network."""
        parsed = parse_submission(submission)
        data = await self._request("POST", "/submit-repo", json=parsed.model_dump())
        return ListingRecord.model_validate(data["repo"])

    async def save_listing(self, listing_id: int) -> SaveResult:
        """Bookmark a listing, updating the mirrored upvote count optimistically."""
        pending = self.mirror.apply_optimistic_upvote(listing_id)
        try:
            data = await self._request("POST", f"/api/v1/listings/{listing_id}/save")
        except DirectoryClientError:
            self.mirror.rollback(pending)
            raise
        result = SaveResult.model_validate(data)
        self.mirror.confirm(pending, result.upvotes)
        return result

    # Reviews

    async def reviews(self, listing_id: int) -> list[ReviewRecord]:
        data = await self._request("GET", f"/api/v1/listings/{listing_id}/reviews")
        return [ReviewRecord.model_validate(row) for row in data]

    async def submit_review(self, listing_id: int, content: str, rating: int) -> ReviewRecord:
        validate_review(content, rating)
        data = await self._request(
            "POST",
            f"/api/v1/listings/{listing_id}/reviews",
            json={"content": content, "rating": rating},
        )
        return ReviewRecord.model_validate(data)

    # Lists

    async def lists(self) -> list[ListRecord]:
        data = await self._request("GET", "/api/v1/lists/")
        return [ListRecord.model_validate(row) for row in data]

    async def create_list(self, name: str) -> ListRecord:
        if not name.strip():
            raise ListValidationError("List name must not be empty")
        return ListRecord.model_validate(
            await self._request("POST", "/api/v1/lists/", json={"name": name})
        )

    async def delete_list(self, list_id: int) -> None:
        await self._request("DELETE", f"/api/v1/lists/{list_id}")

    async def saved_listings(self) -> list[SavedListingRecord]:
        data = await self._request("GET", "/api/v1/lists/saved")
        return [SavedListingRecord.model_validate(row) for row in data]

    async def toggle_membership(self, list_id: int, listing_id: int) -> MembershipState:
        return MembershipState.model_validate(
            await self._request("POST", f"/api/v1/lists/{list_id}/listings/{listing_id}/toggle")
        )

    async def add_to_list(self, list_id: int, listing_id: int) -> MembershipState:
        return MembershipState.model_validate(
            await self._request("PUT", f"/api/v1/lists/{list_id}/listings/{listing_id}")
        )

    async def remove_from_list(self, list_id: int, listing_id: int) -> MembershipState:
        return MembershipState.model_validate(
            await self._request("DELETE", f"/api/v1/lists/{list_id}/listings/{listing_id}")
        )

    async def health(self) -> bool:
        data = await self._request("GET", "/health")
        return data.get("status") == "ok"
