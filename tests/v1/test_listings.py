# mypy: ignore-errors
# tests/v1/test_listings.py
"""Tests for listing browse, window and save endpoints."""

from unittest.mock import patch

from fastapi import status

from repo_directory.services.errors import StoreError


def test_browse_returns_both_sections(client, make_listing) -> None:
    """Featured is oldest first and new is newest first."""
    names = [make_listing(name=f"item-{i}").name for i in range(3)]
    response = client.get("/api/v1/listings/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [item["name"] for item in data["featured"]] == names
    assert [item["name"] for item in data["new"]] == list(reversed(names))


def test_browse_search_and_type(client, make_listing) -> None:
    """Search and type filters are applied to both sections."""
    make_listing(name="Flask Kit", type="Replit")
    make_listing(name="flask-admin", type="GitHub")
    make_listing(name="rails", type="Replit")

    response = client.get("/api/v1/listings/", params={"search": "flask", "type": "Replit"})
    data = response.json()
    assert [item["name"] for item in data["featured"]] == ["Flask Kit"]
    assert [item["name"] for item in data["new"]] == ["Flask Kit"]


def test_browse_rejects_unknown_type(client) -> None:
    """Only known listing types may be requested."""
    response = client.get("/api/v1/listings/", params={"type": "GitLab"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_window_navigation(client, make_listing) -> None:
    """Windows over a 12-item section clamp to the last full page."""
    for _ in range(14):
        make_listing()

    first = client.get("/api/v1/listings/featured/window").json()
    assert first["start"] == 0
    assert first["total"] == 12
    assert len(first["items"]) == 6
    assert first["has_next"] is True
    assert first["has_previous"] is False
    assert first["next_start"] == 6

    last = client.get("/api/v1/listings/featured/window", params={"start": 9}).json()
    assert last["start"] == 6
    assert last["has_next"] is False
    assert last["previous_start"] == 0


def test_window_unknown_section(client) -> None:
    """Only featured and new sections exist."""
    response = client.get("/api/v1/listings/popular/window")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_read_listing_with_rating(client, test_listing, add_review) -> None:
    """A single listing carries its derived rating and star slots."""
    for rating in (3, 4, 5):
        add_review(test_listing, rating)
    response = client.get(f"/api/v1/listings/{test_listing.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["average_rating"] == 4.0
    assert data["stars"] == {"full": 4, "empty": 1}


def test_read_listing_not_found(client) -> None:
    """Unknown listings return 404."""
    response = client.get("/api/v1/listings/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Repo not found"


def test_save_listing(client, auth_token, make_listing) -> None:
    """Saving bookmarks the listing and reports the store's upvote count."""
    listing = make_listing(upvotes=2)
    response = client.post(f"/api/v1/listings/{listing.id}/save", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["upvotes"] == 3
    assert data["newly_saved"] is True

    saved = client.get("/api/v1/lists/saved", headers=auth_token).json()
    assert [item["id"] for item in saved] == [listing.id]
    assert saved[0]["list_ids"] == [data["list_id"]]


def test_save_listing_requires_auth(client, test_listing) -> None:
    """Anonymous callers cannot save."""
    response = client.post(f"/api/v1/listings/{test_listing.id}/save")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_save_listing_not_found(client, auth_token) -> None:
    """Saving an unknown listing returns 404."""
    response = client.post("/api/v1/listings/999/save", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_save_listing_store_failure(client, auth_token, test_listing) -> None:
    """Store failures are reported with a retry message."""
    with patch(
        "repo_directory.services.lists.ListMembershipManager.save_listing",
        side_effect=StoreError("Failed to upvote repo"),
    ):
        response = client.post(f"/api/v1/listings/{test_listing.id}/save", headers=auth_token)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Failed to save repo. Please try again."
