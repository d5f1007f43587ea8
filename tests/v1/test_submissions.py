# mypy: ignore-errors
# tests/v1/test_submissions.py
"""Tests for the unversioned submission endpoints."""

from unittest.mock import patch

from fastapi import status
from sqlalchemy.exc import IntegrityError

from repo_directory.core.security import create_access_token
from repo_directory.models import Listing


def _payload(**overrides):
    payload = {
        "name": "replit-flask",
        "description": "Flask template for Replit",
        "type": "Replit",
        "url": "https://replit.com/@acme/flask",
        "tags": "python, flask ,  ",
        "language": "Python",
        "owner": "acme",
    }
    payload.update(overrides)
    return payload


def test_submit_repo_success(client, db_session) -> None:
    """A valid submission is stored with normalized tags and zero upvotes."""
    response = client.post("/submit-repo", json=_payload())
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["message"] == "Repo submitted successfully"
    assert data["repo"]["tags"] == ["python", "flask"]
    assert data["repo"]["upvotes"] == 0
    assert data["repo"]["user_id"] is None
    assert db_session.query(Listing).count() == 1


def test_submit_repo_attributes_authenticated_user(client, auth_token, test_user) -> None:
    """A valid bearer token attributes the submission to its user."""
    response = client.post("/submit-repo", json=_payload(), headers=auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["repo"]["user_id"] == test_user.id


def test_submit_repo_invalid_token_is_anonymous(client) -> None:
    """An unverifiable token does not block the submission."""
    response = client.post(
        "/submit-repo",
        json=_payload(),
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["repo"]["user_id"] is None


def test_submit_repo_token_for_missing_user_is_anonymous(client, db_session) -> None:
    """A signed token whose account is gone does not block the submission."""
    token = create_access_token("00000000-0000-0000-0000-000000000000")
    response = client.post(
        "/submit-repo",
        json=_payload(),
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["repo"]["user_id"] is None
    assert db_session.query(Listing).one().user_id is None


def test_submit_repo_ignores_client_upvotes(client) -> None:
    """Clients cannot seed the upvote counter."""
    response = client.post("/submit-repo", json=_payload(upvotes=500))
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["repo"]["upvotes"] == 0


def test_submit_repo_missing_field(client, db_session) -> None:
    """Missing required fields are reported with a 400 and nothing is stored."""
    payload = _payload()
    del payload["url"]
    response = client.post("/submit-repo", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error"] == "Invalid submission"
    assert data["details"][0]["field"] == "url"
    assert data["data"]["name"] == "replit-flask"
    assert db_session.query(Listing).count() == 0


def test_submit_repo_unknown_type(client) -> None:
    """Unknown listing types are rejected."""
    response = client.post("/submit-repo", json=_payload(type="Bitbucket"))
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_submit_repo_store_rejection(client, db_session) -> None:
    """A store rejection is returned as a 400 with the submitted data."""
    failure = IntegrityError("INSERT INTO repos", {}, Exception("constraint failed"))
    with patch.object(db_session, "commit", side_effect=failure):
        response = client.post("/submit-repo", json=_payload())
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["data"]["tags"] == ["python", "flask"]
    assert data["data"]["user_id"] is None


def test_submit_repo_unexpected_failure(client) -> None:
    """Unexpected errors become a 500 with a generic message."""
    with patch(
        "repo_directory.api.v1.endpoints.submissions.create_listing",
        side_effect=RuntimeError("boom"),
    ):
        response = client.post("/submit-repo", json=_payload())
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error", "details": "boom"}


def test_list_repos(client, make_listing) -> None:
    """All listings are returned as typed records."""
    first = make_listing()
    second = make_listing(tags=["a", "b"])
    response = client.get("/repos")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [row["id"] for row in data] == [first.id, second.id]
    assert data[1]["tags"] == ["a", "b"]


def test_list_repos_store_failure(client) -> None:
    """Store failures are reported as a 500."""
    with patch(
        "repo_directory.api.v1.endpoints.submissions.list_all_listings",
        side_effect=IntegrityError("SELECT", {}, Exception("gone")),
    ):
        response = client.get("/repos")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["message"] == "Error fetching repos"
