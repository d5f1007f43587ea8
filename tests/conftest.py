# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-repo-directory")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from repo_directory.core.security import create_access_token
from repo_directory.db.session import Base
from repo_directory.db.session import get_db as app_get_session
from repo_directory.main import create_app
from repo_directory.models import Listing, Review, User
from repo_directory.schemas.listing import DEFAULT_ICON
from repo_directory.services.accounts import sign_up

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse"

_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit their own work, so each test cleans the tables afterwards
    # instead of rolling back an outer transaction.
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return create_app()


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return sign_up(db_session, email="tester@example.com", password=TEST_PASSWORD, username="tester")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return sign_up(db_session, email="other@example.com", password=TEST_PASSWORD, username="other")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def make_listing(db_session: Session) -> Callable[..., Listing]:
    """Return a factory inserting listings one minute apart, oldest first."""
    sequence = count()

    def _make(**overrides: Any) -> Listing:
        n = next(sequence)
        values: dict[str, Any] = {
            "name": f"repo-{n}",
            "description": f"Example project number {n}",
            "type": "GitHub",
            "url": f"https://github.com/acme/repo-{n}",
            "tags": ["example"],
            "language": "Python",
            "icon": DEFAULT_ICON,
            "owner": "acme",
            "upvotes": 0,
            "created_at": _BASE_TIME + timedelta(minutes=n),
        }
        values.update(overrides)
        listing = Listing(**values)
        db_session.add(listing)
        db_session.commit()
        db_session.refresh(listing)
        return listing

    return _make


@pytest.fixture()
def test_listing(make_listing: Callable[..., Listing]) -> Listing:
    """Create a baseline listing."""
    return make_listing(name="fastapi-starter", description="Starter for FastAPI apps", owner="tiangolo")


@pytest.fixture()
def add_review(db_session: Session) -> Callable[..., Review]:
    """Return a helper inserting a review row directly."""

    def _add(listing: Listing, rating: int, content: str = "Nice", user_id: str | None = None) -> Review:
        review = Review(repo_id=listing.id, rating=rating, content=content, user_id=user_id)
        db_session.add(review)
        db_session.commit()
        return review

    return _add
