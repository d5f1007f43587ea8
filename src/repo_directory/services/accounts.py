"""Account registration and credential checks."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from repo_directory.core.security import hash_password, verify_password
from repo_directory.models import User
from repo_directory.services.errors import AuthenticationError

logger = logging.getLogger(__name__)


def sign_up(db: Session, *, email: str, password: str, username: str | None = None) -> User:
    """Register a new account.

    Raises:
        AuthenticationError: If the email is already registered.
    """
    existing = db.scalars(select(User).where(User.email == email)).first()
    if existing is not None:
        raise AuthenticationError("User already registered")

    user = User(email=email, username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise AuthenticationError("User already registered") from exc
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, *, email: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        AuthenticationError: If the email is unknown or the password wrong.
    """
    user = db.scalars(select(User).where(User.email == email)).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Rejected sign-in for %s", email)
        raise AuthenticationError("Invalid login credentials")
    return user
