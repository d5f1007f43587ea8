"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from repo_directory.core.security import TokenError, decode_access_token
from repo_directory.db.session import get_db
from repo_directory.models import User

logger = logging.getLogger(__name__)

# Missing credentials are handled below so that both required and optional
# authentication share one scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: If the token is missing or invalid, or the user no
            longer exists.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = decode_access_token(credentials.credentials)
    except TokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_optional_user_id(credentials: CredentialsDep, db: SessionDep) -> str | None:
    """Return the token subject if a valid bearer token for a live user was sent.

    Used only to attribute submissions; an invalid token, or one whose user
    no longer exists, is logged and the request continues anonymously.
    """
    if credentials is None:
        return None
    try:
        user_id = decode_access_token(credentials.credentials)
    except TokenError as err:
        logger.warning("Error verifying token: %s", err)
        return None
    if db.get(User, user_id) is None:
        logger.warning("Token subject %s has no account; submitting anonymously", user_id)
        return None
    return user_id


# Type aliases for user dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserIdDep = Annotated[str | None, Depends(get_optional_user_id)]
