"""Authentication endpoints for the Repo Directory API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from repo_directory.core.security import create_access_token
from repo_directory.core.settings import settings
from repo_directory.models import User
from repo_directory.schemas.user import Credentials, SessionResponse, SignUpRequest, UserRecord
from repo_directory.services.accounts import authenticate, sign_up
from repo_directory.services.errors import AuthenticationError

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_session(user: User) -> SessionResponse:
    return SessionResponse(
        access_token=create_access_token(user.id),
        expires_in=settings.access_token_expire_minutes * 60,
        user=UserRecord.model_validate(user),
    )


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignUpRequest, db: SessionDep) -> SessionResponse:
    """Register an account and sign it in."""
    try:
        user = sign_up(db, email=payload.email, password=payload.password, username=payload.username)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc
    return _issue_session(user)


@router.post("/signin", response_model=SessionResponse)
async def signin(payload: Credentials, db: SessionDep) -> SessionResponse:
    """Exchange email and password for an access token."""
    try:
        user = authenticate(db, email=payload.email, password=payload.password)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
        ) from exc
    return _issue_session(user)


@router.get("/session", response_model=UserRecord)
async def read_session(current_user: CurrentUserDep) -> User:
    """Return the account behind the presented token."""
    return current_user


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def signout(_current_user: CurrentUserDep) -> Response:
    """Sign out; tokens are stateless, so the client simply discards its token."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
