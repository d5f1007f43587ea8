"""Account-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credentials(BaseModel):
    """Email and password pair used to sign in."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6, max_length=256)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip().lower()
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("invalid email address")
        return value


class SignUpRequest(Credentials):
    """Credentials plus an optional display username."""

    username: str | None = Field(None, max_length=64)


class UserRecord(BaseModel):
    """Public view of an account."""

    id: str
    email: str
    username: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionResponse(BaseModel):
    """Access token issued at sign-in."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRecord
