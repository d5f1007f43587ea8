"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from repo_directory.db.session import Base
from repo_directory.db.time import utcnow


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Account identified by a UUID string, matching the token subject."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_user_id)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    username: Mapped[str | None] = mapped_column(Text, nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
