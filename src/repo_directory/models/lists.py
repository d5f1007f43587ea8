"""SQLAlchemy models for user lists (tags) and their memberships."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from repo_directory.db.session import Base
from repo_directory.db.time import utcnow

DEFAULT_LIST_NAME = "Saved"


class SavedList(Base):
    """A user-owned named bucket of listings.

    Names are not unique per owner, except that each owner has at most one
    default list.
    """

    __tablename__ = "lists"
    __table_args__ = (
        Index(
            "uq_lists_default_per_user",
            "user_id",
            unique=True,
            postgresql_where=text(f"name = '{DEFAULT_LIST_NAME}'"),
            sqlite_where=text(f"name = '{DEFAULT_LIST_NAME}'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class ListMembership(Base):
    """Join table mapping listings into lists."""

    __tablename__ = "list_repos"

    # Composite primary key prevents duplicate memberships.
    list_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    repo_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("repos.id", ondelete="CASCADE"),
        primary_key=True,
    )
