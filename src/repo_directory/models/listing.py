"""SQLAlchemy model for directory listings (GitHub repos and Replit templates)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repo_directory.db.session import Base
from repo_directory.db.time import utcnow

if TYPE_CHECKING:
    from .review import Review

LISTING_TYPES = ("GitHub", "Replit")


class Listing(Base):
    """A submitted repository or template.

    The table keeps the ``repos`` name used by the hosted store so
    that existing rows and clients keep working.
    """

    __tablename__ = "repos"
    __table_args__ = (
        CheckConstraint(
            f"type IN ({', '.join(repr(name) for name in LISTING_TYPES)})",
            name="ck_repos_type",
        ),
        CheckConstraint("upvotes >= 0", name="ck_repos_upvotes_non_negative"),
        Index("ix_repos_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="GitHub")
    url: Mapped[str] = mapped_column(Text, nullable=False)
    # Always stored as a JSON array of strings.
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    language: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner: Mapped[str] = mapped_column(Text, nullable=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Submitting account, if the submission carried a valid token.
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    reviews: Mapped[list[Review]] = relationship(
        "Review",
        back_populates="listing",
        cascade="all, delete-orphan",
        order_by="Review.created_at.desc()",
    )
