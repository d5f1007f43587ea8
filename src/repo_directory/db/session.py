"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import repo_directory.models  # noqa: E402,F401


class Database:
    """Engine and session factory owned by one application instance.

    The application constructs one of these at startup and disposes of it at
    shutdown; request handlers reach it through :func:`get_db`.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine: Engine = create_engine(
            url,
            pool_pre_ping=True,
            echo=echo,
            connect_args=connect_args,
        )
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        """Open a new session bound to this database."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
