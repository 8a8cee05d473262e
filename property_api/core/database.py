"""Database configuration and session management."""

from collections.abc import Iterator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from property_api.core.config import Settings


# Base class for models
class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""
    url = make_url(settings.DATABASE_URL)
    echo = settings.DB_ECHO or settings.is_development

    if url.get_backend_name() == "sqlite":
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}  # Needed for SQLite
        if url.database in (None, "", ":memory:"):
            # A single shared connection keeps the in-memory database alive
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    connect_args = {}
    if settings.DB_SSL_CA:
        connect_args = {"sslmode": "verify-ca", "sslrootcert": settings.DB_SSL_CA}

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


class Database:
    """Engine and session factory owned by one application instance."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_engine(settings))

    def create_all(self) -> None:
        """Create tables for every model registered on ``Base``."""
        # Import models so they are registered on Base.metadata
        from property_api.models import property  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency returning the database attached to the running app."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
