"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from property_api.core.config import Settings
from property_api.main import create_app
from property_api.models.property import Property


@pytest.fixture
def settings(tmp_path):
    """Settings for an in-memory database and a temporary upload directory."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        DATABASE_URL="sqlite:///:memory:",
        UPLOAD_DIR=tmp_path / "uploads",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client with proper lifespan handling."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def image_dir(settings):
    return settings.UPLOAD_DIR / "properties"


@pytest.fixture
def db(app, client):
    """Session on the same in-memory database the client talks to."""
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_property(db):
    """Insert a property directly, with creation time ``age`` in the past."""
    now = datetime.now(UTC)

    def _make(
        title: str = "Sample Property",
        location: str = "Somewhere",
        price: str = "100000.00",
        description: str | None = None,
        image_url: str | None = None,
        age: timedelta = timedelta(0),
    ) -> Property:
        created = now - age
        db_property = Property(
            title=title,
            location=location,
            price=Decimal(price),
            description=description,
            image_url=image_url,
            created_at=created,
            updated_at=created,
        )
        db.add(db_property)
        db.commit()
        db.refresh(db_property)
        return db_property

    return _make
