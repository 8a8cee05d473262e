"""Seed script to populate the database with sample listings."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from property_api.core.config import get_settings
from property_api.core.database import Database
from property_api.models.property import Property

SAMPLE_PROPERTIES = [
    {
        "title": "Modern Downtown Loft",
        "location": "Downtown, Lagos",
        "price": Decimal("250000.00"),
        "description": "Open-plan loft with floor-to-ceiling windows.",
        "image_url": "https://images.example.com/loft.jpg",
    },
    {
        "title": "Family Home with Garden",
        "location": "Lekki Phase 1, Lagos",
        "price": Decimal("480000.00"),
        "description": "Four bedrooms, large garden and a double garage.",
        "image_url": None,
    },
    {
        "title": "Studio Apartment",
        "location": "Uptown, Abuja",
        "price": Decimal("95000.50"),
        "description": None,
        "image_url": None,
    },
    {
        "title": "Beachfront Villa",
        "location": "Victoria Island, Lagos",
        "price": Decimal("1200000.00"),
        "description": "Private beach access and an infinity pool.",
        "image_url": "https://images.example.com/villa.jpg",
    },
]


def seed_database(database: Database) -> None:
    """Seed the database with sample data."""
    database.create_all()
    with database.session() as db:
        # Check if data already exists
        if db.scalars(select(Property)).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        # Spread creation times so list ordering is visible
        now = datetime.now(UTC)
        for offset, data in enumerate(SAMPLE_PROPERTIES):
            created = now - timedelta(days=len(SAMPLE_PROPERTIES) - offset)
            db.add(Property(**data, created_at=created, updated_at=created))

        db.commit()
        print(f"Created {len(SAMPLE_PROPERTIES)} properties")


if __name__ == "__main__":
    seed_database(Database.from_settings(get_settings()))
