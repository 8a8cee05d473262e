"""Property service for business logic."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from property_api.core.exceptions import NotFound
from property_api.models.property import Property
from property_api.schemas.property import PropertyCreate
from property_api.services.filters import PropertyFilters, build_property_query
from property_api.services.uploads import ImageStore

logger = logging.getLogger(__name__)


def find_properties(db: Session, filters: PropertyFilters) -> list[Property]:
    """Get properties matching the filters, newest first."""
    return list(db.scalars(build_property_query(filters)).all())


def get_property(db: Session, property_id: UUID) -> Property:
    """Get a property by ID."""
    db_property = db.get(Property, property_id)
    if not db_property:
        raise NotFound("Property not found")
    return db_property


def create_property(
    db: Session,
    property_data: PropertyCreate,
    image_url: str | None = None,
) -> Property:
    """
    Persist a validated property.

    Args:
        db: Database session
        property_data: Validated creation data
        image_url: URL of an uploaded image; overrides ``property_data.image_url``

    Returns:
        Created property

    """
    db_property = Property(
        title=property_data.title,
        location=property_data.location,
        price=property_data.price,
        description=property_data.description,
        image_url=image_url or property_data.image_url,
    )
    db.add(db_property)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_property)

    logger.info("Created property %s", db_property.id)
    return db_property


def delete_property(db: Session, property_id: UUID, image_store: ImageStore) -> None:
    """Delete a property and its locally stored image, if any."""
    db_property = get_property(db, property_id)

    # The file goes first; a missing file is not an error
    image_store.remove_for_url(db_property.image_url)

    db.delete(db_property)
    db.commit()
    logger.info("Deleted property %s", property_id)
