"""Property API routes."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from property_api.api.deps import PropertyPayload, get_image_store, get_property_payload
from property_api.core.database import get_db
from property_api.core.exceptions import InternalError, InvalidRequest, ValidationError
from property_api.schemas.property import (
    MessageResponse,
    PropertyCreatedResponse,
    PropertyDetailResponse,
    PropertyListResponse,
    PropertyResponse,
    PropertySearchResponse,
    missing_required_fields,
    validate_property_fields,
)
from property_api.services import property_service
from property_api.services.filters import PropertyFilters
from property_api.services.uploads import ImageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["properties"])


def _find(db: Session, filters: PropertyFilters, failure: str) -> list[PropertyResponse]:
    try:
        properties = property_service.find_properties(db, filters)
    except SQLAlchemyError as e:
        logger.exception("Error querying properties")
        raise InternalError(failure) from e
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("", response_model=PropertyListResponse)
def list_properties(
    location: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    search: str | None = Query(None, description="Text matched in title, location or description"),
    db: Session = Depends(get_db),
) -> PropertyListResponse:
    """List properties, optionally filtered by location, price range and text."""
    filters = PropertyFilters(
        location=location, min_price=min_price, max_price=max_price, text=search
    )
    data = _find(db, filters, "Failed to fetch properties")
    return PropertyListResponse(count=len(data), filters=filters.echo("search"), data=data)


@router.get("/search", response_model=PropertySearchResponse)
def search_properties(
    q: str | None = Query(None, description="Text matched in title, location or description"),
    location: str | None = Query(None),
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    db: Session = Depends(get_db),
) -> PropertySearchResponse:
    """Search properties; at least one parameter is required."""
    filters = PropertyFilters(location=location, min_price=min_price, max_price=max_price, text=q)
    if filters.is_empty():
        raise InvalidRequest(
            "Please provide at least one search parameter (q, location, minPrice, or maxPrice)"
        )

    data = _find(db, filters, "Failed to search properties")
    return PropertySearchResponse(count=len(data), search_params=filters.echo("q"), data=data)


@router.get("/{property_id}", response_model=PropertyDetailResponse)
def get_property(
    property_id: UUID,
    db: Session = Depends(get_db),
) -> PropertyDetailResponse:
    """Get a property by ID."""
    try:
        db_property = property_service.get_property(db, property_id)
    except SQLAlchemyError as e:
        logger.exception("Error fetching property %s", property_id)
        raise InternalError("Failed to fetch property") from e
    return PropertyDetailResponse(data=PropertyResponse.model_validate(db_property))


@router.post("", response_model=PropertyCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    request: Request,
    payload: PropertyPayload = Depends(get_property_payload),
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> PropertyCreatedResponse:
    """Create a property, optionally with an uploaded ``image`` file."""
    stored = image_store.save(payload.image) if payload.image else None

    missing = missing_required_fields(payload.fields)
    if missing:
        if stored:
            image_store.discard(stored)
        raise ValidationError(
            "Missing required fields: title, location, and price are required",
            errors=[{"field": name, "message": f"{name} is required"} for name in missing],
        )

    property_data, errors = validate_property_fields(payload.fields)
    if errors:
        if stored:
            image_store.discard(stored)
        raise ValidationError("Validation error", errors=[e.model_dump() for e in errors])

    image_url = None
    if stored:
        image_url = image_store.public_url(str(request.base_url), stored.filename)

    try:
        db_property = property_service.create_property(db, property_data, image_url=image_url)
    except Exception as e:
        if stored:
            image_store.discard(stored)
        logger.exception("Error creating property")
        raise InternalError("Failed to create property") from e

    return PropertyCreatedResponse(
        message="Property created successfully",
        data=PropertyResponse.model_validate(db_property),
    )


@router.delete("/{property_id}", response_model=MessageResponse)
def delete_property(
    property_id: UUID,
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> MessageResponse:
    """Delete a property and its stored image."""
    try:
        property_service.delete_property(db, property_id, image_store)
    except SQLAlchemyError as e:
        logger.exception("Error deleting property %s", property_id)
        raise InternalError("Failed to delete property") from e
    return MessageResponse(message="Property deleted successfully")
