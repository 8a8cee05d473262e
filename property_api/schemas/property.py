"""Property Pydantic schemas for request/response validation."""

from collections.abc import Mapping
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

REQUIRED_FIELDS = ("title", "location", "price")
IMAGE_URL_PREFIXES = ("http", "/uploads")
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE_DIGITS = 12  # Numeric(12, 2)


class FieldError(BaseModel):
    """A single field/message pair reported by validation."""

    field: str
    message: str


class PropertyCreate(BaseModel):
    """Schema for creating a new property.

    Every field check lives in a ``before`` validator so that failures carry
    the human readable messages returned to clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    location: str
    price: Decimal
    description: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        """Title must be non-empty and 3-255 characters long."""
        title = "" if v is None else str(v)
        if not title.strip():
            raise ValueError("Title cannot be empty")
        if not 3 <= len(title) <= 255:
            raise ValueError("Title must be between 3 and 255 characters")
        return title

    @field_validator("location", mode="before")
    @classmethod
    def validate_location(cls, v: Any) -> str:
        location = "" if v is None else str(v)
        if not location.strip():
            raise ValueError("Location cannot be empty")
        if len(location) > 255:
            raise ValueError("Location must be at most 255 characters")
        return location

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Decimal:
        """Price must be a finite, non-negative number; stored with two decimals."""
        if isinstance(v, bool) or v is None:
            raise ValueError("Price must be a valid number")
        try:
            price = Decimal(str(v).strip())
        except InvalidOperation:
            raise ValueError("Price must be a valid number") from None
        if not price.is_finite():
            raise ValueError("Price must be a valid number")
        if price < 0:
            raise ValueError("Price must be greater than or equal to 0")
        if price.adjusted() >= MAX_PRICE_DIGITS - 2:
            raise ValueError("Price exceeds the maximum supported value")
        price = price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
        # Rounding can still carry into an extra digit (9999999999.999)
        if len(price.as_tuple().digits) > MAX_PRICE_DIGITS:
            raise ValueError("Price exceeds the maximum supported value")
        return price

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> str | None:
        if v is None:
            return None
        return str(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def validate_image_url(cls, v: Any) -> str | None:
        """Image URL, if given, must be an external URL or a local upload path."""
        if v is None or v == "":
            return None
        url = str(v)
        if not url.startswith(IMAGE_URL_PREFIXES):
            raise ValueError("Image URL must be a valid URL or upload path")
        if len(url) > 500:
            raise ValueError("Image URL must be at most 500 characters")
        return url


class PropertyResponse(BaseModel):
    """Schema for property response."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID
    title: str
    location: str
    price: Decimal
    description: str | None
    image_url: str | None
    created_at: datetime
    updated_at: datetime


class PropertyListResponse(BaseModel):
    """Envelope for the list endpoint."""

    success: bool = True
    count: int
    filters: dict[str, str]
    data: list[PropertyResponse]


class PropertySearchResponse(BaseModel):
    """Envelope for the search endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    count: int
    search_params: dict[str, str] = Field(alias="searchParams")
    data: list[PropertyResponse]


class PropertyDetailResponse(BaseModel):
    success: bool = True
    data: PropertyResponse


class PropertyCreatedResponse(BaseModel):
    success: bool = True
    message: str
    data: PropertyResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def missing_required_fields(payload: Mapping[str, Any]) -> list[str]:
    """Return the required fields absent from a create payload.

    Empty ``title``/``location`` count as missing; ``price`` only when absent,
    so that an empty price is reported by field validation instead.
    """
    missing = [name for name in ("title", "location") if not payload.get(name)]
    if payload.get("price") is None:
        missing.append("price")
    return missing


def validate_property_fields(
    payload: Mapping[str, Any],
) -> tuple[PropertyCreate | None, list[FieldError]]:
    """
    Validate a create payload before it reaches the database.

    Args:
        payload: Raw request fields (JSON or form values)

    Returns:
        The parsed schema and an empty list, or None and the field errors

    """
    try:
        return PropertyCreate.model_validate(dict(payload)), []
    except PydanticValidationError as exc:
        errors = []
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "body"
            ctx_error = err.get("ctx", {}).get("error")
            message = str(ctx_error) if ctx_error is not None else err["msg"]
            errors.append(FieldError(field=field, message=message))
        return None, errors
