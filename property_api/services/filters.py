"""Property filter construction shared by the list and search endpoints."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from sqlalchemy import ColumnElement, Select, and_, or_, select, true

from property_api.core.exceptions import InvalidRequest
from property_api.models.property import Property


@dataclass(frozen=True)
class PropertyFilters:
    """Raw filter parameters exactly as the client sent them."""

    location: str | None = None
    min_price: str | None = None
    max_price: str | None = None
    text: str | None = None

    def _price_bounds(self) -> tuple[str | None, str | None]:
        """Price bounds with whitespace-only values treated as absent."""
        return (
            self.min_price if self.min_price and self.min_price.strip() else None,
            self.max_price if self.max_price and self.max_price.strip() else None,
        )

    def is_empty(self) -> bool:
        min_price, max_price = self._price_bounds()
        return not (self.location or min_price or max_price or self.text)

    def echo(self, text_key: str = "search") -> dict[str, str]:
        """Supplied parameters keyed by their query-string names."""
        min_price, max_price = self._price_bounds()
        params = {
            text_key: self.text,
            "location": self.location,
            "minPrice": min_price,
            "maxPrice": max_price,
        }
        return {key: value for key, value in params.items() if value}


def parse_price_bound(name: str, raw: str | None) -> Decimal | None:
    """Parse a minPrice/maxPrice query value; blank means no bound."""
    if raw is None or not raw.strip():
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise InvalidRequest(f"{name} must be a valid number") from None
    if not value.is_finite():
        raise InvalidRequest(f"{name} must be a valid number")
    return value


def build_text_filter(term: str) -> ColumnElement[bool]:
    """Match the term in title, location or description (case-insensitive)."""
    return or_(
        Property.title.icontains(term, autoescape=True),
        Property.location.icontains(term, autoescape=True),
        Property.description.icontains(term, autoescape=True),
    )


def build_property_filter(filters: PropertyFilters) -> ColumnElement[bool]:
    """Combine every supplied filter with AND; no filters matches everything."""
    conditions: list[ColumnElement[bool]] = []

    if filters.location:
        conditions.append(Property.location.icontains(filters.location, autoescape=True))

    min_price = parse_price_bound("minPrice", filters.min_price)
    if min_price is not None:
        conditions.append(Property.price >= min_price)

    max_price = parse_price_bound("maxPrice", filters.max_price)
    if max_price is not None:
        conditions.append(Property.price <= max_price)

    if filters.text:
        conditions.append(build_text_filter(filters.text))

    return and_(*conditions) if conditions else true()


def build_property_query(filters: PropertyFilters) -> Select[tuple[Property]]:
    """Select matching properties, newest first."""
    return (
        select(Property)
        .where(build_property_filter(filters))
        .order_by(Property.created_at.desc())
    )
