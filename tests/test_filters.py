"""Tests for property filter construction."""

from datetime import timedelta
from decimal import Decimal

import pytest

from property_api.core.exceptions import InvalidRequest
from property_api.services.filters import PropertyFilters, parse_price_bound
from property_api.services.property_service import find_properties


class TestParsePriceBound:
    """Unit tests for minPrice/maxPrice parsing."""

    def test_integer(self) -> None:
        assert parse_price_bound("minPrice", "100") == Decimal("100")

    def test_decimal(self) -> None:
        assert parse_price_bound("maxPrice", " 99.95 ") == Decimal("99.95")

    def test_absent_or_blank(self) -> None:
        assert parse_price_bound("minPrice", None) is None
        assert parse_price_bound("minPrice", "   ") is None

    @pytest.mark.parametrize("raw", ["abc", "12abc", "NaN", "Infinity"])
    def test_rejects_non_numbers(self, raw: str) -> None:
        with pytest.raises(InvalidRequest) as exc_info:
            parse_price_bound("maxPrice", raw)
        assert exc_info.value.message == "maxPrice must be a valid number"
        assert exc_info.value.status_code == 400


class TestPropertyFilters:
    """Unit tests for the raw filter container."""

    def test_is_empty(self) -> None:
        assert PropertyFilters().is_empty()
        assert PropertyFilters(location="", text="").is_empty()
        assert not PropertyFilters(min_price="0").is_empty()

    def test_whitespace_price_bounds_are_absent(self) -> None:
        filters = PropertyFilters(min_price=" ", max_price="\t")
        assert filters.is_empty()
        assert filters.echo("q") == {}

    def test_echo_uses_query_names(self) -> None:
        filters = PropertyFilters(location="Ikeja", max_price="500", text="pool")
        assert filters.echo("q") == {"q": "pool", "location": "Ikeja", "maxPrice": "500"}
        assert filters.echo() == {"search": "pool", "location": "Ikeja", "maxPrice": "500"}


class TestFindProperties:
    """Tests for filtered queries against the database."""

    def test_no_filters_returns_everything(self, db, make_property) -> None:
        make_property(title="First", age=timedelta(minutes=2))
        make_property(title="Second", age=timedelta(minutes=1))

        result = find_properties(db, PropertyFilters())
        assert [p.title for p in result] == ["Second", "First"]

    def test_location_substring(self, db, make_property) -> None:
        make_property(title="A", location="Downtown")
        make_property(title="B", location="DOWNTOWN")
        make_property(title="C", location="uptown")

        result = find_properties(db, PropertyFilters(location="down"))
        assert sorted(p.title for p in result) == ["A", "B"]

    def test_price_bounds_inclusive(self, db, make_property) -> None:
        make_property(title="Low", price="100.00")
        make_property(title="High", price="200.00")
        make_property(title="Over", price="200.50")

        result = find_properties(db, PropertyFilters(min_price="100", max_price="200"))
        assert sorted(p.title for p in result) == ["High", "Low"]

    def test_text_ignores_null_description(self, db, make_property) -> None:
        make_property(title="Terrace", description=None)
        make_property(title="Duplex", description="Has a terrace")
        make_property(title="Bungalow", description="Single floor")

        result = find_properties(db, PropertyFilters(text="terrace"))
        assert sorted(p.title for p in result) == ["Duplex", "Terrace"]

    def test_underscore_is_literal(self, db, make_property) -> None:
        make_property(title="Unit_4B")
        make_property(title="Unit 4B")

        result = find_properties(db, PropertyFilters(text="t_4"))
        assert [p.title for p in result] == ["Unit_4B"]
