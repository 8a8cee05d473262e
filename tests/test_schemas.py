"""Tests for property field validation."""

from decimal import Decimal

import pytest

from property_api.schemas.property import missing_required_fields, validate_property_fields


def _errors(payload: dict) -> dict[str, str]:
    _, errors = validate_property_fields(payload)
    return {e.field: e.message for e in errors}


VALID = {"title": "Nice House", "location": "Ikeja", "price": "1500.00"}


class TestMissingRequiredFields:
    def test_complete_payload(self) -> None:
        assert missing_required_fields(VALID) == []

    def test_all_missing(self) -> None:
        assert missing_required_fields({}) == ["title", "location", "price"]

    def test_empty_strings(self) -> None:
        """Empty title/location are missing; an empty price is left to validation."""
        assert missing_required_fields({"title": "", "location": "", "price": ""}) == [
            "title",
            "location",
        ]

    def test_null_price(self) -> None:
        assert missing_required_fields({"title": "abc", "location": "x", "price": None}) == [
            "price"
        ]


class TestValidatePropertyFields:
    def test_valid_payload(self) -> None:
        data, errors = validate_property_fields({**VALID, "imageUrl": "/uploads/properties/a.jpg"})
        assert errors == []
        assert data.title == "Nice House"
        assert data.price == Decimal("1500.00")
        assert data.image_url == "/uploads/properties/a.jpg"
        assert data.description is None

    def test_price_is_rounded_to_cents(self) -> None:
        data, _ = validate_property_fields({**VALID, "price": "10.005"})
        assert data.price == Decimal("10.01")

    def test_zero_price_allowed(self) -> None:
        data, errors = validate_property_fields({**VALID, "price": 0})
        assert errors == []
        assert data.price == Decimal("0.00")

    @pytest.mark.parametrize(
        ("title", "message"),
        [
            ("   ", "Title cannot be empty"),
            ("ab", "Title must be between 3 and 255 characters"),
            ("x" * 256, "Title must be between 3 and 255 characters"),
        ],
    )
    def test_title_rules(self, title: str, message: str) -> None:
        assert _errors({**VALID, "title": title}) == {"title": message}

    def test_title_boundaries(self) -> None:
        assert _errors({**VALID, "title": "abc"}) == {}
        assert _errors({**VALID, "title": "x" * 255}) == {}

    def test_blank_location(self) -> None:
        assert _errors({**VALID, "location": " "}) == {"location": "Location cannot be empty"}

    @pytest.mark.parametrize("price", ["", "abc", "NaN", True])
    def test_price_must_be_a_number(self, price) -> None:
        assert _errors({**VALID, "price": price}) == {"price": "Price must be a valid number"}

    def test_negative_price(self) -> None:
        assert _errors({**VALID, "price": "-0.01"}) == {
            "price": "Price must be greater than or equal to 0"
        }

    def test_price_too_large(self) -> None:
        assert _errors({**VALID, "price": "12345678901"}) == {
            "price": "Price exceeds the maximum supported value"
        }

    @pytest.mark.parametrize(
        "url", ["https://cdn.example.com/a.jpg", "http://x/y.png", "/uploads/properties/a.jpg"]
    )
    def test_image_url_accepted(self, url: str) -> None:
        assert _errors({**VALID, "imageUrl": url}) == {}

    @pytest.mark.parametrize("url", ["ftp://example.com/a.jpg", "images/a.jpg", "/static/a.jpg"])
    def test_image_url_rejected(self, url: str) -> None:
        assert _errors({**VALID, "imageUrl": url}) == {
            "imageUrl": "Image URL must be a valid URL or upload path"
        }

    def test_empty_image_url_is_none(self) -> None:
        data, errors = validate_property_fields({**VALID, "imageUrl": ""})
        assert errors == []
        assert data.image_url is None
