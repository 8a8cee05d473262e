"""Database models."""

from property_api.models.property import Property

__all__ = ["Property"]
