"""Logging setup."""

import logging

from property_api.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once per process."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    logging.getLogger("property_api").setLevel(settings.LOG_LEVEL.upper())
