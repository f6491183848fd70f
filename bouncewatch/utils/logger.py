"""Central logging configuration."""
from __future__ import annotations

import logging
from logging.config import dictConfig

from bouncewatch.core.config import settings

LOGGER_NAME = "bouncewatch"

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        }
    },
    "loggers": {
        # Registry decisions stay at INFO even when root is at WARNING.
        LOGGER_NAME: {
            "level": "DEBUG" if settings.environment == "development" else "INFO",
            "propagate": True,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "DEBUG" if settings.environment == "development" else "WARNING",
    },
}


def configure_logging() -> None:
    """Apply the logging configuration once at application startup."""

    dictConfig(LOGGING_CONFIG)


logger = logging.getLogger(LOGGER_NAME)
