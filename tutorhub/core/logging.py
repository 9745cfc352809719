"""Process-wide logging configuration."""

from __future__ import annotations

import logging
import logging.config

from tutorhub.core.config import Settings

_configured = False


def configure_logging(settings: Settings) -> None:
    """Install console logging for the ``tutorhub`` namespace and the ASGI server.

    Safe to call more than once; only the first call installs handlers.
    """
    global _configured
    if _configured:
        return

    level = "DEBUG" if settings.debug else settings.logging.level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": settings.logging.format},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "tutorhub": {"handlers": ["console"], "level": level, "propagate": False},
                "sqlalchemy.engine": {"level": settings.logging.sql_level},
                "uvicorn.error": {"level": level},
            },
        }
    )
    _configured = True
    logging.getLogger(__name__).debug("Logging configured at %s", level)


__all__ = ["configure_logging"]
