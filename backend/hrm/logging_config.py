# backend/hrm/logging_config.py
import logging.config
from typing import Any

from .config import LOG_LEVEL

LOGGING: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": 'timestamp="%(asctime)s" logger="%(name)s" level="%(levelname)s" msg="%(message)s"',
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        # SQL echo stays off unless explicitly asked for
        "sqlalchemy.engine": {"level": "WARNING"},
    },
}


def configure_logging():
    logging.config.dictConfig(LOGGING)
