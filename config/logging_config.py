"""Logging configuration so third-party loggers (asyncpg) emit JSON lines too."""

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict


class JSONFormatter(logging.Formatter):
    """JSON formatter for records from the standard logging tree."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "data"):
            log_entry["data"] = record.data

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def build_logging_config(level: str) -> Dict[str, Any]:
    """Build a dictConfig for the given level name (e.g. "INFO")."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "config.logging_config.JSONFormatter",
            },
        },
        "handlers": {
            "default": {
                "formatter": "json",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "asyncpg": {
                "handlers": ["default"],
                "level": level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["default"],
            "level": level,
        },
    }


def configure_logging(level: str) -> None:
    logging.config.dictConfig(build_logging_config(level))
