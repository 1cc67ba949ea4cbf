"""
Centralized logging utilities that respect dynamic settings.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from logging.config import dictConfig
from typing import Any

from .config import Settings, get_settings

_LOGGER_CONFIGURED = False

# Set by the request-logging middleware for the duration of one request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp every record with the id of the request being served, or '-'."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def _resolve_log_level(level_name: str) -> int:
    """Return a logging level constant from a case-insensitive string."""

    numeric_level = logging.getLevelName(level_name.upper())
    if isinstance(numeric_level, int):
        return numeric_level
    raise ValueError(f"Unsupported log level: {level_name}")


def _build_logging_config(settings: Settings) -> dict[str, Any]:
    """Construct a logging dictConfig payload based on runtime settings."""

    log_settings = settings.logging
    level = _resolve_log_level(log_settings.level)

    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "standard",
            "filters": ["request_id"],
        },
    }

    if log_settings.to_file:
        log_dir = log_settings.directory
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "standard",
            "filters": ["request_id"],
            "filename": str(log_dir / log_settings.file_name),
            "encoding": "utf-8",
            "maxBytes": log_settings.max_bytes,
            "backupCount": log_settings.backup_count,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "standard": {
                "format": log_settings.format,
            }
        },
        "handlers": handlers,
        "root": {
            "level": level,
            "handlers": list(handlers),
        },
    }


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Configure the global logging stack and return the application logger.

    Calling this function multiple times is idempotent; the logging config
    will only be applied during the first invocation.
    """

    global _LOGGER_CONFIGURED

    runtime_settings = settings or get_settings()
    logger_name = runtime_settings.app.name

    if not _LOGGER_CONFIGURED:
        dictConfig(_build_logging_config(runtime_settings))
        _LOGGER_CONFIGURED = True

    logger = logging.getLogger(logger_name)
    logger.setLevel(_resolve_log_level(runtime_settings.logging.level))
    return logger


__all__ = ["RequestIdFilter", "request_id_var", "setup_logging"]
