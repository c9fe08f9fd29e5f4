"""Logging configuration for minicache.

Provides a JSON formatted logger named ``minicache`` and cache hit/miss statistics.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from minicache.config import settings as settings_module
from minicache.config.settings import Settings

LOG_NAME = "minicache"

# Attributes present on every LogRecord. Anything else is considered an extra field.
DEFAULT_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """Formatter returning log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - short description
        base: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="seconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in DEFAULT_LOG_RECORD_ATTRS
        }
        if extras:
            base["extra"] = extras
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def _has_json_handlers(logger: logging.Logger) -> bool:
    return any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)


def get_logger(config: Optional[Settings] = None) -> logging.Logger:
    """Return the configured package logger.

    The first call attaches the JSON handlers; later calls return the logger as
    is. Handlers added by the host application do not count as configuration.
    """
    logger = logging.getLogger(LOG_NAME)
    if _has_json_handlers(logger):
        return logger

    cfg = config if config is not None else settings_module.get_settings()
    logger.setLevel(logging.DEBUG)

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(cfg.log_level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if cfg.log_file is not None:
        cfg.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            cfg.log_file,
            maxBytes=cfg.log_max_bytes,
            backupCount=cfg.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(cfg.log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


class CacheStats:
    """Simple cache hit/miss statistics collector."""

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0
        self._logger = get_logger()

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def record_hit(self) -> None:
        """Record a cache hit."""
        self._hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self._misses += 1

    def reset(self) -> None:
        self._hits = 0
        self._misses = 0

    @property
    def hit_rate(self) -> float:
        """Return the cache hit rate as a percentage."""
        total = self._hits + self._misses
        return (self._hits / total * 100) if total else 0.0

    def log_hit_rate(self) -> None:
        """Log the current cache hit rate."""
        self._logger.info(
            "Cache hit-rate",
            extra={"hit_rate": round(self.hit_rate, 2), "hits": self._hits, "misses": self._misses},
        )
