"""Runtime settings for minicache logging.

Values come from the process environment and, when present, a ``.env`` file
read with ``python-dotenv``. Nothing is read at import time: ``get_settings()``
builds the frozen Pydantic settings object on first use.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
ENV_PREFIX = "MINICACHE_"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5


class Settings(BaseModel):
    """Immutable settings object used by the logging configuration."""

    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None
    log_max_bytes: int = Field(DEFAULT_LOG_MAX_BYTES, ge=0)
    log_backup_count: int = Field(DEFAULT_LOG_BACKUP_COUNT, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, v: object) -> str:
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level


def _read_environment() -> dict[str, str]:
    """Merge ``.env`` values under the process environment.

    The ``.env`` file is looked up from the working directory and only read;
    ``os.environ`` is left untouched.
    """
    values: dict[str, str] = {}
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        values.update(
            (key, value)
            for key, value in dotenv_values(dotenv_path).items()
            if key.startswith(ENV_PREFIX) and value is not None
        )
    values.update({key: value for key, value in os.environ.items() if key.startswith(ENV_PREFIX)})
    return values


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _build_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    source = environ if environ is not None else _read_environment()
    overrides: dict[str, object] = {}
    level = _env(source, "LOG_LEVEL")
    if level is not None:
        overrides["log_level"] = level
    log_file = _env(source, "LOG_FILE")
    if log_file is not None:
        overrides["log_file"] = Path(log_file)
    max_bytes = _env(source, "LOG_MAX_BYTES")
    if max_bytes is not None:
        overrides["log_max_bytes"] = max_bytes
    backup_count = _env(source, "LOG_BACKUP_COUNT")
    if backup_count is not None:
        overrides["log_backup_count"] = backup_count
    return Settings.model_validate(overrides)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, built on first call."""
    return _build_settings()
