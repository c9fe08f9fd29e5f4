from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime, timedelta, timezone

import pytest

from minicache.logging_config import LOG_NAME


class FrozenClock:
    """Stand-in for ``minicache.domain.entry.utcnow`` that only moves when told."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FrozenClock:
    frozen = FrozenClock(datetime(2010, 4, 5, 12, 0, 0, tzinfo=timezone.utc))
    monkeypatch.setattr("minicache.domain.entry.utcnow", frozen)
    return frozen


@pytest.fixture(autouse=True)
def reset_logger_handlers() -> Generator[None, None, None]:
    """Ensure tests run with a clean logger state."""
    logger = logging.getLogger(LOG_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
