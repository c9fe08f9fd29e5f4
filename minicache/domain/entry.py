from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

TTL = Union[float, timedelta]


def utcnow() -> datetime:
    """Current wall-clock instant, timezone-aware in UTC."""
    return datetime.now(timezone.utc)


def _as_timedelta(ttl: TTL) -> timedelta:
    if isinstance(ttl, timedelta):
        return ttl
    return timedelta(seconds=float(ttl))


class Entry(BaseModel):
    """A cached value with an optional absolute expiry.

    ``Entry(value, ttl_seconds)`` fixes ``expires_at`` once, at construction.
    Without a TTL the entry never expires. Entries compare equal when their
    values are equal; the expiry takes no part in equality.
    """

    value: Any = Field(default=None, description="Cached payload, stored as given")
    expires_at: Optional[datetime] = Field(
        default=None, description="Absolute expiry instant in UTC, None for never"
    )

    model_config = ConfigDict(frozen=True)

    def __init__(self, value: Any = None, ttl_seconds: Optional[TTL] = None, **data: Any) -> None:
        if ttl_seconds is not None:
            if data.get("expires_at") is not None:
                raise ValueError("Pass either ttl_seconds or expires_at, not both")
            data["expires_at"] = utcnow() + _as_timedelta(ttl_seconds)
        super().__init__(value=value, **data)

    @field_validator("expires_at")
    @classmethod
    def _ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return v
        if v.tzinfo is None:
            raise ValueError("expires_at must be timezone-aware")
        return v.astimezone(timezone.utc)

    def is_expired(self) -> bool:
        # Strict: the exact expiry instant is still live
        return self.expires_at is not None and utcnow() > self.expires_at

    def ttl_remaining(self) -> Optional[float]:
        """Seconds left before expiry, ``None`` if the entry never expires."""
        if self.expires_at is None:
            return None
        return max(0.0, (self.expires_at - utcnow()).total_seconds())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return bool(self.value == other.value)

    def __hash__(self) -> int:
        return hash(self.value)
