from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional

from minicache.domain.entry import TTL, Entry
from minicache.domain.keys import CacheKey, KeyLike, normalize_key
from minicache.logging_config import CacheStats

logger = logging.getLogger(__name__)


class Store:
    """In-memory key-value store with get-or-compute and lazy TTL expiration.

    - Keys are ``str`` or ``Enum`` members, normalized to ``str`` before use.
      Anything else raises :class:`~minicache.domain.errors.InvalidKeyKind`
      before the table is read or written.
    - Values are wrapped in :class:`Entry` on write. A value that already is an
      ``Entry`` is stored as given and keeps its own expiry.
    - Expired entries are removed when a keyed operation finds them. There is no
      background sweep.
    - ``get`` returns ``None`` both for a missing key and for a stored ``None``;
      use ``is_set`` to tell the two apart.

    Not thread-safe: callers sharing a store across threads must serialize
    access themselves.
    """

    def __init__(
        self,
        initial_data: Optional[Mapping[Any, Any]] = None,
        *,
        stats: Optional[CacheStats] = None,
    ) -> None:
        self._data: dict[CacheKey, Entry] = {}
        self.stats = stats if stats is not None else CacheStats()
        if initial_data:
            self.load(initial_data)

    @property
    def data(self) -> Mapping[str, Entry]:
        """Read-only view of the raw table, expired entries included."""
        return MappingProxyType(self._data)

    def get(self, key: KeyLike) -> Any:
        """Return the live value for ``key`` or ``None``.

        ``None`` is also what a key explicitly set to ``None`` returns.
        """
        entry = self._live_entry(normalize_key(key))
        return None if entry is None else entry.value

    def set(
        self,
        key: KeyLike,
        value: Any = None,
        ttl_seconds: Optional[TTL] = None,
        *,
        compute: Optional[Callable[[], Any]] = None,
    ) -> Any:
        """Store a value for ``key`` and return what ``get`` now sees.

        ``compute``, when given, is called once with no arguments and its
        result replaces ``value``. It runs even if the key is already set. A
        payload that is an :class:`Entry` ignores ``ttl_seconds``.

        A zero or negative TTL stores an already expired entry, so the return
        value is ``None``.
        """
        cache_key = normalize_key(key)
        payload = compute() if compute is not None else value
        entry = self._wrap(payload, ttl_seconds)
        self._data[cache_key] = entry
        logger.debug(
            "Stored entry",
            extra={"key": cache_key, "expires_at": entry.expires_at},
        )
        return self.get(cache_key)

    def is_set(self, key: KeyLike) -> bool:
        return self._live_entry(normalize_key(key)) is not None

    def get_or_set(
        self,
        key: KeyLike,
        value: Any = None,
        ttl_seconds: Optional[TTL] = None,
        *,
        compute: Optional[Callable[[], Any]] = None,
    ) -> Any:
        """Return the live value for ``key``, storing it first if absent.

        On a hit neither ``compute`` nor ``value`` is used and ``ttl_seconds``
        does not refresh the existing entry.
        """
        cache_key = normalize_key(key)
        if self.is_set(cache_key):
            self.stats.record_hit()
            return self.get(cache_key)
        self.stats.record_miss()
        return self.set(cache_key, value, ttl_seconds, compute=compute)

    def unset(self, key: KeyLike) -> Any:
        """Remove ``key`` and return its value, ``None`` if absent or expired.

        The entry is removed either way. An expired entry is already logically
        absent, so its stale value is not handed back.
        """
        cache_key = normalize_key(key)
        entry = self._data.pop(cache_key, None)
        if entry is None:
            return None
        logger.debug("Unset entry", extra={"key": cache_key})
        return None if entry.is_expired() else entry.value

    def reset(self) -> None:
        self._data = {}
        logger.debug("Reset store")

    def load(self, data: Mapping[Any, Any]) -> None:
        """Set every pair of ``data`` without a TTL, keeping existing keys.

        Not transactional: if a key is invalid, the pairs before it stay stored.
        """
        for key, value in data.items():
            self.set(key, value)
        logger.debug("Loaded entries", extra={"count": len(data)})

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(key, value)`` for live entries.

        Expired entries are skipped but left in the table.
        """
        for cache_key, entry in list(self._data.items()):
            if not entry.is_expired():
                yield cache_key, entry.value

    def __iter__(self) -> Iterator[str]:
        """Iterate over live keys, matching ``key in store``."""
        for cache_key, _ in self.items():
            yield cache_key

    def __contains__(self, key: object) -> bool:
        return self.is_set(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._data)})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _live_entry(self, cache_key: CacheKey) -> Optional[Entry]:
        entry = self._data.get(cache_key)
        if entry is None:
            return None
        if entry.is_expired():
            self._data.pop(cache_key, None)
            logger.debug("Evicted expired entry", extra={"key": cache_key})
            return None
        return entry

    @staticmethod
    def _wrap(payload: Any, ttl_seconds: Optional[TTL]) -> Entry:
        if isinstance(payload, Entry):
            return payload
        return Entry(payload, ttl_seconds)
