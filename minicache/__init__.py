"""In-process key-value cache with get-or-compute and per-entry TTL."""

from .domain.entry import Entry
from .domain.errors import InvalidKeyKind
from .domain.keys import KeyLike, normalize_key
from .infrastructure.store import Store
from .logging_config import CacheStats, get_logger

__all__ = [
    "CacheStats",
    "Entry",
    "InvalidKeyKind",
    "KeyLike",
    "Store",
    "get_logger",
    "normalize_key",
]
