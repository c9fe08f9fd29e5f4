from .entry import Entry
from .errors import InvalidKeyKind
from .keys import CacheKey, KeyLike, normalize_key

__all__ = [
    "CacheKey",
    "Entry",
    "InvalidKeyKind",
    "KeyLike",
    "normalize_key",
]
