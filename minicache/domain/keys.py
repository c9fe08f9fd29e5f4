"""Accepted cache key kinds and their canonical string form.

Keys are either strings or enum members. Both are reduced to a plain ``str``
before they touch the table, so ``"name"`` and an enum member whose value is
``"name"`` address the same entry.
"""

from __future__ import annotations

from enum import Enum
from typing import NewType, Union

from .errors import InvalidKeyKind

CacheKey = NewType("CacheKey", str)
KeyLike = Union[str, Enum]


def normalize_key(key: object) -> CacheKey:
    """Return the canonical text of ``key`` or raise :class:`InvalidKeyKind`.

    Enum members map to their value when it is a string, otherwise to their
    name. Any other type is rejected, including ``bytes`` and ``int``.
    """

    # Enum first: str-mixin enums are also str instances
    if isinstance(key, Enum):
        raw = key.value
        return CacheKey(raw if isinstance(raw, str) else key.name)
    if isinstance(key, str):
        return CacheKey(str(key))
    raise InvalidKeyKind(key)
