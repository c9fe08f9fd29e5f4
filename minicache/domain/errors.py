from __future__ import annotations


class InvalidKeyKind(TypeError):
    """Raised when a cache key is neither a ``str`` nor an ``Enum`` member."""

    def __init__(self, key: object) -> None:
        super().__init__(f"key must be a str or Enum member, got {type(key).__name__}")
        self.key = key
