from __future__ import annotations

from enum import Enum

import pytest

from minicache.domain.errors import InvalidKeyKind
from minicache.domain.keys import normalize_key


class Field(Enum):
    NAME = "name"
    AGE = 3


class Tag(str, Enum):
    TITLE = "title"


class Label(str):
    pass


def test_str_key_is_kept() -> None:
    assert normalize_key("name") == "name"
    assert normalize_key("") == ""


def test_str_subclass_becomes_plain_str() -> None:
    key = normalize_key(Label("title"))
    assert key == "title"
    assert type(key) is str


def test_enum_key_uses_string_value() -> None:
    assert normalize_key(Field.NAME) == "name"
    assert normalize_key(Tag.TITLE) == "title"


def test_enum_key_with_non_string_value_uses_name() -> None:
    assert normalize_key(Field.AGE) == "AGE"


@pytest.mark.parametrize("key", [[1, 2], (1, 2), 1, 1.5, True, None, b"name", {"a": 1}])
def test_invalid_key_kinds_raise(key: object) -> None:
    with pytest.raises(InvalidKeyKind) as excinfo:
        normalize_key(key)
    assert excinfo.value.key is key
    assert type(key).__name__ in str(excinfo.value)


def test_invalid_key_kind_is_type_error() -> None:
    with pytest.raises(TypeError):
        normalize_key([1, 2])
