from abc import ABC, abstractmethod
from collections import OrderedDict, deque
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum, IntFlag
from typing import Any, NamedTuple, NewType, Optional, Protocol, TypeVar

import pytest

from bincodec.exception import UnsupportedTypeError
from bincodec.types import Char, Float32, Int8, KeyValuePair, UInt64
from bincodec.wire_types.classifier import WireCategory, classify, classify_value, is_untyped

UserId = NewType('UserId', UInt64)
T = TypeVar('T')


class Color(Enum):
    RED = 'red'


class Permission(IntFlag):
    READ = 1
    WRITE = 2


@dataclass
class Point:
    x: int
    y: int


class Pair(NamedTuple):
    left: int
    right: int


class Shape(ABC):
    @abstractmethod
    def area(self) -> float:
        raise NotImplementedError


class Base(ABC):
    pass


class Named(Protocol):
    name: str


class Payload(bytes):
    pass


@pytest.mark.parametrize('type_, category', [
    (None, WireCategory.NULL),
    (type(None), WireCategory.NULL),
    (bool, WireCategory.BOOL),
    (int, WireCategory.INTEGRAL),
    (Int8, WireCategory.INTEGRAL),
    (UserId, WireCategory.INTEGRAL),
    (Float32, WireCategory.FLOAT32),
    (float, WireCategory.FLOAT64),
    (Decimal, WireCategory.DECIMAL),
    (Char, WireCategory.CHAR),
    (str, WireCategory.UTF8_STRING),
    (datetime, WireCategory.DATETIME),
    (bytes, WireCategory.RAW_BYTES),
    (memoryview, WireCategory.RAW_BYTES),
    (Payload, WireCategory.RAW_BYTES),
    (Color, WireCategory.ENUM),
    (Permission, WireCategory.ENUM),
    (KeyValuePair[str, int], WireCategory.KEY_VALUE_PAIR),
    (tuple[str, int], WireCategory.KEY_VALUE_PAIR),
    (list[int], WireCategory.SEQUENCE),
    (tuple[int, ...], WireCategory.SEQUENCE),
    (set[str], WireCategory.SEQUENCE),
    (frozenset[str], WireCategory.SEQUENCE),
    (deque[int], WireCategory.SEQUENCE),
    (Sequence[int], WireCategory.SEQUENCE),
    (list, WireCategory.SEQUENCE),
    (dict[str, int], WireCategory.MAPPING),
    (OrderedDict[str, int], WireCategory.MAPPING),
    (Mapping[str, int], WireCategory.MAPPING),
    (Optional[dict[str, int]], WireCategory.MAPPING),
    (Optional[int], WireCategory.INTEGRAL),
    (Shape, WireCategory.POLYMORPHIC_COMPOSITE),
    (Base, WireCategory.POLYMORPHIC_COMPOSITE),
    (Named, WireCategory.POLYMORPHIC_COMPOSITE),
    (Point, WireCategory.PLAIN_COMPOSITE),
    (Pair, WireCategory.PLAIN_COMPOSITE),
])
def test_classify(type_: Any, category: WireCategory) -> None:
    assert classify(type_) is category


def test_bool_is_not_integral() -> None:
    # bool is a subclass of int, the more specific rule must win
    assert classify(bool) is WireCategory.BOOL
    assert classify_value(True) is WireCategory.BOOL
    assert classify_value(1) is WireCategory.INTEGRAL


def test_classify_value_uses_runtime_class() -> None:
    assert classify_value(Point(1, 2)) is WireCategory.PLAIN_COMPOSITE
    assert classify_value(Color.RED) is WireCategory.ENUM
    assert classify_value(b'') is WireCategory.RAW_BYTES
    assert classify_value((1, 2, 3)) is WireCategory.SEQUENCE


@pytest.mark.parametrize('type_', [int | str, Optional[int | str]])
def test_classify_rejects_unions(type_: Any) -> None:
    with pytest.raises(UnsupportedTypeError):
        classify(type_)


@pytest.mark.parametrize('type_', [Any, object, T])
def test_untyped(type_: Any) -> None:
    assert is_untyped(type_)
    with pytest.raises(UnsupportedTypeError):
        classify(type_)


def test_reference_categories() -> None:
    references = {category for category in WireCategory if category.is_reference()}
    assert references == {
        WireCategory.NULL,
        WireCategory.UTF8_STRING,
        WireCategory.RAW_BYTES,
        WireCategory.SEQUENCE,
        WireCategory.MAPPING,
        WireCategory.POLYMORPHIC_COMPOSITE,
        WireCategory.PLAIN_COMPOSITE,
    }
