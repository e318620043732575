# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Maps declared types and runtime values to the category that decides their wire layout.

The rules are checked in order and the first one that matches wins:

>>> from typing import Optional, Protocol
>>> from bincodec.types import Char, Int16, KeyValuePair
>>> classify(None)
<WireCategory.NULL: 'null'>
>>> classify(Int16), classify(int), classify(bool)
(<WireCategory.INTEGRAL: 'integral'>, <WireCategory.INTEGRAL: 'integral'>, <WireCategory.BOOL: 'bool'>)
>>> classify(Char), classify(str)
(<WireCategory.CHAR: 'char'>, <WireCategory.UTF8_STRING: 'utf8_string'>)
>>> classify(bytearray)
<WireCategory.RAW_BYTES: 'raw_bytes'>
>>> classify(KeyValuePair[str, int]), classify(tuple[str, int])
(<WireCategory.KEY_VALUE_PAIR: 'key_value_pair'>, <WireCategory.KEY_VALUE_PAIR: 'key_value_pair'>)
>>> classify(tuple[int, ...]), classify(dict[str, int])
(<WireCategory.SEQUENCE: 'sequence'>, <WireCategory.MAPPING: 'mapping'>)
>>> classify(Optional[list[int]])
<WireCategory.SEQUENCE: 'sequence'>
>>> class Shape(Protocol):
...     def area(self) -> float: ...
>>> classify(Shape)
<WireCategory.POLYMORPHIC_COMPOSITE: 'polymorphic_composite'>

Runtime values are classified by their class:

>>> classify_value([1, 2]), classify_value({'a': 1}), classify_value(None)
(<WireCategory.SEQUENCE: 'sequence'>, <WireCategory.MAPPING: 'mapping'>, <WireCategory.NULL: 'null'>)

Other unions cannot be classified:

>>> classify(int | str)
Traceback (most recent call last):
...
bincodec.exception.UnsupportedTypeError: int | str is not supported, only unions with None are
"""

import inspect
from abc import ABC
from collections import deque
from collections.abc import Iterable, Mapping, Sized
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Final, TypeVar

from bincodec.exception import UnsupportedTypeError
from bincodec.types import Char, Float32, Int8, Int16, Int32, Int64, KeyValuePair, UInt8, UInt16, UInt32, UInt64
from bincodec.utils.typing import (
    get_args,
    get_origin,
    get_supertype_chain,
    is_namedtuple,
    pretty_type,
    unwrap_optional,
)


class WireCategory(Enum):
    NULL = 'null'
    BOOL = 'bool'
    INTEGRAL = 'integral'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    DECIMAL = 'decimal'
    CHAR = 'char'
    UTF8_STRING = 'utf8_string'
    DATETIME = 'datetime'
    RAW_BYTES = 'raw_bytes'
    ENUM = 'enum'
    KEY_VALUE_PAIR = 'key_value_pair'
    SEQUENCE = 'sequence'
    MAPPING = 'mapping'
    POLYMORPHIC_COMPOSITE = 'polymorphic_composite'
    PLAIN_COMPOSITE = 'plain_composite'

    def is_reference(self) -> bool:
        """ Whether values of this category can be null without any extra marker.

        Reference categories start with a length or count, a value of `-1` there marks a null value.
        """
        return self in _REFERENCE_CATEGORIES


_REFERENCE_CATEGORIES: Final[frozenset[WireCategory]] = frozenset({
    WireCategory.NULL,
    WireCategory.UTF8_STRING,
    WireCategory.RAW_BYTES,
    WireCategory.SEQUENCE,
    WireCategory.MAPPING,
    WireCategory.POLYMORPHIC_COMPOSITE,
    WireCategory.PLAIN_COMPOSITE,
})

# matched by identity against each type in the NewType chain, subclasses are matched by `SCALAR_BASES`
SCALAR_CATEGORIES: Final[dict[Any, WireCategory]] = {
    bool: WireCategory.BOOL,
    Int8: WireCategory.INTEGRAL,
    UInt8: WireCategory.INTEGRAL,
    Int16: WireCategory.INTEGRAL,
    UInt16: WireCategory.INTEGRAL,
    Int32: WireCategory.INTEGRAL,
    UInt32: WireCategory.INTEGRAL,
    Int64: WireCategory.INTEGRAL,
    UInt64: WireCategory.INTEGRAL,
    int: WireCategory.INTEGRAL,
    Float32: WireCategory.FLOAT32,
    float: WireCategory.FLOAT64,
    Decimal: WireCategory.DECIMAL,
    Char: WireCategory.CHAR,
}

# subclasses of these builtins use the layout of their builtin base and are rebuilt as the subclass on decode
SCALAR_BASES: Final[tuple[tuple[type, WireCategory], ...]] = (
    (int, WireCategory.INTEGRAL),
    (float, WireCategory.FLOAT64),
    (Decimal, WireCategory.DECIMAL),
    (str, WireCategory.UTF8_STRING),
)

RAW_BYTES_TYPES: Final[tuple[type, ...]] = (bytes, bytearray, memoryview)

# unparametrized classes that are still recognized as collections, needed to classify runtime values
BUILTIN_COLLECTION_TYPES: Final[tuple[type, ...]] = (list, tuple, set, frozenset, deque, dict)


def is_untyped(type_: Any) -> bool:
    """ Whether the declared type says nothing about the value, encoding has to look at the value itself.

    >>> is_untyped(Any), is_untyped(object), is_untyped(int)
    (True, True, False)
    """
    return type_ is Any or type_ is object or isinstance(type_, TypeVar)


def is_polymorphic(cls: type) -> bool:
    """Abstract classes, classes that directly extend ABC and protocols, all need the concrete type on the wire."""
    return inspect.isabstract(cls) or ABC in cls.__bases__ or bool(getattr(cls, '_is_protocol', False))


def _is_collection(origin: type, parametrized: bool) -> bool:
    if is_namedtuple(origin):
        return False
    if parametrized:
        return issubclass(origin, Sized) and issubclass(origin, Iterable)
    return issubclass(origin, BUILTIN_COLLECTION_TYPES)


def _is_key_value_pair(origin: type, args: tuple[Any, ...]) -> bool:
    if issubclass(origin, KeyValuePair):
        return True
    return origin is tuple and len(args) == 2 and args[1] is not Ellipsis


def classify(type_: Any) -> WireCategory:
    """ Return the category of a declared type, raise `UnsupportedTypeError` when it has none.

    `Optional[T]` has the category of `T`.
    """
    if type_ is None or type_ is NoneType:
        return WireCategory.NULL

    type_, _ = unwrap_optional(type_)
    if get_origin(type_) is UnionType:
        raise UnsupportedTypeError(f'{pretty_type(type_)} is not supported, only unions with None are')
    if is_untyped(type_):
        raise UnsupportedTypeError(f'{pretty_type(type_)} has no category, the value must be inspected')

    for chain_type in get_supertype_chain(type_):
        category = SCALAR_CATEGORIES.get(chain_type)
        if category is not None:
            return category

    base = get_supertype_chain(type_)[-1]
    origin = get_origin(base)
    args = get_args(base)
    parametrized = origin is not None
    if not parametrized:
        origin = base
    if not isinstance(origin, type):
        raise UnsupportedTypeError(f'{pretty_type(type_)} is not a class')

    if not issubclass(origin, Enum):
        for scalar_base, category in SCALAR_BASES:
            if issubclass(origin, scalar_base):
                return category
    if issubclass(origin, datetime):
        return WireCategory.DATETIME
    if issubclass(origin, RAW_BYTES_TYPES):
        return WireCategory.RAW_BYTES
    if issubclass(origin, Enum):
        return WireCategory.ENUM
    if _is_key_value_pair(origin, args):
        return WireCategory.KEY_VALUE_PAIR
    if _is_collection(origin, parametrized):
        return WireCategory.MAPPING if issubclass(origin, Mapping) else WireCategory.SEQUENCE
    if is_polymorphic(origin):
        return WireCategory.POLYMORPHIC_COMPOSITE
    return WireCategory.PLAIN_COMPOSITE


def classify_value(value: Any) -> WireCategory:
    """Return the category of a runtime value, this is the category of its class."""
    if value is None:
        return WireCategory.NULL
    return classify(type(value))
