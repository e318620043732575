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

from __future__ import annotations

from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args as _typing_get_args, get_origin as _typing_get_origin


def get_origin(t: Any, /) -> Any:
    """Like typing.get_origin, but `typing.Union[...]` and `X | Y` both result in `types.UnionType`.

    >>> get_origin(list[int])
    <class 'list'>
    >>> get_origin(int) is None
    True
    >>> get_origin(int | None) is UnionType
    True
    >>> from typing import Optional
    >>> get_origin(Optional[int]) is UnionType
    True
    """
    origin = _typing_get_origin(t)
    if origin is Union:
        return UnionType
    return origin


def get_args(t: Any, /) -> tuple[Any, ...]:
    """Same as typing.get_args, kept here so callers don't mix both modules."""
    return _typing_get_args(t)


def unwrap_optional(t: Any, /) -> tuple[Any, bool]:
    """ Split an `Optional[T]` into `(T, True)`, any other type results in `(type, False)`.

    Unions of more than one non-None type are returned unchanged (and not considered optional), it is up to the
    caller to reject them.

    >>> unwrap_optional(int | None)
    (<class 'int'>, True)
    >>> unwrap_optional(int)
    (<class 'int'>, False)
    >>> unwrap_optional(int | str)
    (int | str, False)
    """
    if get_origin(t) is not UnionType:
        return t, False
    args = get_args(t)
    not_none = tuple(arg for arg in args if arg is not NoneType)
    if len(not_none) == 1 and len(args) == 2:
        return not_none[0], True
    return t, False


def get_supertype_chain(t: Any, /) -> list[Any]:
    """ List the type followed by every `__supertype__` of nested NewType declarations.

    >>> from typing import NewType
    >>> A = NewType('A', int)
    >>> B = NewType('B', A)
    >>> [getattr(x, '__name__') for x in get_supertype_chain(B)]
    ['B', 'A', 'int']
    """
    chain = [t]
    while (super_type := getattr(t, '__supertype__', None)) is not None:
        chain.append(super_type)
        t = super_type
    return chain


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes.

    >>> is_subclass(bool, int)
    True
    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> is_subclass(N, str)
    False
    """
    cls = get_supertype_chain(cls)[-1]
    return isinstance(cls, type) and issubclass(cls, class_or_tuple)


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int)
    'int'
    >>> pretty_type(None)
    'None'
    >>> pretty_type(list[int])
    'list[int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__qualname__', getattr(type_, '__name__', repr(type_)))


def is_namedtuple(t: Any, /) -> bool:
    """ Whether `t` is a class created by `typing.NamedTuple` or `collections.namedtuple`.

    >>> from typing import NamedTuple
    >>> class Point(NamedTuple):
    ...     x: int
    ...     y: int
    >>> is_namedtuple(Point)
    True
    >>> is_namedtuple(tuple)
    False
    """
    return isinstance(t, type) and issubclass(t, tuple) and hasattr(t, '_fields')


def substitute_type_vars(t: Any, substitutions: dict[Any, Any], /) -> Any:
    """ Replace the type variables found in `t` using the given mapping, unknown variables become `Any`.

    >>> from typing import TypeVar
    >>> T = TypeVar('T')
    >>> substitute_type_vars(T, {T: int})
    <class 'int'>
    >>> substitute_type_vars(list[T], {T: str})
    list[str]
    >>> substitute_type_vars(dict[str, T], {})
    dict[str, typing.Any]
    """
    if isinstance(t, TypeVar):
        return substitutions.get(t, Any)
    parameters = getattr(t, '__parameters__', ())
    if not parameters or get_origin(t) is None:
        return t
    return t[tuple(substitutions.get(p, Any) for p in parameters)]
