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

import inspect
from typing import TYPE_CHECKING, Any, Optional

from typing_extensions import Self, get_protocol_members, override

from bincodec.exception import TypeMismatchError
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.utf8 import decode_utf8, encode_utf8
from bincodec.serialization.exceptions import BadDataError
from bincodec.utils.typing import get_origin, get_supertype_chain, pretty_type
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

# type names are qualified class names, anything longer than this is not a name
MAX_TYPE_NAME_LENGTH = 4096


def _has_member(cls: type, name: str) -> bool:
    if hasattr(cls, name):
        return True
    # fields without a default are only known by their annotation
    return any(name in inspect.get_annotations(klass) for klass in cls.__mro__)


def is_assignable(cls: type, target: type) -> bool:
    """ Whether instances of `cls` can be stored where `target` is declared.

    Protocols are checked structurally, even when they are not runtime checkable.

    >>> from typing import Protocol
    >>> class Named(Protocol):
    ...     name: str
    >>> class User:
    ...     name: str
    >>> is_assignable(User, Named), is_assignable(int, Named), is_assignable(bool, int)
    (True, False, True)
    """
    if not isinstance(cls, type):
        return False
    if target in cls.__mro__:
        return True
    if getattr(target, '_is_protocol', False):
        return all(_has_member(cls, name) for name in get_protocol_members(target))
    return issubclass(cls, target)


class PolymorphicWireType(WireType[Any]):
    """ Represents abstract classes and protocols, the concrete class of the value is written before its members.

    Layout: [type name: UTF-8 string][composite members of the concrete class], the null marker takes the place of
    the name for None.
    """

    __slots__ = ('_declared', '_factory', '_by_import')
    _is_reference = True

    _declared: type
    _factory: WireTypeFactory

    def __init__(self, declared: type, factory: WireTypeFactory, /, *, by_import: bool = False) -> None:
        self._declared = declared
        self._factory = factory
        self._by_import = by_import

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        origin = get_origin(base) or base
        if not isinstance(origin, type):
            raise TypeError(f'{pretty_type(type_)} is not a class')
        return cls(origin, factory, by_import=factory.settings.RESOLVE_BY_IMPORT)

    @override
    def _check_value(self, value: Any, /) -> None:
        if not is_assignable(type(value), self._declared):
            raise TypeError(f'{type(value).__qualname__} is not assignable to {pretty_type(self._declared)}')

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        concrete = type(value)
        encode_utf8(serializer, self._factory.registry.name_of(concrete))
        self._factory.composite_for(concrete).serialize(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[Any]:
        name = decode_utf8(deserializer, max_length=MAX_TYPE_NAME_LENGTH)
        if name is None:
            return None
        concrete = self._factory.registry.resolve(name, by_import=self._by_import)
        if not is_assignable(concrete, self._declared):
            raise TypeMismatchError(concrete, self._declared)
        if inspect.isabstract(concrete):
            raise BadDataError(f'{name!r} is abstract and cannot be instantiated')
        return self._factory.composite_for(concrete).deserialize(deserializer)
