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
from collections.abc import Collection, Iterable, Set
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from typing_extensions import Self, override

from bincodec.exception import UnsupportedTypeError
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.compound_encoding.collection import decode_collection, encode_collection
from bincodec.utils.typing import get_args, get_origin, get_supertype_chain, pretty_type
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

T = TypeVar('T')


def _collection_builder(origin: type) -> Callable[[Iterable[Any]], Collection[Any]]:
    """ How to build a value of the declared collection class, abstract classes are built as `list` or `set`.
    """
    if inspect.isabstract(origin) or origin.__module__ == 'collections.abc':
        return set if issubclass(origin, Set) else list
    return origin


class SequenceWireType(WireType[Collection[T]]):
    """ Represents sized iterables: `list`, `tuple[T, ...]`, `set`, `frozenset`, `deque` and their abstract bases.

    The order of the items is preserved, what the order means (if anything) is up to the collection class.
    """

    __slots__ = ('_item', '_builder', '_max_length')
    _is_reference = True

    _item: WireType[T]
    _builder: Callable[[Iterable[T]], Collection[T]]

    def __init__(
        self,
        item: WireType[T],
        /,
        builder: Callable[[Iterable[T]], Collection[T]] = list,
        *,
        max_length: Optional[int] = None,
    ) -> None:
        self._item = item
        self._builder = builder
        self._max_length = max_length

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        origin = get_origin(base) or base
        if not isinstance(origin, type) or not issubclass(origin, Iterable):
            raise TypeError('expected a collection type')
        item_type = cls._get_item_type(base, origin)
        return cls(
            factory.build(item_type),
            _collection_builder(origin),
            max_length=factory.settings.MAX_COLLECTION_LENGTH,
        )

    @classmethod
    def _get_item_type(cls, type_: Any, origin: type) -> Any:
        args = get_args(type_)
        if not args:
            return Any
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return args[0]
            raise UnsupportedTypeError(f'{pretty_type(type_)} is not supported, use tuple[<type>, ...]')
        if len(args) != 1:
            raise UnsupportedTypeError(f'expected {origin.__name__}[<type>], got {pretty_type(type_)}')
        return args[0]

    @override
    def _check_value(self, value: Collection[T], /) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes)):
            raise TypeError(f'expected a collection, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: Collection[T], /) -> None:
        encode_collection(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[Collection[T]]:
        return decode_collection(
            deserializer,
            self._item.deserialize,
            self._builder,
            max_length=self._max_length,
        )
