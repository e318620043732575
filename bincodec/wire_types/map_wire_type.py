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
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from typing_extensions import Self, override

from bincodec.exception import UnsupportedTypeError
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from bincodec.utils.typing import get_args, get_origin, get_supertype_chain, pretty_type
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

K = TypeVar('K')
V = TypeVar('V')


def _mapping_builder(origin: type) -> Callable[[Iterable[tuple[Any, Any]]], Mapping[Any, Any]]:
    if origin is dict or inspect.isabstract(origin) or origin.__module__ == 'collections.abc':
        return dict
    if issubclass(origin, defaultdict):
        # XXX: the default factory is not part of the value, decoded instances don't have one
        return lambda items: origin(None, items)
    return lambda items: origin(dict(items))


class MapWireType(WireType[Mapping[K, V]]):
    """ Represents `dict`, `OrderedDict` and the abstract mapping classes.

    Entries are written in iteration order, which is the order decoded mappings will have.
    """

    __slots__ = ('_key', '_value', '_builder', '_max_length')
    _is_reference = True

    _key: WireType[K]
    _value: WireType[V]
    _builder: Callable[[Iterable[tuple[K, V]]], Mapping[K, V]]

    def __init__(
        self,
        key: WireType[K],
        value: WireType[V],
        /,
        builder: Callable[[Iterable[tuple[K, V]]], Mapping[K, V]] = dict,
        *,
        max_length: Optional[int] = None,
    ) -> None:
        self._key = key
        self._value = value
        self._builder = builder
        self._max_length = max_length

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        origin = get_origin(base) or base
        if not isinstance(origin, type) or not issubclass(origin, Mapping):
            raise TypeError('expected Mapping type')
        args = get_args(base)
        if not args:
            args = (Any, Any)
        if len(args) != 2:
            raise UnsupportedTypeError(f'expected {origin.__name__}[<key>, <value>], got {pretty_type(type_)}')
        key_type, value_type = args
        return cls(
            factory.build(key_type),
            factory.build(value_type),
            _mapping_builder(origin),
            max_length=factory.settings.MAX_COLLECTION_LENGTH,
        )

    @override
    def _check_value(self, value: Mapping[K, V], /) -> None:
        if not isinstance(value, Mapping):
            raise TypeError(f'expected a mapping, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: Mapping[K, V], /) -> None:
        encode_mapping(serializer, value, self._key.serialize, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[Mapping[K, V]]:
        return decode_mapping(
            deserializer,
            self._key.deserialize,
            self._value.deserialize,
            self._builder,
            max_length=self._max_length,
        )
