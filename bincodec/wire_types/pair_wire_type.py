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

from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.compound_encoding.pair import decode_pair, encode_pair
from bincodec.types import KeyValuePair
from bincodec.utils.typing import get_args, get_origin, get_supertype_chain
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

K = TypeVar('K')
V = TypeVar('V')


class PairWireType(WireType[tuple[K, V]]):
    """ Represents `KeyValuePair[K, V]` and `tuple[K, V]` values, the key is written right before the value.
    """

    __slots__ = ('_key', '_value', '_builder')
    _is_reference = False

    _key: WireType[K]
    _value: WireType[V]
    _builder: Callable[[K, V], tuple[K, V]]

    def __init__(
        self,
        key: WireType[K],
        value: WireType[V],
        /,
        builder: Callable[[K, V], tuple[K, V]] = KeyValuePair,
    ) -> None:
        self._key = key
        self._value = value
        self._builder = builder

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        origin = get_origin(base) or base
        args = get_args(base)
        if origin is tuple:
            if len(args) != 2 or args[1] is Ellipsis:
                raise TypeError('expected tuple[<key type>, <value type>]')
            builder: Callable[[Any, Any], tuple[Any, Any]] = lambda key, value: (key, value)  # noqa: E731
        elif isinstance(origin, type) and issubclass(origin, KeyValuePair):
            builder = origin
        else:
            raise TypeError('expected KeyValuePair or tuple type')
        key_type, value_type = args or (Any, Any)
        return cls(factory.build(key_type), factory.build(value_type), builder)

    @override
    def _check_value(self, value: tuple[K, V], /) -> None:
        if not isinstance(value, tuple) or len(value) != 2:
            raise TypeError(f'expected a key-value pair, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: tuple[K, V], /) -> None:
        encode_pair(serializer, value, self._key.serialize, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple[K, V]:
        key, value = decode_pair(deserializer, self._key.deserialize, self._value.deserialize)
        return self._builder(key, value)

    @override
    def zero_value(self) -> Optional[tuple[K, V]]:
        return self._builder(self._key.zero_value(), self._value.zero_value())  # type: ignore[arg-type]
