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

from typing import TypeVar

from typing_extensions import override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.compound_encoding.optional import decode_optional, encode_optional
from bincodec.wire_types.wire_type import WireType

V = TypeVar('V')


class OptionalWireType(WireType[V]):
    """ Represents `Optional[V]` when V is a value wire type, a presence byte comes before the value.

    Reference wire types already accept None, `WireTypeFactory` does not wrap them.

    >>> from bincodec.wire_types.bool_wire_type import BoolWireType
    >>> OptionalWireType(BoolWireType()).to_bytes(None).hex()
    '00'
    >>> OptionalWireType(BoolWireType()).to_bytes(True).hex()
    '0101'
    """

    __slots__ = ('_value',)

    _is_reference = False

    _value: WireType[V]

    def __init__(self, wire_type: WireType[V], /) -> None:
        assert not wire_type.is_reference(), 'reference wire types must not be wrapped'
        self._value = wire_type

    @override
    def _serialize_none(self, serializer: Serializer, /) -> None:
        encode_optional(serializer, None, self._value.serialize)

    @override
    def _check_value(self, value: V, /) -> None:
        self._value._check_value(value)

    @override
    def _serialize(self, serializer: Serializer, value: V, /) -> None:
        encode_optional(serializer, value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> V | None:
        return decode_optional(deserializer, self._value.deserialize)
