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

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.decimal import decode_decimal, encode_decimal
from bincodec.utils.typing import get_supertype_chain
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class DecimalWireType(WireType[Decimal]):
    """ Represents `decimal.Decimal` values, limited to a 96-bit coefficient and a scale of 28.
    """

    __slots__ = ('_builder',)
    _is_reference = False

    _builder: Callable[[Decimal], Decimal]

    def __init__(self, builder: Callable[[Decimal], Decimal] = Decimal) -> None:
        self._builder = builder

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        if not isinstance(base, type) or not issubclass(base, Decimal):
            raise TypeError('expected Decimal type')
        return cls(base)

    @override
    def _check_value(self, value: Decimal, /) -> None:
        if not isinstance(value, Decimal):
            raise TypeError(f'expected Decimal, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: Decimal, /) -> None:
        encode_decimal(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Decimal:
        value = decode_decimal(deserializer)
        return value if self._builder is Decimal else self._builder(value)

    @override
    def zero_value(self) -> Decimal:
        return self._builder(Decimal(0))
