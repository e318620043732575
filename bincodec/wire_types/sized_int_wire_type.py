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

from typing import TYPE_CHECKING, Any, Callable, Final

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.int import decode_int, encode_int
from bincodec.types import Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64
from bincodec.utils.typing import get_supertype_chain, pretty_type
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

# (byte size, signed) of each declared integer type, plain `int` is a 64-bit signed integer
INT_LAYOUTS: Final[dict[Any, tuple[int, bool]]] = {
    Int8: (1, True),
    UInt8: (1, False),
    Int16: (2, True),
    UInt16: (2, False),
    Int32: (4, True),
    UInt32: (4, False),
    Int64: (8, True),
    UInt64: (8, False),
    int: (8, True),
}


class SizedIntWireType(WireType[int]):
    """ Represents builtin `int` values with a fixed size and signedness.

    >>> SizedIntWireType(2, signed=True).to_bytes(-2).hex()
    'feff'
    >>> SizedIntWireType(2, signed=False).to_bytes(-2)
    Traceback (most recent call last):
    ...
    ValueError: -2 does not fit in 2 unsigned byte(s)
    """

    __slots__ = ('_builder', '_byte_size', '_signed')
    _is_reference = False

    _builder: Callable[[int], int]

    def __init__(self, byte_size: int, /, *, signed: bool, builder: Callable[[int], int] = int) -> None:
        self._builder = builder
        self._byte_size = byte_size
        self._signed = signed

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        for chain_type in get_supertype_chain(type_):
            layout = INT_LAYOUTS.get(chain_type)
            if layout is not None:
                byte_size, signed = layout
                return cls(byte_size, signed=signed)
        # subclasses of `int` are written as plain `int`
        base = get_supertype_chain(type_)[-1]
        if isinstance(base, type) and issubclass(base, int) and base is not bool:
            byte_size, signed = INT_LAYOUTS[int]
            return cls(byte_size, signed=signed, builder=base)
        raise TypeError(f'{pretty_type(type_)} is not an integer type')

    @override
    def _check_value(self, value: int, /) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f'expected int, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: int, /) -> None:
        encode_int(serializer, value, length=self._byte_size, signed=self._signed)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        value = decode_int(deserializer, length=self._byte_size, signed=self._signed)
        return value if self._builder is int else self._builder(value)

    @override
    def zero_value(self) -> int:
        return self._builder(0)
