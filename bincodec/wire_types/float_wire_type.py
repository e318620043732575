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

from typing import TYPE_CHECKING, Any, Callable

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.float import decode_float, encode_float
from bincodec.types import Float32
from bincodec.utils.typing import get_supertype_chain
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class FloatWireType(WireType[float]):
    """ Represents builtin `float` values, as single (`Float32`) or double precision.

    Integers are accepted and written as floats. Subclasses of `float` are decoded as the declared subclass.
    """

    __slots__ = ('_builder', '_byte_size')
    _is_reference = False

    _builder: Callable[[float], float]

    def __init__(self, byte_size: int, /, *, builder: Callable[[float], float] = float) -> None:
        assert byte_size in (4, 8)
        self._builder = builder
        self._byte_size = byte_size

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        chain = get_supertype_chain(type_)
        if Float32 in chain:
            return cls(4)
        base = chain[-1]
        if not isinstance(base, type) or not issubclass(base, float):
            raise TypeError('expected float type')
        return cls(8, builder=base)

    @override
    def _check_value(self, value: float, /) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise TypeError(f'expected float, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        encode_float(serializer, float(value), length=self._byte_size)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        value = decode_float(deserializer, length=self._byte_size)
        return value if self._builder is float else self._builder(value)

    @override
    def zero_value(self) -> float:
        return self._builder(0.0)
