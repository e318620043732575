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

from typing import TYPE_CHECKING, Any

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.char import decode_char, encode_char
from bincodec.types import Char
from bincodec.utils.typing import get_supertype_chain
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class CharWireType(WireType[str]):
    """ Represents `Char` values, strings of exactly one code point.
    """

    __slots__ = ()
    _is_reference = False

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        if Char not in get_supertype_chain(type_):
            raise TypeError('expected Char type')
        return cls()

    @override
    def _check_value(self, value: str, /) -> None:
        if not isinstance(value, str):
            raise TypeError(f'expected str, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_char(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return decode_char(deserializer)

    @override
    def zero_value(self) -> str:
        return '\0'
