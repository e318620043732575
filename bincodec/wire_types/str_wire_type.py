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

from typing import TYPE_CHECKING, Any, Callable, Optional

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.utf8 import decode_utf8, encode_utf8
from bincodec.utils.typing import get_supertype_chain
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class StrWireType(WireType[str]):
    """ Represents builtin `str` values, encoded as UTF-8 with a byte length prefix.

    Subclasses of `str` are written as plain strings and decoded as the declared subclass.
    """

    __slots__ = ('_builder', '_max_length')
    _is_reference = True

    _builder: Callable[[str], str]

    def __init__(self, builder: Callable[[str], str] = str, *, max_length: Optional[int] = None) -> None:
        self._builder = builder
        self._max_length = max_length

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        if not isinstance(base, type) or not issubclass(base, str):
            raise TypeError('expected str type')
        return cls(base, max_length=factory.settings.MAX_BYTES_LENGTH)

    @override
    def _check_value(self, value: str, /) -> None:
        if not isinstance(value, str):
            raise TypeError(f'expected str, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_utf8(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[str]:
        text = decode_utf8(deserializer, max_length=self._max_length)
        if text is None or self._builder is str:
            return text
        return self._builder(text)
