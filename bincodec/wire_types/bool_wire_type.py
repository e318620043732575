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
from bincodec.serialization.encoding.bool import decode_bool, encode_bool
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class BoolWireType(WireType[bool]):
    """ Represents builtin `bool` values.
    """

    __slots__ = ()
    _is_reference = False

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        if type_ is not bool:
            raise TypeError('expected bool type')
        return cls()

    @override
    def _check_value(self, value: bool, /) -> None:
        if not isinstance(value, bool):
            raise TypeError(f'expected bool, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: bool, /) -> None:
        encode_bool(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bool:
        return decode_bool(deserializer)

    @override
    def zero_value(self) -> bool:
        return False
