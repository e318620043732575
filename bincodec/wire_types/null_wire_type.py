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

from types import NoneType
from typing import TYPE_CHECKING, Any

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.length import decode_length
from bincodec.serialization.exceptions import BadDataError
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class NullWireType(WireType[None]):
    """ Represents the `None` type, only the null marker is ever written.
    """

    __slots__ = ()
    _is_reference = True

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        if type_ is not None and type_ is not NoneType:
            raise TypeError('expected None type')
        return cls()

    @override
    def _check_value(self, value: None, /) -> None:
        # None is handled by WireType.serialize, anything that gets here is wrong
        raise TypeError('expected None')

    @override
    def _serialize(self, serializer: Serializer, value: None, /) -> None:
        raise NotImplementedError('unreachable')

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> None:
        length = decode_length(deserializer)
        if length is not None:
            raise BadDataError(f'expected the null marker, got length {length}')
        return None
