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

from datetime import datetime
from typing import TYPE_CHECKING, Any

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.datetime import decode_datetime, encode_datetime
from bincodec.utils.typing import is_subclass
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class DatetimeWireType(WireType[datetime]):
    """ Represents `datetime.datetime` values.

    Naive values round-trip as naive, aware values are converted to UTC.
    """

    __slots__ = ()
    _is_reference = False

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        if not is_subclass(type_, datetime):
            raise TypeError('expected datetime type')
        return cls()

    @override
    def _check_value(self, value: datetime, /) -> None:
        if not isinstance(value, datetime):
            raise TypeError(f'expected datetime, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: datetime, /) -> None:
        encode_datetime(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> datetime:
        return decode_datetime(deserializer)

    @override
    def zero_value(self) -> datetime:
        return datetime.min
