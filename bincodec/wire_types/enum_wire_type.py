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

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from typing_extensions import Self, override

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.int import decode_int, encode_int
from bincodec.serialization.exceptions import BadDataError
from bincodec.utils.typing import get_supertype_chain
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

E = TypeVar('E', bound=Enum)


class EnumWireType(WireType[E]):
    """ Represents `Enum` members as a 32-bit signed integer.

    When every member has an `int` value, the value itself is written, that way `IntFlag` combinations and gaps in
    the values round-trip. Other enums write the position of the member in declaration order (aliases excluded).

    >>> from enum import IntEnum
    >>> class Color(Enum):
    ...     RED = 'red'
    ...     GREEN = 'green'
    >>> class Level(IntEnum):
    ...     LOW = 10
    ...     HIGH = 20
    >>> EnumWireType(Color).to_bytes(Color.GREEN).hex()
    '01000000'
    >>> EnumWireType(Level).to_bytes(Level.HIGH).hex()
    '14000000'
    >>> EnumWireType(Level).from_bytes(bytes.fromhex('0a000000'))
    <Level.LOW: 10>
    """

    __slots__ = ('_enum_class', '_members', '_by_value')
    _is_reference = False

    _enum_class: type[E]
    _members: tuple[E, ...]
    _by_value: bool

    def __init__(self, enum_class: type[E], /) -> None:
        self._enum_class = enum_class
        self._members = tuple(enum_class)
        self._by_value = all(
            isinstance(member.value, int) and not isinstance(member.value, bool)
            for member in self._members
        )

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        if not isinstance(base, type) or not issubclass(base, Enum):
            raise TypeError('expected Enum type')
        return cls(base)

    @override
    def _check_value(self, value: E, /) -> None:
        if not isinstance(value, self._enum_class):
            raise TypeError(f'expected {self._enum_class.__qualname__}, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: E, /) -> None:
        number = value.value if self._by_value else self._members.index(value)
        encode_int(serializer, number, length=4, signed=True)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> E:
        number = decode_int(deserializer, length=4, signed=True)
        if self._by_value:
            try:
                return self._enum_class(number)
            except ValueError as e:
                raise BadDataError(f'{number} is not a valid {self._enum_class.__qualname__}') from e
        if not 0 <= number < len(self._members):
            raise BadDataError(f'{number} is not a valid {self._enum_class.__qualname__} ordinal')
        return self._members[number]

    @override
    def zero_value(self) -> Optional[E]:
        return self._members[0] if self._members else None
