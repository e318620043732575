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

from bincodec.exception import UnsupportedTypeError
from bincodec.serialization import Deserializer, Serializer
from bincodec.wire_types.classifier import is_untyped
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory


class RuntimeWireType(WireType[Any]):
    """ Represents `Any`, `object` and unbound type variables.

    Values are written with the wire type of their runtime class. Nothing on the wire says which class that was, so
    these values cannot be decoded, the declared type must be concrete for that.
    """

    __slots__ = ('_factory',)
    _is_reference = True

    def __init__(self, factory: WireTypeFactory, /) -> None:
        self._factory = factory

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        if not is_untyped(type_):
            raise TypeError(f'{type_!r} is not untyped')
        return cls(factory)

    @override
    def _check_value(self, value: Any, /) -> None:
        pass

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        self._factory.build(type(value)).serialize(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        raise UnsupportedTypeError('untyped values cannot be decoded, a concrete type must be declared')
