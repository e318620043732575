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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional, TypeVar, final

from typing_extensions import Self

from bincodec.exception import UnsupportedTypeError
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.length import encode_length
from bincodec.utils.typing import pretty_type

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

T = TypeVar('T')


class WireType(ABC, Generic[T]):
    """ This class models how values of a declared type are laid out on the wire.

    A tree of instances is built by `WireTypeFactory` for each declared type, compound wire types hold the wire types
    of their items or members. Instances are immutable once built, and can be shared between threads.

    Reference wire types (strings, byte buffers, collections and composites) accept `None`, which is written as the
    null length marker. Value wire types reject `None`, `OptionalWireType` adds a presence byte for them.
    """

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _is_reference: ClassVar[bool]

    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        """ Instantiate a WireType from a declared type.

        Compound wire types are expected to use `factory.build` to get the wire types of their inner types.
        """
        raise UnsupportedTypeError(f'{cls.__name__} cannot be built from {pretty_type(type_)}')

    def _resolve(self, factory: WireTypeFactory, /) -> None:
        """ Called by the factory after this instance is cached.

        Wire types that can refer back to themselves (through their members) finish building here, any reference to
        the type being built will get this same instance from the cache.
        """

    @final
    def is_reference(self) -> bool:
        """Whether None is written as the null length marker, without a presence byte."""
        return self._is_reference

    @final
    def serialize(self, serializer: Serializer, value: Optional[T], /) -> None:
        """ Serialize a value according to the declared type that was abstracted.

        Raises `TypeError` or `ValueError` when the value does not fit the declared type.
        """
        # XXX: subclasses must implement WireType._serialize, not WireType.serialize
        if value is None:
            self._serialize_none(serializer)
            return
        self._check_value(value)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> Optional[T]:
        """ Deserialize a value according to the declared type that was abstracted.

        Only reference wire types (and optional ones) can produce None.
        """
        # XXX: subclasses must implement WireType._deserialize, not WireType.deserialize
        return self._deserialize(deserializer)

    @final
    def to_bytes(self, value: Optional[T], /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /) -> Optional[T]:
        """ Shortcut to quickly parse a value T from `bytes`, trailing bytes are an error.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    def _serialize_none(self, serializer: Serializer, /) -> None:
        """Write None, reference wire types write the null length marker and other wire types reject it."""
        if not self._is_reference:
            raise TypeError(f'None is not a valid {self._type_name()} value')
        encode_length(serializer, None)

    def zero_value(self) -> Optional[T]:
        """ The value a composite field holds when the stream does not carry it and it has no default.

        Reference wire types use None.
        """
        return None

    def _type_name(self) -> str:
        return type(self).__name__.removesuffix('WireType').lower()

    @abstractmethod
    def _check_value(self, value: T, /) -> None:
        """ Raise `TypeError` if the value's type is not compatible, shallow only.

        Compound values have their items checked when the items are serialized.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, the value is not None and has been checked.

        Compound wire types should pass `WireType.serialize` of their inner wire types as encoders.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[T]:
        """ Inner implementation of `deserialize`.

        Reference wire types read their own length or count first and return None for the null marker.
        """
        raise NotImplementedError
