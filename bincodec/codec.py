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

"""
The public encode/decode entry points.

>>> from dataclasses import dataclass
>>> @dataclass
... class Item:
...     name: str
...     tags: list[str]
>>> codec = BinaryCodec(CodecSettings())
>>> data = codec.encode(Item('pen', ['blue']))
>>> codec.decode(data, Item)
Item(name='pen', tags=['blue'])
>>> codec.decode(codec.encode(None), Item) is None
True
"""

from typing import Any, BinaryIO, Optional, TypeVar, Union, overload

from structlog import get_logger

from bincodec.conf.get_settings import get_global_settings
from bincodec.conf.settings import CodecSettings
from bincodec.exception import EncodeError, UnsupportedTypeError
from bincodec.introspection.introspector import MemberIntrospector
from bincodec.introspection.member import SerializationDescriptor
from bincodec.introspection.resolver import DEFAULT_REGISTRY, TypeRegistry
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.types import Buffer
from bincodec.wire_types.diagnostics import DecodeResult, collecting_skipped
from bincodec.wire_types.factory import WireTypeFactory
from bincodec.wire_types.wire_type import WireType

logger = get_logger()

T = TypeVar('T')

Sink = Union[Serializer, BinaryIO]
Source = Union[Deserializer, BinaryIO, Buffer]


class BinaryCodec:
    """ Encodes values to bytes and decodes bytes back to values of a declared type.

    A codec owns the cache of wire types, so it should be created once and reused. It can be shared between threads.
    """

    def __init__(
        self,
        settings: Optional[CodecSettings] = None,
        *,
        introspector: Optional[MemberIntrospector] = None,
        registry: Optional[TypeRegistry] = None,
    ) -> None:
        self.log = logger.new()
        self.settings = settings if settings is not None else get_global_settings()
        self.introspector = introspector if introspector is not None else MemberIntrospector()
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self._factory = WireTypeFactory(self.settings, self.introspector, self.registry)

    def register(self, cls: Any = None, /, *, name: Optional[str] = None) -> Any:
        """Register a class for polymorphic slots, same as `TypeRegistry.register` on this codec's registry."""
        return self.registry.register(cls, name=name)

    def register_descriptor(self, descriptor: SerializationDescriptor) -> None:
        self.introspector.register_descriptor(descriptor)

    def make_codec(self, type_: type[T]) -> WireType[T]:
        """ Return the wire type of `type_`, it can encode and decode with `to_bytes` and `from_bytes`.

        Raises `UnsupportedTypeError` when the type cannot be handled.
        """
        return self._factory.build(type_)

    def encode(self, value: Any, type_: Any = None) -> bytes:
        """ Encode a value, using its runtime class when no type is declared.

        Decoding needs the same type, the runtime class of `value` if none was declared.
        """
        serializer = Serializer.build_bytes_serializer()
        self._encode(serializer, value, type_)
        return bytes(serializer.finalize())

    def encode_into(self, sink: Sink, value: Any, type_: Any = None) -> None:
        """ Like `encode`, but writes into a serializer or a binary stream.

        Streams are flushed but not closed. `MAX_MESSAGE_BYTES` limits how much can be written.
        """
        is_stream = not isinstance(sink, Serializer)
        serializer = _as_serializer(sink).with_optional_max_bytes(self.settings.MAX_MESSAGE_BYTES)
        self._encode(serializer, value, type_)
        if is_stream:
            serializer.finalize()

    @overload
    def decode(self, data: Buffer, type_: type[T]) -> Optional[T]:
        ...

    @overload
    def decode(self, data: Buffer, type_: Any) -> Any:
        ...

    def decode(self, data: Buffer, type_: Any) -> Any:
        """ Decode a value of the declared type, the data must hold exactly one value.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self._factory.build(type_).deserialize(deserializer)
        deserializer.finalize()
        return value

    @overload
    def decode_from(self, source: Source, type_: type[T]) -> Optional[T]:
        ...

    @overload
    def decode_from(self, source: Source, type_: Any) -> Any:
        ...

    def decode_from(self, source: Source, type_: Any) -> Any:
        """ Decode a single value from a deserializer, stream or buffer, anything after it is left unread.

        `MAX_MESSAGE_BYTES` limits how much can be read.
        """
        wire_type = self._factory.build(type_)
        deserializer = _as_deserializer(source).with_optional_max_bytes(self.settings.MAX_MESSAGE_BYTES)
        return wire_type.deserialize(deserializer)

    def decode_with_report(self, data: Buffer, type_: Any) -> DecodeResult[Any]:
        """ Like `decode`, but also returns the composite members that were skipped.
        """
        with collecting_skipped() as skipped:
            value = self.decode(data, type_)
        return DecodeResult(value, tuple(skipped))

    def _encode(self, serializer: Serializer, value: Any, type_: Any) -> None:
        wire_type = self._factory.build(Any if type_ is None else type_)
        try:
            wire_type.serialize(serializer, value)
        except (EncodeError, UnsupportedTypeError, RecursionError):
            raise
        except Exception as e:
            raise EncodeError(str(e) or type(e).__name__) from e


def _as_serializer(sink: Sink) -> Serializer:
    if isinstance(sink, Serializer):
        return sink
    if hasattr(sink, 'write'):
        return Serializer.build_stream_serializer(sink)
    raise TypeError(f'cannot write into {type(sink).__name__}')


def _as_deserializer(source: Source) -> Deserializer:
    if isinstance(source, Deserializer):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return Deserializer.build_bytes_deserializer(source)
    if hasattr(source, 'read'):
        return Deserializer.build_stream_deserializer(source)  # type: ignore[arg-type]
    raise TypeError(f'cannot read from {type(source).__name__}')


_default_codec: Optional[BinaryCodec] = None


def get_default_codec() -> BinaryCodec:
    """The codec used by the module-level functions, created on first use with the global settings."""
    global _default_codec
    if _default_codec is None:
        _default_codec = BinaryCodec()
    return _default_codec


def encode(value: Any, type_: Any = None) -> bytes:
    return get_default_codec().encode(value, type_)


def encode_into(sink: Sink, value: Any, type_: Any = None) -> None:
    get_default_codec().encode_into(sink, value, type_)


def decode(data: Buffer, type_: Any) -> Any:
    return get_default_codec().decode(data, type_)


def decode_from(source: Source, type_: Any) -> Any:
    return get_default_codec().decode_from(source, type_)


def decode_with_report(data: Buffer, type_: Any) -> DecodeResult[Any]:
    return get_default_codec().decode_with_report(data, type_)


def make_codec(type_: type[T]) -> WireType[T]:
    return get_default_codec().make_codec(type_)


def register_descriptor(descriptor: SerializationDescriptor) -> None:
    get_default_codec().register_descriptor(descriptor)


# polymorphic registration does not need the default codec, it goes to the shared default registry
register = DEFAULT_REGISTRY.register
