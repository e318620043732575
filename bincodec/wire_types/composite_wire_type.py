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
Composite values are written as two member lists, fields first and then properties.

Each list is an int32 count followed by that many members, a member is its name (as a length prefixed UTF-8 string)
followed by the byte length of its value and the value itself. The length makes it possible to step over members
that the target type doesn't declare, or whose value cannot be read, without losing track of the stream.

>>> from dataclasses import dataclass
>>> from bincodec.conf.settings import CodecSettings
>>> from bincodec.wire_types.factory import WireTypeFactory
>>> @dataclass
... class Point:
...     x: bool
...     y: bool
>>> point_type = WireTypeFactory(CodecSettings()).build(Point)
>>> point_type.to_bytes(Point(x=True, y=False)).hex()
'02000000010000007801000000010100000079010000000000000000'

Breakdown of the result:

    02000000: 2 fields
    0100000078: name 'x'
    01000000: value length
    01: True
    0100000079: name 'y'
    01000000: value length
    00: False
    00000000: no properties

>>> point_type.from_bytes(bytes.fromhex('02000000010000007801000000010100000079010000000000000000'))
Point(x=True, y=False)
>>> point_type.to_bytes(None).hex()
'ffffffff'
"""

from __future__ import annotations

from dataclasses import MISSING, fields as dataclass_fields, is_dataclass
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from structlog import get_logger
from typing_extensions import Self, override

from bincodec.exception import DecodeError, EncodeError, InvalidDataError, UnsupportedTypeError
from bincodec.introspection.member import Member
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.length import decode_length, encode_length
from bincodec.serialization.encoding.utf8 import decode_utf8, encode_utf8
from bincodec.serialization.exceptions import BadDataError
from bincodec.utils.typing import get_args, get_origin, get_supertype_chain, is_namedtuple, pretty_type
from bincodec.utils.typing import substitute_type_vars
from bincodec.wire_types.diagnostics import SkippedMember, entering_member, record_skipped
from bincodec.wire_types.wire_type import WireType

if TYPE_CHECKING:
    from bincodec.wire_types.factory import WireTypeFactory

logger = get_logger()

C = TypeVar('C')

# member names are identifiers, anything longer than this is not a name
MAX_MEMBER_NAME_LENGTH = 1024

_Entry = tuple[Member, WireType]


class CompositeWireType(WireType[C]):
    """ Represents instances of classes through their serializable members.

    Decoding never calls `__init__`: a raw instance is allocated with `__new__`, every field is set to its default
    (or the zero value of its wire type) and the fields found in the stream are set over it. Properties are applied
    through their setters after all fields are in place. `NamedTuple` classes are constructed from the field values
    instead, since tuples cannot be mutated.
    """

    __slots__ = (
        'log',
        '_class',
        '_type_args',
        '_fields',
        '_properties',
        '_fields_by_name',
        '_properties_by_name',
        '_hidden_defaults',
        '_strict',
        '_log_skipped',
        '_max_members',
    )
    _is_reference = True

    _class: type[C]
    _fields: tuple[_Entry, ...]
    _properties: tuple[_Entry, ...]

    def __init__(
        self,
        class_: type[C],
        /,
        type_args: tuple[Any, ...] = (),
        *,
        strict: bool = False,
        log_skipped: bool = True,
        max_members: Optional[int] = None,
    ) -> None:
        self.log = logger.new()
        self._class = class_
        self._type_args = type_args
        self._strict = strict
        self._log_skipped = log_skipped
        self._max_members = max_members
        # XXX: filled by _resolve, the factory calls it right after caching this instance
        self._fields = ()
        self._properties = ()
        self._fields_by_name: dict[str, _Entry] = {}
        self._properties_by_name: dict[str, _Entry] = {}
        self._hidden_defaults: tuple[Member, ...] = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, factory: WireTypeFactory) -> Self:
        base = get_supertype_chain(type_)[-1]
        origin = get_origin(base) or base
        if not isinstance(origin, type):
            raise TypeError(f'{pretty_type(type_)} is not a class')
        settings = factory.settings
        return cls(
            origin,
            get_args(base),
            strict=settings.STRICT_MEMBERS,
            log_skipped=settings.LOG_SKIPPED_MEMBERS,
            max_members=settings.MAX_COLLECTION_LENGTH,
        )

    @override
    def _resolve(self, factory: WireTypeFactory, /) -> None:
        descriptor = factory.introspector.descriptor_of(self._class)
        parameters = getattr(self._class, '__parameters__', ())
        substitutions = dict(zip(parameters, self._type_args))

        def entry(member: Member) -> _Entry:
            return member, factory.build(substitute_type_vars(member.declared_type, substitutions))

        self._fields = tuple(entry(member) for member in descriptor.fields)
        self._properties = tuple(entry(member) for member in descriptor.properties)
        self._fields_by_name = {member.name: (member, wire_type) for member, wire_type in self._fields}
        self._properties_by_name = {member.name: (member, wire_type) for member, wire_type in self._properties}
        self._hidden_defaults = tuple(self._find_hidden_defaults())

    def _find_hidden_defaults(self) -> list[Member]:
        """Dataclass fields that are not serialized but must still be set on decoded instances."""
        if not is_dataclass(self._class) or is_namedtuple(self._class):
            return []
        hidden = []
        for field in dataclass_fields(self._class):
            if field.name in self._fields_by_name:
                continue
            default_factory = None if field.default_factory is MISSING else field.default_factory
            member = Member.field(field.name, field.type, default=field.default, default_factory=default_factory)
            if member.has_default():
                hidden.append(member)
        return hidden

    @override
    def _check_value(self, value: C, /) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__qualname__}, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: C, /) -> None:
        self._write_members(serializer, self._fields, value)
        self._write_members(serializer, self._properties, value)

    def _write_members(self, serializer: Serializer, entries: tuple[_Entry, ...], instance: C) -> None:
        encode_length(serializer, len(entries))
        for member, wire_type in entries:
            try:
                frame = wire_type.to_bytes(member.getter(instance))
            except (RecursionError, UnsupportedTypeError):
                raise
            except EncodeError as e:
                raise e.with_parent(member.name) from e.__cause__
            except Exception as e:
                raise EncodeError(str(e) or type(e).__name__, path=(member.name,)) from e
            encode_utf8(serializer, member.name)
            encode_length(serializer, len(frame))
            serializer.write_bytes(frame)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[C]:
        field_count = decode_length(deserializer, max_length=self._max_members)
        if field_count is None:
            return None
        field_values = self._read_members(deserializer, field_count, self._fields_by_name, 'field')
        property_count = decode_length(deserializer, max_length=self._max_members)
        if property_count is None:
            raise BadDataError('property list cannot be null')
        property_values = self._read_members(deserializer, property_count, self._properties_by_name, 'property')

        instance = self._construct(field_values)
        for name, value in property_values.items():
            member, _ = self._properties_by_name[name]
            with entering_member(name) as path:
                try:
                    member.setter(instance, value)
                except RecursionError:
                    raise
                except Exception as e:
                    self._member_failed(path, InvalidDataError(f'property setter failed: {e}'))
        return instance

    def _read_members(
        self,
        deserializer: Deserializer,
        count: int,
        entries: dict[str, _Entry],
        kind: str,
    ) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for _ in range(count):
            # XXX: errors reading the frame itself leave the stream in an unknown position, they always propagate
            name = decode_utf8(deserializer, max_length=MAX_MEMBER_NAME_LENGTH)
            if name is None:
                raise BadDataError(f'{kind} name cannot be null')
            frame_length = decode_length(deserializer)
            if frame_length is None:
                raise BadDataError(f'{kind} {name!r} has a null value length')
            frame = deserializer.read_bytes(frame_length)

            with entering_member(name) as path:
                entry = entries.get(name)
                if entry is None:
                    self._member_unknown(path, kind)
                    continue
                _, wire_type = entry
                try:
                    values[name] = wire_type.from_bytes(bytes(frame))
                except DecodeError as e:
                    self._member_failed(path, e)
        return values

    def _construct(self, field_values: dict[str, Any]) -> C:
        values = {
            member.name: field_values[member.name] if member.name in field_values else self._default_of(member, wt)
            for member, wt in self._fields
        }
        if is_namedtuple(self._class):
            return self._class(**values)
        instance = self._class.__new__(self._class)  # type: ignore[call-overload]
        for member in self._hidden_defaults:
            member.setter(instance, member.get_default())
        for member, _ in self._fields:
            member.setter(instance, values[member.name])
        return instance

    def _default_of(self, member: Member, wire_type: WireType) -> Any:
        if member.has_default():
            return member.get_default()
        return wire_type.zero_value()

    def _member_unknown(self, path: tuple[str, ...], kind: str) -> None:
        record_skipped(SkippedMember(path, f'unknown {kind}'))
        self.log.debug('unknown member skipped', type=self._class.__qualname__, path='.'.join(path))

    def _member_failed(self, path: tuple[str, ...], error: DecodeError) -> None:
        if self._strict:
            raise error
        record_skipped(SkippedMember(path, str(error), error))
        if self._log_skipped:
            self.log.warning('member skipped', type=self._class.__qualname__, path='.'.join(path), reason=str(error))
