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
Discovery of the serializable members of composite types.

Members are looked up in this order: descriptors registered with `MemberIntrospector.register_descriptor`, then
`NamedTuple` fields, then dataclass fields, then the annotations of a plain class (including its bases). Properties
are collected from every class in the MRO, a property is only serializable if it has a setter and a return
annotation.

>>> from dataclasses import dataclass, field
>>> @dataclass
... class Account:
...     owner: str
...     balance: int = 0
...     cache: dict = transient(default_factory=dict)
...     _secret: str = ''
...
...     @property
...     def label(self) -> str:
...         return self.owner.upper()
...
...     @label.setter
...     def label(self, value: str) -> None:
...         self.owner = value.lower()
>>> introspector = MemberIntrospector()
>>> [m.name for m in introspector.fields_of(Account)]
['owner', 'balance']
>>> [m.name for m in introspector.properties_of(Account)]
['label']
"""

import dataclasses
import inspect
from dataclasses import MISSING, is_dataclass
from typing import Any, ClassVar, Final, Iterator, get_type_hints

from structlog import get_logger

from bincodec.exception import UnsupportedTypeError
from bincodec.introspection.member import Member, SerializationDescriptor
from bincodec.utils.typing import get_origin, is_namedtuple, pretty_type

logger = get_logger()

# dataclass field metadata key that excludes the field from serialization
TRANSIENT = 'transient'


def transient(**kwargs: Any) -> Any:
    """ Shortcut for a dataclass field that is never serialized.

    It accepts the same arguments as `dataclasses.field`. A decoded instance will hold the field's default.
    """
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[TRANSIENT] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def _is_public(name: str) -> bool:
    return not name.startswith('_')


def _is_class_var(declared_type: Any) -> bool:
    return declared_type is ClassVar or get_origin(declared_type) is ClassVar


def _is_constant(declared_type: Any) -> bool:
    return declared_type is Final or get_origin(declared_type) is Final


def _class_default(type_: type, name: str) -> Any:
    value = inspect.getattr_static(type_, name, MISSING)
    # slots, methods and other descriptors are not default values
    if value is MISSING or hasattr(type(value), '__get__'):
        return MISSING
    return value


class MemberIntrospector:
    """ Builds and caches a `SerializationDescriptor` for each composite type.
    """

    def __init__(self) -> None:
        self.log = logger.new()
        self._registered: dict[type, SerializationDescriptor] = {}
        self._cache: dict[type, SerializationDescriptor] = {}

    def register_descriptor(self, descriptor: SerializationDescriptor) -> None:
        """Use an explicit descriptor for `descriptor.type_` instead of discovering its members."""
        type_ = descriptor.type_
        if type_ in self._registered:
            raise ValueError(f'a descriptor for {pretty_type(type_)} is already registered')
        self._registered[type_] = descriptor
        self._cache.pop(type_, None)

    def descriptor_of(self, type_: type) -> SerializationDescriptor:
        descriptor = self._registered.get(type_) or self._cache.get(type_)
        if descriptor is not None:
            return descriptor
        if not isinstance(type_, type):
            raise UnsupportedTypeError(f'{pretty_type(type_)} is not a class')
        fields = tuple(self._find_fields(type_))
        field_names = {member.name for member in fields}
        properties = tuple(self._find_properties(type_, field_names))
        descriptor = SerializationDescriptor(type_, fields, properties)
        self._cache[type_] = descriptor
        self.log.debug('descriptor built', type=pretty_type(type_), fields=len(fields), properties=len(properties))
        return descriptor

    def fields_of(self, type_: type) -> tuple[Member, ...]:
        return self.descriptor_of(type_).fields

    def properties_of(self, type_: type) -> tuple[Member, ...]:
        return self.descriptor_of(type_).properties

    def _get_type_hints(self, obj: Any) -> dict[str, Any]:
        try:
            return get_type_hints(obj)
        except NameError as e:
            raise UnsupportedTypeError(f'cannot resolve annotations of {pretty_type(obj)}: {e}') from e

    def _find_fields(self, type_: type) -> Iterator[Member]:
        hints = self._get_type_hints(type_)

        if is_namedtuple(type_):
            defaults = getattr(type_, '_field_defaults', {})
            for name in getattr(type_, '_fields'):
                yield Member.field(name, hints.get(name, Any), default=defaults.get(name, MISSING))
            return

        if is_dataclass(type_):
            for field in dataclasses.fields(type_):
                if not _is_public(field.name) or field.metadata.get(TRANSIENT, False):
                    continue
                declared_type = hints.get(field.name, Any)
                if _is_constant(declared_type):
                    continue
                default_factory = None if field.default_factory is MISSING else field.default_factory
                yield Member.field(field.name, declared_type, default=field.default, default_factory=default_factory)
            return

        for name, declared_type in hints.items():
            if not _is_public(name) or _is_class_var(declared_type) or _is_constant(declared_type):
                continue
            if isinstance(inspect.getattr_static(type_, name, None), property):
                continue
            yield Member.field(name, declared_type, default=_class_default(type_, name))

    def _find_properties(self, type_: type, field_names: set[str]) -> Iterator[Member]:
        found: dict[str, property] = {}
        for klass in reversed(type_.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, property):
                    found[name] = attr
                elif name in found:
                    # overridden by something that is not a property
                    del found[name]

        for name, prop in found.items():
            if not _is_public(name) or name in field_names:
                continue
            if prop.fget is None or prop.fset is None:
                continue
            declared_type = self._get_type_hints(prop.fget).get('return', MISSING)
            if declared_type is MISSING:
                self.log.debug('property ignored, missing return annotation', type=pretty_type(type_), name=name)
                continue
            yield Member.property(name, declared_type)
