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

from dataclasses import MISSING, dataclass
from enum import Enum, auto
from operator import attrgetter
from typing import Any, Callable, Optional


class MemberKind(Enum):
    FIELD = auto()
    PROPERTY = auto()


def _set_field(instance: Any, name: str, value: Any) -> None:
    # bypasses frozen dataclasses and custom __setattr__, fields are set on raw instances
    object.__setattr__(instance, name, value)


@dataclass(frozen=True, slots=True)
class Member:
    """ A serializable member of a composite type.

    Fields are stored directly on the instance when decoding, properties go through their setter. The default is only
    used for fields, it is what a field holds when the stream does not carry it (or when its value had to be skipped).
    """
    name: str
    declared_type: Any
    kind: MemberKind
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]
    # MISSING when there is no default
    default: Any
    default_factory: Optional[Callable[[], Any]] = None

    @classmethod
    def field(cls, name: str, declared_type: Any, *, default: Any = MISSING,
              default_factory: Optional[Callable[[], Any]] = None) -> Member:
        """Build a field member that reads and writes the instance attribute with the same name."""
        return cls(
            name=name,
            declared_type=declared_type,
            kind=MemberKind.FIELD,
            getter=attrgetter(name),
            setter=lambda instance, value: _set_field(instance, name, value),
            default=default,
            default_factory=default_factory,
        )

    @classmethod
    def property(cls, name: str, declared_type: Any) -> Member:
        """Build a property member, the class must have a property with a setter under this name."""
        return cls(
            name=name,
            declared_type=declared_type,
            kind=MemberKind.PROPERTY,
            getter=attrgetter(name),
            setter=lambda instance, value: setattr(instance, name, value),
            default=MISSING,
        )

    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def get_default(self) -> Any:
        """Return a fresh default value, callers must check `has_default` first."""
        if self.default_factory is not None:
            return self.default_factory()
        assert self.default is not MISSING
        return self.default


@dataclass(frozen=True, slots=True)
class SerializationDescriptor:
    """The ordered members of a composite type, fields are always written before properties."""
    type_: type
    fields: tuple[Member, ...]
    properties: tuple[Member, ...] = ()

    def __post_init__(self) -> None:
        names = [member.name for member in (*self.fields, *self.properties)]
        if len(names) != len(set(names)):
            raise ValueError(f'duplicate member names in descriptor of {self.type_.__qualname__}')
        for member in self.fields:
            if member.kind is not MemberKind.FIELD:
                raise ValueError(f'{member.name} is not a field')
        for member in self.properties:
            if member.kind is not MemberKind.PROPERTY:
                raise ValueError(f'{member.name} is not a property')
