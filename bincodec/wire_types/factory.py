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

from threading import RLock
from typing import Any, Callable, Optional

from structlog import get_logger

from bincodec.conf.settings import CodecSettings
from bincodec.exception import UnsupportedTypeError
from bincodec.introspection.introspector import MemberIntrospector
from bincodec.introspection.resolver import DEFAULT_REGISTRY, TypeRegistry
from bincodec.utils.typing import pretty_type, unwrap_optional
from bincodec.wire_types.bool_wire_type import BoolWireType
from bincodec.wire_types.bytes_wire_type import BytesWireType
from bincodec.wire_types.char_wire_type import CharWireType
from bincodec.wire_types.classifier import WireCategory, classify, is_untyped
from bincodec.wire_types.collection_wire_type import SequenceWireType
from bincodec.wire_types.composite_wire_type import CompositeWireType
from bincodec.wire_types.datetime_wire_type import DatetimeWireType
from bincodec.wire_types.decimal_wire_type import DecimalWireType
from bincodec.wire_types.enum_wire_type import EnumWireType
from bincodec.wire_types.float_wire_type import FloatWireType
from bincodec.wire_types.map_wire_type import MapWireType
from bincodec.wire_types.null_wire_type import NullWireType
from bincodec.wire_types.optional_wire_type import OptionalWireType
from bincodec.wire_types.pair_wire_type import PairWireType
from bincodec.wire_types.polymorphic_wire_type import PolymorphicWireType
from bincodec.wire_types.runtime_wire_type import RuntimeWireType
from bincodec.wire_types.sized_int_wire_type import SizedIntWireType
from bincodec.wire_types.str_wire_type import StrWireType
from bincodec.wire_types.wire_type import WireType

logger = get_logger()

CategoryToWireTypeMap = dict[WireCategory, type[WireType]]

# Mapping between categories and WireType classes.
CATEGORY_TO_WIRE_TYPE_MAP: CategoryToWireTypeMap = {
    WireCategory.NULL: NullWireType,
    WireCategory.BOOL: BoolWireType,
    WireCategory.INTEGRAL: SizedIntWireType,
    WireCategory.FLOAT32: FloatWireType,
    WireCategory.FLOAT64: FloatWireType,
    WireCategory.DECIMAL: DecimalWireType,
    WireCategory.CHAR: CharWireType,
    WireCategory.UTF8_STRING: StrWireType,
    WireCategory.DATETIME: DatetimeWireType,
    WireCategory.RAW_BYTES: BytesWireType,
    WireCategory.ENUM: EnumWireType,
    WireCategory.KEY_VALUE_PAIR: PairWireType,
    WireCategory.SEQUENCE: SequenceWireType,
    WireCategory.MAPPING: MapWireType,
    WireCategory.POLYMORPHIC_COMPOSITE: PolymorphicWireType,
    WireCategory.PLAIN_COMPOSITE: CompositeWireType,
}


class WireTypeFactory:
    """ Builds and caches the wire type of each declared type.

    Building a wire type for a type that refers to itself (`Node` with a `children: list[Node]` field) works because
    a composite is cached before its members are built. If anything fails while building, the cache is restored to
    what it was before the outermost `build` call.
    """

    def __init__(
        self,
        settings: CodecSettings,
        introspector: Optional[MemberIntrospector] = None,
        registry: Optional[TypeRegistry] = None,
        *,
        extra_wire_types_map: Optional[CategoryToWireTypeMap] = None,
    ) -> None:
        self.log = logger.new()
        self.settings = settings
        self.introspector = introspector if introspector is not None else MemberIntrospector()
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self._wire_types_map = {**CATEGORY_TO_WIRE_TYPE_MAP, **(extra_wire_types_map or {})}
        self._cache: dict[Any, WireType] = {}
        self._lock = RLock()
        self._depth = 0

    def build(self, type_: Any, /) -> WireType:
        """ Return the wire type for a declared type, raise `UnsupportedTypeError` if there is none.

        `Optional[T]` reuses the wire type of `T` when it is a reference wire type, otherwise a presence byte is added.
        """
        with self._lock:
            cached = self._cache.get(type_)
            if cached is not None:
                return cached
            inner_type, is_optional = unwrap_optional(type_)
            if is_optional:
                inner = self.build(inner_type)
                wire_type = inner if inner.is_reference() else OptionalWireType(inner)
                self._cache[type_] = wire_type
                return wire_type
            return self._building(type_, type_, self._make)

    def composite_for(self, cls: type, /) -> CompositeWireType:
        """ Return the composite wire type of a concrete class, regardless of how the class is classified.

        Used for the concrete classes of polymorphic values.
        """
        key = (CompositeWireType, cls)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                assert isinstance(cached, CompositeWireType)
                return cached
            wire_type = self._building(key, cls, lambda cls: CompositeWireType._from_type(cls, factory=self))
            assert isinstance(wire_type, CompositeWireType)
            return wire_type

    def _building(self, key: Any, type_: Any, make: Callable[[Any], WireType]) -> WireType:
        snapshot = dict(self._cache) if self._depth == 0 else None
        self._depth += 1
        try:
            wire_type = make(type_)
            self._cache[key] = wire_type
            wire_type._resolve(self)
        except BaseException:
            if snapshot is not None:
                self._cache = snapshot
            raise
        finally:
            self._depth -= 1
        self.log.debug('wire type built', type=pretty_type(type_), wire_type=type(wire_type).__name__)
        return wire_type

    def _make(self, type_: Any) -> WireType:
        if is_untyped(type_):
            return RuntimeWireType(self)

        category = classify(type_)
        wire_type_class = self._wire_types_map[category]
        try:
            return wire_type_class._from_type(type_, factory=self)
        except UnsupportedTypeError:
            raise
        except TypeError as e:
            raise UnsupportedTypeError(f'{pretty_type(type_)} is not supported: {e}') from e
