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

from bincodec.wire_types.classifier import WireCategory, classify, classify_value
from bincodec.wire_types.composite_wire_type import CompositeWireType
from bincodec.wire_types.diagnostics import DecodeResult, SkippedMember
from bincodec.wire_types.factory import CATEGORY_TO_WIRE_TYPE_MAP, WireTypeFactory
from bincodec.wire_types.optional_wire_type import OptionalWireType
from bincodec.wire_types.polymorphic_wire_type import PolymorphicWireType
from bincodec.wire_types.runtime_wire_type import RuntimeWireType
from bincodec.wire_types.wire_type import WireType

__all__ = [
    'CATEGORY_TO_WIRE_TYPE_MAP',
    'CompositeWireType',
    'DecodeResult',
    'OptionalWireType',
    'PolymorphicWireType',
    'RuntimeWireType',
    'SkippedMember',
    'WireCategory',
    'WireType',
    'WireTypeFactory',
    'classify',
    'classify_value',
]
