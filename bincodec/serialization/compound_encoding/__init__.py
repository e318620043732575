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
Compound encoders delegate the encoding of some portion of a value to another encoder.

For example a `Sequence[T]` encoder writes the element count and delegates each element to an encoder that knows how
to encode `T`. Each submodule `x` deals with a single shape and looks like this:

    def encode_x(serializer: Serializer, value: ValueType, ...inner encoders...) -> None:
        ...

    def decode_x(deserializer: Deserializer, ...inner decoders...) -> ValueType:
        ...

Submodules do not know how types are mapped to encoders, that is what `bincodec.wire_types` is for.
"""

from typing import Protocol, TypeVar

from bincodec.serialization.deserializer import Deserializer
from bincodec.serialization.serializer import Serializer

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: Deserializer, /) -> T_co:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...
