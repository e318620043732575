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

r"""
An optional value that has no null marker of its own is encoded with a presence byte.

Layout:

    [0x00] when None
    [0x01][value] when not None

>>> from bincodec.serialization.encoding.int import encode_int, decode_int
>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, 7, lambda se, v: encode_int(se, v, length=2, signed=True))
>>> encode_optional(se, None, lambda se, v: encode_int(se, v, length=2, signed=True))
>>> bytes(se.finalize()).hex()
'01070000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01070000'))
>>> decode_optional(de, lambda de: decode_int(de, length=2, signed=True))
7
>>> str(decode_optional(de, lambda de: decode_int(de, length=2, signed=True)))
'None'
>>> de.finalize()
"""

from typing import Optional, TypeVar

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.bool import decode_bool, encode_bool

from . import Decoder, Encoder

T = TypeVar('T')


def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None:
    encode_bool(serializer, value is not None)
    if value is not None:
        encoder(serializer, value)


def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Optional[T]:
    """Read the presence byte and then the value when present, any presence byte other than 0 or 1 is invalid."""
    if not decode_bool(deserializer):
        return None
    return decoder(deserializer)
