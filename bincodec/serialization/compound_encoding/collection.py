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
A collection is any value that has a known size and is iterable.

Layout: [N: int32][value_0]...[value_N-1], or just [-1: int32] for a null collection.

>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_collection(se, ['foobar', 'π'], encode_utf8)
>>> bytes(se.finalize()).hex()
'0200000006000000666f6f62617202000000cf80'

Breakdown of the result:

    02000000: 2 as int32, the element count
    06000000666f6f626172: 'foobar' with length prefix
    02000000cf80: 'π' with length prefix

When decoding, the builder can be any compatible collection, it only matters that it can be initialized with an
`Iterable[T]`:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200000006000000666f6f62617202000000cf80'))
>>> decode_collection(de, decode_utf8, tuple)
('foobar', 'π')
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffff'))
>>> decode_collection(de, decode_utf8, list) is None
True
"""

from collections.abc import Collection, Iterable
from typing import Callable, Optional, TypeVar

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.encoding.length import decode_length, encode_length

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_collection(serializer: Serializer, values: Optional[Collection[T]], encoder: Encoder[T]) -> None:
    if values is None:
        encode_length(serializer, None)
        return
    encode_length(serializer, len(values))
    for value in values:
        encoder(serializer, value)


def decode_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
    *,
    max_length: Optional[int] = None,
) -> Optional[R]:
    length = decode_length(deserializer, max_length=max_length)
    if length is None:
        return None
    return builder(decoder(deserializer) for _ in range(length))
