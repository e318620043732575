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
A mapping is encoded as the collection of its items, each item is a key-value pair.

Layout: [N: int32][key_0][value_0]...[key_N-1][value_N-1], or just [-1: int32] for a null mapping.

>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from bincodec.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_mapping(se, {'foo': False, 'bar': True}, encode_utf8, encode_bool)
>>> bytes(se.finalize()).hex()
'0200000003000000666f6f000300000062617201'

Breakdown of the result:

    02000000: 2 as int32, the entry count
    03000000666f6f: 'foo' with length prefix
    00: False
    03000000626172: 'bar' with length prefix
    01: True

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0200000003000000666f6f000300000062617201'))
>>> decode_mapping(de, decode_utf8, decode_bool, dict)
{'foo': False, 'bar': True}
>>> de.finalize()
"""

from collections.abc import Iterable, Mapping
from typing import Callable, Optional, TypeVar

from bincodec.serialization import Deserializer, Serializer

from . import Decoder, Encoder
from .collection import decode_collection, encode_collection
from .pair import decode_pair, encode_pair

KT = TypeVar('KT')
VT = TypeVar('VT')
R = TypeVar('R', bound=Mapping)


def encode_mapping(
    serializer: Serializer,
    values_mapping: Optional[Mapping[KT, VT]],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    items = None if values_mapping is None else values_mapping.items()
    encode_collection(serializer, items, lambda se, item: encode_pair(se, item, key_encoder, value_encoder))


def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Callable[[Iterable[tuple[KT, VT]]], R],
    *,
    max_length: Optional[int] = None,
) -> Optional[R]:
    """The builder gets the items in the order they were written, it must not expect a sized iterable."""
    return decode_collection(
        deserializer,
        lambda de: decode_pair(de, key_decoder, value_decoder),
        mapping_builder,
        max_length=max_length,
    )
