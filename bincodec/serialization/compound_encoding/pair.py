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
A key-value pair is the key followed by the value, with no prefix of its own.

>>> from bincodec.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from bincodec.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_pair(se, ('a', True), encode_utf8, encode_bool)
>>> bytes(se.finalize()).hex()
'010000006101'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010000006101'))
>>> decode_pair(de, decode_utf8, decode_bool)
('a', True)
>>> de.finalize()
"""

from typing import TypeVar

from bincodec.serialization import Deserializer, Serializer

from . import Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')


def encode_pair(
    serializer: Serializer,
    pair: tuple[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    key, value = pair
    key_encoder(serializer, key)
    value_encoder(serializer, value)


def decode_pair(deserializer: Deserializer, key_decoder: Decoder[KT], value_decoder: Decoder[VT]) -> tuple[KT, VT]:
    key = key_decoder(deserializer)
    value = value_decoder(deserializer)
    return key, value
