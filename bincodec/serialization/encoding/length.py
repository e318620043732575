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
Length and count prefixes: a signed 32-bit integer where `-1` stands for a null reference.

Every reference-like value (strings, byte buffers, collections, composites) starts with one of these, so a null is
always distinguishable from an empty value.

>>> se = Serializer.build_bytes_serializer()
>>> encode_length(se, 5)  # writes 05000000
>>> encode_length(se, None)  # writes ffffffff
>>> bytes(se.finalize()).hex()
'05000000ffffffff'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('05000000ffffffff'))
>>> decode_length(de)
5
>>> decode_length(de) is None
True

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('feffffff'))
>>> try:
...     decode_length(de)
... except ValueError as e:
...     print(*e.args)
invalid length prefix: -2

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0a000000'))
>>> try:
...     decode_length(de, max_length=8)
... except ValueError as e:
...     print(*e.args)
length 10 exceeds the maximum of 8
"""

from typing import Final, Optional

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.exceptions import BadDataError, TooLongError

from .int import decode_int, encode_int

NULL_LENGTH: Final[int] = -1
LENGTH_SIZE: Final[int] = 4
MAX_LENGTH: Final[int] = 2**31 - 1


def encode_length(serializer: Serializer, length: Optional[int]) -> None:
    """ Encode a non-negative length, or the null marker when `length` is None.
    """
    if length is None:
        encode_int(serializer, NULL_LENGTH, length=LENGTH_SIZE, signed=True)
        return
    if length < 0:
        raise ValueError('length cannot be negative')
    encode_int(serializer, length, length=LENGTH_SIZE, signed=True)


def decode_length(deserializer: Deserializer, *, max_length: Optional[int] = None) -> Optional[int]:
    """ Decode a length, returns None for the null marker.

    Any other negative value is invalid, and so is a length above `max_length` when it is given.
    """
    length = decode_int(deserializer, length=LENGTH_SIZE, signed=True)
    if length == NULL_LENGTH:
        return None
    if length < 0:
        raise BadDataError(f'invalid length prefix: {length}')
    if max_length is not None and length > max_length:
        raise TooLongError(f'length {length} exceeds the maximum of {max_length}')
    return length
