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
This module implements encoding of a single character as its unicode code point, an unsigned 32-bit integer.

>>> se = Serializer.build_bytes_serializer()
>>> encode_char(se, 'A')  # writes 41000000
>>> encode_char(se, 'π')  # writes c0030000
>>> encode_char(se, '😎')  # writes 0ef60100
>>> bytes(se.finalize()).hex()
'41000000c00300000ef60100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('41000000c00300000ef60100'))
>>> decode_char(de)
'A'
>>> decode_char(de)
'π'
>>> decode_char(de)
'😎'
>>> de.finalize()

>>> try:
...     encode_char(Serializer.build_bytes_serializer(), 'ab')
... except ValueError as e:
...     print(*e.args)
expected exactly one character, got 2
"""

from typing import Final

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.exceptions import BadDataError

from .int import decode_int, encode_int

MAX_CODE_POINT: Final[int] = 0x10FFFF


def encode_char(serializer: Serializer, value: str) -> None:
    """ Encodes a one-character string as a 4-byte code point.
    """
    if len(value) != 1:
        raise ValueError(f'expected exactly one character, got {len(value)}')
    encode_int(serializer, ord(value), length=4, signed=False)


def decode_char(deserializer: Deserializer) -> str:
    """ Decodes a 4-byte code point into a one-character string.
    """
    code_point = decode_int(deserializer, length=4, signed=False)
    if code_point > MAX_CODE_POINT:
        raise BadDataError(f'{code_point:#x} is not a valid code point')
    return chr(code_point)
