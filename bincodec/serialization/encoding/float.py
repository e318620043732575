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
This module implements IEEE-754 floating point encoding, single (4 bytes) or double (8 bytes) precision.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)  # writes 0000c03f
>>> encode_float(se, -2.0, length=8)  # writes 00000000000000c0
>>> bytes(se.finalize()).hex()
'0000c03f00000000000000c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000c03f00000000000000c0'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8)
-2.0

Values that don't fit a single precision float are rejected instead of becoming infinity:

>>> try:
...     encode_float(Serializer.build_bytes_serializer(), 1e300, length=4)
... except ValueError as e:
...     print(*e.args)
1e+300 is out of range for a 4 byte float
"""

import struct

from bincodec.serialization import Deserializer, Serializer

_FORMATS: dict[int, str] = {
    4: '<f',
    8: '<d',
}


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    """ Encode a float with the given precision, `length` must be 4 or 8.
    """
    try:
        serializer.write_struct((value,), _FORMATS[length])
    except (struct.error, OverflowError):
        raise ValueError(f'{value} is out of range for a {length} byte float')


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    """ Decode a float with the given precision, `length` must be 4 or 8.
    """
    value, = deserializer.read_struct(_FORMATS[length])
    return value
