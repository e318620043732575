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
Booleans take a single byte, `b'\x00'` for False and `b'\x01'` for True. Any other byte is rejected when decoding,
so that every value has exactly one encoding.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, False)
>>> encode_bool(se, True)
>>> bytes(se.finalize())
b'\x00\x01'

>>> de = Deserializer.build_bytes_deserializer(b'\x01\x00')
>>> decode_bool(de), decode_bool(de)
(True, False)
>>> de.finalize()

>>> decode_bool(Deserializer.build_bytes_deserializer(b'\x02'))
Traceback (most recent call last):
...
bincodec.serialization.exceptions.BadDataError: 0x02 is not a valid boolean
"""

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.exceptions import BadDataError

_FALSE = 0x00
_TRUE = 0x01


def encode_bool(serializer: Serializer, value: bool) -> None:
    if not isinstance(value, bool):
        raise TypeError(f'expected bool, got {type(value).__name__}')
    serializer.write_byte(_TRUE if value else _FALSE)


def decode_bool(deserializer: Deserializer) -> bool:
    byte = deserializer.read_byte()
    if byte not in (_FALSE, _TRUE):
        raise BadDataError(f'{byte:#04x} is not a valid boolean')
    return byte == _TRUE
