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
This module implements encoding of byte sequences by prefixing them with their length (see `length.py`), a null
sequence is encoded as the null length marker alone.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # writes 04000000 then 74657374
>>> encode_bytes(se, b'')  # writes 00000000
>>> encode_bytes(se, None)  # writes ffffffff
>>> bytes(se.finalize()).hex()
'040000007465737400000000ffffffff'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('040000007465737400000000ffffffff'))
>>> decode_bytes(de)
b'test'
>>> decode_bytes(de)
b''
>>> decode_bytes(de) is None
True
>>> de.finalize()

A length that goes past the end of the data is reported as truncation:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0800000074657374'))
>>> try:
...     decode_bytes(de)
... except TruncatedError as e:
...     print(*e.args)
not enough bytes to read, needed 8 but only 4 left
"""

from typing import Optional

from bincodec.exception import TruncatedError  # noqa: F401
from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.types import Buffer

from .length import decode_length, encode_length


def encode_bytes(serializer: Serializer, data: Optional[Buffer]) -> None:
    """ Encodes a byte-sequence adding a length prefix, None is encoded as null.

    This modules's docstring has more details and examples.
    """
    if data is None:
        encode_length(serializer, None)
        return
    view = memoryview(data).cast('B')
    encode_length(serializer, len(view))
    serializer.write_bytes(view)


def decode_bytes(deserializer: Deserializer, *, max_length: Optional[int] = None) -> Optional[bytes]:
    """ Decodes a byte-sequence with a length prefix, None is returned for null.

    This modules's docstring has more details and examples.
    """
    size = decode_length(deserializer, max_length=max_length)
    if size is None:
        return None
    return bytes(deserializer.read_bytes(size))
