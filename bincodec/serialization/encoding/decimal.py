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
This module implements a fixed 16-byte encoding for high precision decimals.

The layout is a 96-bit unsigned coefficient split in three little-endian 32-bit words (low, middle, high), followed by
a 32-bit flags word holding the scale (power of ten divisor, 0 to 28) in bits 16-23 and the sign in bit 31. All other
flag bits must be zero.

>>> se = Serializer.build_bytes_serializer()
>>> encode_decimal(se, Decimal('1.5'))  # coefficient 15, scale 1
>>> bytes(se.finalize()).hex()
'0f000000000000000000000000000100'

>>> se = Serializer.build_bytes_serializer()
>>> encode_decimal(se, Decimal('-0.001'))  # coefficient 1, scale 3, negative
>>> bytes(se.finalize()).hex()
'01000000000000000000000000000380'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01000000000000000000000000000380'))
>>> decode_decimal(de)
Decimal('-0.001')

Positive exponents are folded into the coefficient:

>>> de = Deserializer.build_bytes_deserializer(_encoded(Decimal('1E+3')))
>>> decode_decimal(de)
Decimal('1000')

Values that need more than 28 decimal places or more than 96 bits are rejected:

>>> try:
...     _encoded(Decimal('1E-29'))
... except ValueError as e:
...     print(*e.args)
scale 29 is above the maximum of 28
"""

from decimal import Decimal
from typing import Final

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.exceptions import BadDataError

MAX_SCALE: Final[int] = 28
MAX_COEFFICIENT: Final[int] = 2**96 - 1

_SIGN_MASK: Final[int] = 0x8000_0000
_SCALE_MASK: Final[int] = 0x00FF_0000
_SCALE_SHIFT: Final[int] = 16
_WORD_MASK: Final[int] = 0xFFFF_FFFF
_FORMAT: Final[str] = '<IIII'


def encode_decimal(serializer: Serializer, value: Decimal) -> None:
    """ Encodes a finite decimal using 16 bytes.

    This modules's docstring has more details and examples.
    """
    if not value.is_finite():
        raise ValueError(f'{value} cannot be encoded, only finite decimals are supported')
    sign, digits, exponent = value.as_tuple()
    assert isinstance(exponent, int)
    coefficient = int(''.join(map(str, digits)))
    if exponent > 0:
        coefficient *= 10**exponent
        scale = 0
    else:
        scale = -exponent
    if scale > MAX_SCALE:
        raise ValueError(f'scale {scale} is above the maximum of {MAX_SCALE}')
    if coefficient > MAX_COEFFICIENT:
        raise ValueError(f'{value} does not fit in a 96-bit coefficient')
    flags = (scale << _SCALE_SHIFT) | (_SIGN_MASK if sign else 0)
    low = coefficient & _WORD_MASK
    middle = (coefficient >> 32) & _WORD_MASK
    high = coefficient >> 64
    serializer.write_struct((low, middle, high, flags), _FORMAT)


def decode_decimal(deserializer: Deserializer) -> Decimal:
    """ Decodes a decimal from 16 bytes.

    This modules's docstring has more details and examples.
    """
    low, middle, high, flags = deserializer.read_struct(_FORMAT)
    if flags & ~(_SIGN_MASK | _SCALE_MASK):
        raise BadDataError(f'invalid decimal flags: {flags:#010x}')
    scale = (flags & _SCALE_MASK) >> _SCALE_SHIFT
    if scale > MAX_SCALE:
        raise BadDataError(f'invalid decimal scale: {scale}')
    coefficient = low | (middle << 32) | (high << 64)
    sign = 1 if flags & _SIGN_MASK else 0
    return Decimal((sign, tuple(int(digit) for digit in str(coefficient)), -scale))


def _encoded(value: Decimal) -> bytes:
    se = Serializer.build_bytes_serializer()
    encode_decimal(se, value)
    return bytes(se.finalize())
