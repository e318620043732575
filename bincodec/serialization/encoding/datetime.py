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
This module implements encoding of timestamps as a signed 64-bit tick count.

A tick is 100 nanoseconds and the count starts at 0001-01-01T00:00:00. The two highest bits of the integer hold the
kind of the timestamp: 0 for naive datetimes and 1 for UTC. Aware datetimes in other timezones are converted to UTC
first, so the timezone itself is not preserved, only the instant. Python datetimes have microsecond precision, so
ticks are always multiples of 10 when encoding and are truncated to microseconds when decoding.

>>> se = Serializer.build_bytes_serializer()
>>> encode_datetime(se, datetime(2000, 1, 1))
>>> int.from_bytes(se.finalize(), 'little', signed=True)
630822816000000000

>>> se = Serializer.build_bytes_serializer()
>>> encode_datetime(se, datetime(2000, 1, 1, tzinfo=timezone.utc))
>>> int.from_bytes(se.finalize(), 'little', signed=True)
5242508834427387904

>>> de = Deserializer.build_bytes_deserializer(int.to_bytes(5242508834427387904, 8, 'little'))
>>> decode_datetime(de)
datetime.datetime(2000, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
"""

from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Final

from bincodec.serialization import Deserializer, Serializer
from bincodec.serialization.exceptions import BadDataError

from .int import decode_int, encode_int

TICKS_PER_MICROSECOND: Final[int] = 10

_KIND_SHIFT: Final[int] = 62
_TICKS_MASK: Final[int] = (1 << _KIND_SHIFT) - 1
_ONE_MICROSECOND: Final[timedelta] = timedelta(microseconds=1)


class DateTimeKind(IntEnum):
    NAIVE = 0
    UTC = 1


def encode_datetime(serializer: Serializer, value: datetime) -> None:
    """ Encodes a datetime as 8 bytes.

    This modules's docstring has more details and examples.
    """
    if value.tzinfo is None:
        kind = DateTimeKind.NAIVE
        naive = value
    else:
        kind = DateTimeKind.UTC
        try:
            naive = value.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            raise ValueError(f'{value} cannot be represented in UTC')
    ticks = (naive - datetime.min) // _ONE_MICROSECOND * TICKS_PER_MICROSECOND
    encode_int(serializer, (kind << _KIND_SHIFT) | ticks, length=8, signed=True)


def decode_datetime(deserializer: Deserializer) -> datetime:
    """ Decodes a datetime from 8 bytes.

    This modules's docstring has more details and examples.
    """
    raw = decode_int(deserializer, length=8, signed=True)
    if raw < 0:
        # the highest kind bit is never set by encode_datetime
        raise BadDataError(f'unsupported datetime kind in {raw:#x}')
    kind = DateTimeKind(raw >> _KIND_SHIFT)
    ticks = raw & _TICKS_MASK
    try:
        naive = datetime.min + timedelta(microseconds=ticks // TICKS_PER_MICROSECOND)
    except OverflowError:
        raise BadDataError(f'{ticks} ticks is out of the supported datetime range')
    if kind is DateTimeKind.UTC:
        return naive.replace(tzinfo=timezone.utc)
    return naive
