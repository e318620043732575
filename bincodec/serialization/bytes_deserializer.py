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

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import OutOfDataError, TrailingDataError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """ Deserializer over an in-memory buffer.

    Nothing is copied, reads return memoryviews into the given buffer, so it must not be mutated while decoding.
    """

    def __init__(self, data: Buffer) -> None:
        self._data = memoryview(data).cast('B')
        self._pos = 0

    def _remaining(self) -> int:
        return len(self._data) - self._pos

    @override
    def finalize(self) -> None:
        remaining = self._remaining()
        if remaining:
            raise TrailingDataError(f'{remaining} bytes of trailing data')
        del self._data

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def is_empty(self) -> bool:
        return self._pos >= len(self._data)

    @override
    def peek_byte(self) -> int:
        if self.is_empty():
            raise OutOfDataError('not enough bytes to read')
        return self._data[self._pos]

    @override
    def read_byte(self) -> int:
        byte = self.peek_byte()
        self._pos += 1
        return byte

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        remaining = self._remaining()
        if exact and remaining < n:
            raise OutOfDataError(f'not enough bytes to read, needed {n} but only {remaining} left')
        start = self._pos
        self._pos = min(start + n, len(self._data))
        return self._data[start:self._pos]

    @override
    def read_all(self) -> memoryview:
        return self.read_bytes(self._remaining())
