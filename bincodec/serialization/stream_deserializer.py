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

from typing import BinaryIO

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import OutOfDataError, TrailingDataError


class StreamDeserializer(Deserializer):
    """ Deserializer that reads from a binary file-like object.

    Only the bytes needed by each read are requested from the stream, except for peeking, which keeps a small
    look-ahead buffer that is consumed by the following reads.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._lookahead = bytearray()
        self._pos = 0

    def _fill(self, n: int) -> None:
        """Try to have at least n bytes in the look-ahead buffer, stops early at end of stream."""
        while len(self._lookahead) < n:
            chunk = self._stream.read(n - len(self._lookahead))
            if not chunk:
                break
            self._lookahead += chunk

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise TrailingDataError('trailing data')

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def is_empty(self) -> bool:
        self._fill(1)
        return not self._lookahead

    @override
    def peek_byte(self) -> int:
        self._fill(1)
        if not self._lookahead:
            raise OutOfDataError('not enough bytes to read')
        return self._lookahead[0]

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        del self._lookahead[0]
        self._pos += 1
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        self._fill(n)
        if exact and len(self._lookahead) < n:
            raise OutOfDataError(f'not enough bytes to read, needed {n} but only {len(self._lookahead)} left')
        data = bytes(self._lookahead[:n])
        del self._lookahead[:n]
        self._pos += len(data)
        return data

    @override
    def read_all(self) -> bytes:
        data = bytes(self._lookahead) + self._stream.read()
        self._lookahead.clear()
        self._pos += len(data)
        return data
