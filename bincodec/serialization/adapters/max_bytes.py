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
Wrappers that put a byte budget on a serializer or deserializer.

They are used to bound a single encode or decode call on a stream, where the input size is not known up front.
Every other call is forwarded to the wrapped object unchanged.
"""

from typing import Generic, TypeVar

from typing_extensions import override

from bincodec.exception import TruncatedError
from bincodec.serialization.deserializer import Deserializer
from bincodec.serialization.exceptions import SerializationError
from bincodec.serialization.serializer import Serializer
from bincodec.serialization.types import Buffer

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxBytesExceededError(SerializationError, TruncatedError):
    """ Raised when a wrapped serializer or deserializer goes over its byte budget.

    The wrapped object is left in the middle of a value, so the whole operation has failed. For decoders the budget
    is the end of the input, which is why this is a `TruncatedError`.
    """


class _Budget:
    __slots__ = ('left', '_action')

    def __init__(self, max_bytes: int, action: str) -> None:
        if max_bytes < 0:
            raise ValueError('max_bytes cannot be negative')
        self.left = max_bytes
        self._action = action

    def spend(self, size: int) -> None:
        if size > self.left:
            self.left = -1
            raise MaxBytesExceededError(f'maximum number of bytes to {self._action} exceeded')
        self.left -= size


class MaxBytesSerializer(Serializer, Generic[S]):
    def __init__(self, serializer: S, max_bytes: int) -> None:
        self.inner = serializer
        self._budget = _Budget(max_bytes, 'write')

    @override
    def finalize(self) -> Buffer:
        return self.inner.finalize()

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def write_byte(self, data: int) -> None:
        self._budget.spend(1)
        self.inner.write_byte(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data)
        self._budget.spend(view.nbytes)
        self.inner.write_bytes(view)


class MaxBytesDeserializer(Deserializer, Generic[D]):
    def __init__(self, deserializer: D, max_bytes: int) -> None:
        self.inner = deserializer
        self._budget = _Budget(max_bytes, 'read')

    @override
    def finalize(self) -> None:
        self.inner.finalize()

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def is_empty(self) -> bool:
        return self._budget.left <= 0 or self.inner.is_empty()

    @override
    def peek_byte(self) -> int:
        if self._budget.left < 1:
            raise MaxBytesExceededError('maximum number of bytes to read exceeded')
        return self.inner.peek_byte()

    @override
    def read_byte(self) -> int:
        self._budget.spend(1)
        return self.inner.read_byte()

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        if not exact:
            n = min(n, self._budget.left)
        self._budget.spend(n)
        return self.inner.read_bytes(n, exact=exact)

    @override
    def read_all(self) -> Buffer:
        # XXX: anything left in the inner deserializer after the budget is over means the input was too big
        data = self.inner.read_bytes(self._budget.left, exact=False)
        self._budget.spend(len(memoryview(data)))
        if not self.inner.is_empty():
            raise MaxBytesExceededError('maximum number of bytes to read exceeded')
        return data
