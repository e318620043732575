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

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, BinaryIO, Optional, overload

from typing_extensions import Self

from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesDeserializer
    from .bytes_deserializer import BytesDeserializer
    from .stream_deserializer import StreamDeserializer


class Deserializer(ABC):
    """ Where decoders read their bytes from.

    A read that needs more bytes than are available raises `OutOfDataError` (a `TruncatedError`) and consumes nothing.
    Short reads only happen when asked for with `exact=False`.
    """

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @staticmethod
    def build_stream_deserializer(stream: BinaryIO) -> StreamDeserializer:
        from .stream_deserializer import StreamDeserializer
        return StreamDeserializer(stream)

    def finalize(self) -> None:
        """ Raise `TrailingDataError` if anything is left unread.

        The deserializer must not be used afterwards.
        """
        raise TypeError(f'{type(self).__name__} cannot be finalized')

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes consumed up to now."""
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> int:
        """The next byte, without consuming it."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Consume `n` bytes, or fewer at the end of the data when `exact` is False."""
        raise NotImplementedError

    @abstractmethod
    def read_all(self) -> Buffer:
        """Consume everything that is left."""
        raise NotImplementedError

    def read_struct(self, format: str) -> tuple[Any, ...]:
        """Consume and unpack exactly `struct.calcsize(format)` bytes."""
        return struct.unpack(format, self.read_bytes(struct.calcsize(format)))

    def with_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        """Wrap this deserializer so that reading more than `max_bytes` in total fails."""
        from .adapters import MaxBytesDeserializer
        return MaxBytesDeserializer(self, max_bytes)

    @overload
    def with_optional_max_bytes(self, max_bytes: None) -> Self:
        ...

    @overload
    def with_optional_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        ...

    def with_optional_max_bytes(self, max_bytes: Optional[int]) -> Self | MaxBytesDeserializer[Self]:
        """Same as `with_max_bytes`, except that None returns this deserializer unchanged."""
        return self if max_bytes is None else self.with_max_bytes(max_bytes)
