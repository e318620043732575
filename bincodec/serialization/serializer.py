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
    from .adapters import MaxBytesSerializer
    from .bytes_serializer import BytesSerializer
    from .stream_serializer import StreamSerializer


class Serializer(ABC):
    """ Where encoders write their bytes to, writes can only append.
    """

    def finalize(self) -> Buffer:
        """ Return everything that was written.

        The serializer must not be used afterwards, stream serializers flush and return an empty buffer.
        """
        raise TypeError(f'{type(self).__name__} cannot be finalized')

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes written up to now."""
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        """Append `data` unchanged."""
        raise NotImplementedError

    def write_struct(self, data: tuple[Any, ...], format: str) -> None:
        """Pack `data` with `struct.pack` and append the result."""
        self.write_bytes(struct.pack(format, *data))

    def with_max_bytes(self, max_bytes: int) -> MaxBytesSerializer[Self]:
        """Wrap this serializer so that writing more than `max_bytes` in total fails."""
        from .adapters import MaxBytesSerializer
        return MaxBytesSerializer(self, max_bytes)

    @overload
    def with_optional_max_bytes(self, max_bytes: None) -> Self:
        ...

    @overload
    def with_optional_max_bytes(self, max_bytes: int) -> MaxBytesSerializer[Self]:
        ...

    def with_optional_max_bytes(self, max_bytes: Optional[int]) -> Self | MaxBytesSerializer[Self]:
        """Same as `with_max_bytes`, except that None returns this serializer unchanged."""
        return self if max_bytes is None else self.with_max_bytes(max_bytes)

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @staticmethod
    def build_stream_serializer(stream: BinaryIO) -> StreamSerializer:
        from .stream_serializer import StreamSerializer
        return StreamSerializer(stream)
