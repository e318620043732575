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

from typing import Any


class BinCodecError(Exception):
    """Base class for every error raised by this package."""


class UnsupportedTypeError(BinCodecError, TypeError):
    """Raised when a declared type cannot be mapped to any wire type."""


class EncodeError(BinCodecError):
    """ Raised when a value cannot be encoded.

    The `path` attribute holds the names of the composite members that were being walked, from the outermost to the
    innermost, it is empty when the failure happened outside of any composite.
    """

    path: tuple[str, ...]

    def __init__(self, message: str, *, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def with_parent(self, name: str) -> 'EncodeError':
        """Return a copy of this error with `name` prepended to its path."""
        error = EncodeError(self.message, path=(name, *self.path))
        error.__cause__ = self.__cause__
        return error

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f'{".".join(self.path)}: {self.message}'


class DecodeError(BinCodecError):
    """Base class for errors raised while decoding."""


class TruncatedError(DecodeError):
    """The source ran out of bytes in the middle of a value."""


class UnresolvedTypeError(DecodeError):
    """A polymorphic type name is not known to the type resolver."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f'cannot resolve type {type_name!r}')
        self.type_name = type_name


class TypeMismatchError(DecodeError):
    """A resolved polymorphic type is not assignable to the expected type."""

    def __init__(self, resolved: Any, expected: Any) -> None:
        from bincodec.utils.typing import pretty_type
        super().__init__(f'{pretty_type(resolved)} is not assignable to {pretty_type(expected)}')
        self.resolved = resolved
        self.expected = expected


class InvalidDataError(DecodeError, ValueError):
    """The bytes read cannot represent a value of the expected type."""
