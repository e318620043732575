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

from bincodec.exception import BinCodecError, InvalidDataError, TruncatedError


class SerializationError(BinCodecError):
    """Base class for errors raised by serializers and deserializers."""


class OutOfDataError(SerializationError, TruncatedError):
    """The deserializer does not have enough bytes left to satisfy a read."""


class BadDataError(SerializationError, InvalidDataError):
    """The bytes read do not encode a valid value."""


class TooLongError(SerializationError, InvalidDataError):
    """A length or count prefix exceeds the configured maximum."""


class TrailingDataError(SerializationError, InvalidDataError):
    """The deserializer was finalized with bytes left unread."""
