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
Declared types that give Python values a fixed wire representation.

Python only has `int` and `float`, so annotations use these `NewType`s to pick a width. Values are plain `int`,
`float` and `str` instances at runtime, the annotation is only consulted when building wire types:

>>> from dataclasses import dataclass
>>> @dataclass
... class Header:
...     version: UInt8
...     flags: UInt16
...     ratio: Float32
"""

from typing import Generic, NamedTuple, NewType, TypeVar

K = TypeVar('K')
V = TypeVar('V')

Int8 = NewType('Int8', int)
UInt8 = NewType('UInt8', int)
Int16 = NewType('Int16', int)
UInt16 = NewType('UInt16', int)
Int32 = NewType('Int32', int)
UInt32 = NewType('UInt32', int)
Int64 = NewType('Int64', int)
UInt64 = NewType('UInt64', int)

Float32 = NewType('Float32', float)

# a single unicode code point
Char = NewType('Char', str)


class KeyValuePair(NamedTuple, Generic[K, V]):
    """An explicit key/value pair, encoded as the key followed by the value."""
    key: K
    value: V
