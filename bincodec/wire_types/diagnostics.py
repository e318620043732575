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
Per-call bookkeeping of the composite members that were skipped while decoding.

State lives in context variables, so concurrent decodes in other threads or asyncio tasks don't see each other's
entries. Skipped members are only collected inside `collecting_skipped()`.

>>> with collecting_skipped() as skipped:
...     with entering_member('shape'):
...         with entering_member('radius') as path:
...             record_skipped(SkippedMember(path, 'bad value'))
>>> [str(member) for member in skipped]
['shape.radius: bad value']
>>> current_member_path()
()
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Generic, Iterator, NamedTuple, Optional, TypeVar

from bincodec.exception import DecodeError

T = TypeVar('T')


@dataclass(frozen=True, slots=True)
class SkippedMember:
    """A member found in the stream that did not make it to the decoded value.

    `error` is None for members the target type does not declare, otherwise it is the error that made the member's
    value unreadable.
    """
    path: tuple[str, ...]
    reason: str
    error: Optional[DecodeError] = None

    def __str__(self) -> str:
        return f'{".".join(self.path)}: {self.reason}'


class DecodeResult(NamedTuple, Generic[T]):
    value: T
    skipped: tuple[SkippedMember, ...]


_member_path: ContextVar[tuple[str, ...]] = ContextVar('bincodec_member_path', default=())
_skipped_members: ContextVar[Optional[list[SkippedMember]]] = ContextVar('bincodec_skipped_members', default=None)


def current_member_path() -> tuple[str, ...]:
    return _member_path.get()


@contextmanager
def entering_member(name: str) -> Iterator[tuple[str, ...]]:
    """Extend the member path with `name` for the duration of the block, the new path is yielded."""
    path = _member_path.get() + (name,)
    token = _member_path.set(path)
    try:
        yield path
    finally:
        _member_path.reset(token)


@contextmanager
def collecting_skipped() -> Iterator[list[SkippedMember]]:
    """Collect every skipped member recorded inside the block into the yielded list."""
    skipped: list[SkippedMember] = []
    token = _skipped_members.set(skipped)
    try:
        yield skipped
    finally:
        _skipped_members.reset(token)


def record_skipped(member: SkippedMember) -> None:
    skipped = _skipped_members.get()
    if skipped is not None:
        skipped.append(member)
