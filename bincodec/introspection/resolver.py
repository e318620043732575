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
Resolution of the type names embedded in polymorphic slots.

A class is written under its registered name, or `module.qualname` when it was never registered. Reading only
accepts registered names unless import-based resolution is requested:

>>> registry = TypeRegistry()
>>> @registry.register(name='shapes.Circle')
... class Circle:
...     pass
>>> registry.name_of(Circle)
'shapes.Circle'
>>> registry.resolve('shapes.Circle') is Circle
True
>>> registry.resolve('shapes.Square')
Traceback (most recent call last):
...
bincodec.exception.UnresolvedTypeError: cannot resolve type 'shapes.Square'
>>> registry.resolve('collections.OrderedDict', by_import=True)
<class 'collections.OrderedDict'>
"""

import importlib
from typing import Any, Callable, Optional, TypeVar, overload

from structlog import get_logger

from bincodec.exception import UnresolvedTypeError

logger = get_logger()

C = TypeVar('C', bound=type)


def default_name_of(cls: type) -> str:
    return f'{cls.__module__}.{cls.__qualname__}'


class TypeRegistry:
    """ A two-way mapping between classes and stable discriminant names.

    Each name maps to a single class and each class has a single name. Registering the same pair twice is allowed.
    """

    def __init__(self) -> None:
        self.log = logger.new()
        self._by_name: dict[str, type] = {}
        self._by_class: dict[type, str] = {}

    @overload
    def register(self, cls: C, /, *, name: Optional[str] = None) -> C:
        ...

    @overload
    def register(self, cls: None = None, /, *, name: Optional[str] = None) -> Callable[[C], C]:
        ...

    def register(self, cls: Optional[C] = None, /, *, name: Optional[str] = None) -> C | Callable[[C], C]:
        """ Register a class under `name`, or its `module.qualname` when not given.

        Can be used directly or as a class decorator, with or without arguments.
        """
        if cls is None:
            return lambda cls_: self.register(cls_, name=name)

        if not isinstance(cls, type):
            raise TypeError(f'expected a class, got {cls!r}')
        name = name or default_name_of(cls)

        registered_class = self._by_name.get(name)
        if registered_class is not None and registered_class is not cls:
            raise ValueError(f'{name!r} is already registered for {default_name_of(registered_class)}')
        registered_name = self._by_class.get(cls)
        if registered_name is not None and registered_name != name:
            raise ValueError(f'{default_name_of(cls)} is already registered as {registered_name!r}')

        self._by_name[name] = cls
        self._by_class[cls] = name
        self.log.debug('type registered', name=name)
        return cls

    def name_of(self, cls: type) -> str:
        return self._by_class.get(cls) or default_name_of(cls)

    def resolve(self, name: str, *, by_import: bool = False) -> type:
        """ Return the class registered under `name`.

        With `by_import=True`, an unregistered name is treated as `module.qualname` and looked up by importing the
        module. Raises `UnresolvedTypeError` when the name cannot be resolved to a class.
        """
        cls = self._by_name.get(name)
        if cls is not None:
            return cls
        if by_import:
            found = _import_qualified(name)
            if isinstance(found, type):
                return found
        raise UnresolvedTypeError(name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name


def _import_qualified(name: str) -> Any:
    """ Import the longest module prefix of `name` and walk the rest as attributes, return None if not found.

    Names come from the stream, so any failure while importing is reported as `UnresolvedTypeError`.
    """
    parts = name.split('.')
    if not all(part.isidentifier() for part in parts):
        return None
    for split in range(len(parts) - 1, 0, -1):
        module_name = '.'.join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        except Exception as e:
            raise UnresolvedTypeError(name) from e
        try:
            for attr in parts[split:]:
                obj = getattr(obj, attr)
        except AttributeError:
            return None
        return obj
    return None


DEFAULT_REGISTRY = TypeRegistry()
