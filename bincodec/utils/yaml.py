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

import os
from pathlib import Path
from typing import Any, Union

import yaml

_EXTENDS_KEY = 'extends'


def merged(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """ Return a new dict with `overrides` recursively applied on top of `base`, neither argument is modified.

    >>> merged(dict(a=1, b=dict(c=2, d=3)), dict(b=dict(d=5), e=7))
    {'a': 1, 'b': {'c': 2, 'd': 5}, 'e': 7}
    """
    result = dict(base)
    for key, value in overrides.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merged(result[key], value)
        else:
            result[key] = value
    return result


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Takes a filepath to a yaml file and returns a dictionary with its contents."""
    if not os.path.isfile(filepath):
        raise ValueError(f"'{filepath}' is not a file")

    with open(filepath, 'r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")
    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """ Like `dict_from_yaml`, but a file can name a base file (relative to itself) under the 'extends' key.

    The base file is loaded first and the extending file's keys are merged on top of it. Chains of extensions are
    followed until a file without the 'extends' key is reached.
    """
    contents = dict_from_yaml(filepath=filepath)
    base_file = contents.pop(_EXTENDS_KEY, None)
    if not base_file:
        return contents

    base_filepath = Path(filepath).parent / str(base_file)
    if base_filepath.resolve() == Path(filepath).resolve():
        raise ValueError(f"'{filepath}' cannot extend itself")

    return merged(dict_from_extended_yaml(filepath=base_filepath), contents)
