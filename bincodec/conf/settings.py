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

from pathlib import Path
from typing import Optional, Union

from pydantic import field_validator

from bincodec.serialization.encoding.length import MAX_LENGTH
from bincodec.utils import pydantic
from bincodec.utils.yaml import dict_from_extended_yaml


class CodecSettings(pydantic.BaseModel):
    # Whether a composite member that fails to decode aborts the whole decode instead of being skipped
    STRICT_MEMBERS: bool = False

    # Whether unregistered polymorphic type names can be resolved by importing `module.qualname`
    RESOLVE_BY_IMPORT: bool = False

    # Whether skipped members are logged as warnings, they are always reported by `decode_with_report`
    LOG_SKIPPED_MEMBERS: bool = True

    # Largest element count accepted for sequences, mappings and composite member lists
    MAX_COLLECTION_LENGTH: int = 16 * 1024 * 1024

    # Largest byte length accepted for strings and byte buffers
    MAX_BYTES_LENGTH: int = 64 * 1024 * 1024

    # Byte limit for a single encode_into/decode_from call, None means no limit
    MAX_MESSAGE_BYTES: Optional[int] = None

    @field_validator('MAX_COLLECTION_LENGTH', 'MAX_BYTES_LENGTH')
    @classmethod
    def _check_length_limit(cls, value: int) -> int:
        if not 0 <= value <= MAX_LENGTH:
            raise ValueError(f'must be between 0 and {MAX_LENGTH}')
        return value

    @field_validator('MAX_MESSAGE_BYTES')
    @classmethod
    def _check_message_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError('must be positive')
        return value

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
