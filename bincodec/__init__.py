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

from bincodec.codec import (
    BinaryCodec,
    decode,
    decode_from,
    decode_with_report,
    encode,
    encode_into,
    get_default_codec,
    make_codec,
    register,
    register_descriptor,
)
from bincodec.conf.settings import CodecSettings
from bincodec.exception import (
    BinCodecError,
    DecodeError,
    EncodeError,
    InvalidDataError,
    TruncatedError,
    TypeMismatchError,
    UnresolvedTypeError,
    UnsupportedTypeError,
)
from bincodec.introspection.introspector import MemberIntrospector, transient
from bincodec.introspection.member import Member, SerializationDescriptor
from bincodec.introspection.resolver import TypeRegistry
from bincodec.types import Char, Float32, Int8, Int16, Int32, Int64, KeyValuePair, UInt8, UInt16, UInt32, UInt64
from bincodec.version import __version__
from bincodec.wire_types.classifier import WireCategory, classify, classify_value
from bincodec.wire_types.diagnostics import DecodeResult, SkippedMember
from bincodec.wire_types.wire_type import WireType

__all__ = [
    '__version__',
    'BinaryCodec',
    'BinCodecError',
    'Char',
    'CodecSettings',
    'DecodeError',
    'DecodeResult',
    'EncodeError',
    'Float32',
    'Int8',
    'Int16',
    'Int32',
    'Int64',
    'InvalidDataError',
    'KeyValuePair',
    'Member',
    'MemberIntrospector',
    'SerializationDescriptor',
    'SkippedMember',
    'TruncatedError',
    'TypeMismatchError',
    'TypeRegistry',
    'UInt8',
    'UInt16',
    'UInt32',
    'UInt64',
    'UnresolvedTypeError',
    'UnsupportedTypeError',
    'WireCategory',
    'WireType',
    'classify',
    'classify_value',
    'decode',
    'decode_from',
    'decode_with_report',
    'encode',
    'encode_into',
    'get_default_codec',
    'make_codec',
    'register',
    'register_descriptor',
    'transient',
]
