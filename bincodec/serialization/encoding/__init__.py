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
This module holds the simple (not compound) encoding implementations.

Simple means the encoder may have configuration parameters (like the byte-length and signedness of an integer) but
never delegates part of the work to another encoder. Encoders that do, like sequences or optionals, live in the
`compound_encoding` module.

Each submodule `x` deals with a single kind of value and looks like this:

    def encode_x(serializer: Serializer, value: ValueType, ...config params...) -> None:
        ...

    def decode_x(deserializer: Deserializer, ...config params...) -> ValueType:
        ...

All multi-byte integers are little-endian. Submodules do not know how declared types are mapped to encoders, that is
the job of `bincodec.wire_types`.
"""
