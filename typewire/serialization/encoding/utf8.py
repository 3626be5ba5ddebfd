#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

r"""
This module implements utf-8 string encoding without any length prefix.

Backends that frame every value with its own length (like Postgres bind parameters and record fields) expect the raw
utf-8 bytes of a text value:

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'foobar')  # writes 666f6f626172
>>> encode_utf8(se, 'é')  # writes c3a9
>>> bytes(se.finalize()).hex()
'666f6f626172c3a9'

>>> utf8_size('é')
2
"""

from typewire.serialization import Serializer


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    serializer.write_bytes(value.encode('utf-8'))


def utf8_size(value: str) -> int:
    """ Number of bytes `encode_utf8` writes for the given value."""
    return len(value.encode('utf-8'))
