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

"""
This module implements the "length-encoded" integers and byte strings of the MySQL client/server protocol.

An integer is encoded in 1, 3, 4 or 9 bytes, depending on its value, all multi-byte forms are little-endian and
prefixed with a marker byte:

>>> se = Serializer.build_bytes_serializer()
>>> encode_lenenc_int(se, 250)  # writes fa
>>> encode_lenenc_int(se, 251)  # writes fcfb00
>>> encode_lenenc_int(se, 65536)  # writes fd000001
>>> encode_lenenc_int(se, 2**24)  # writes fe0000000100000000
>>> bytes(se.finalize()).hex()
'fafcfb00fd000001fe0000000100000000'

A byte string is its length as a length-encoded integer followed by the bytes themselves:

>>> se = Serializer.build_bytes_serializer()
>>> encode_lenenc_bytes(se, b'test')
>>> bytes(se.finalize()).hex()
'0474657374'
>>> lenenc_bytes_size(b'test')
5
"""

from typewire.serialization import Buffer, Serializer

from .int import encode_int

_MAX_1_BYTE = 0xfb
_MAX_2_BYTES = 2**16
_MAX_3_BYTES = 2**24
_MAX_8_BYTES = 2**64


def encode_lenenc_int(serializer: Serializer, value: int) -> None:
    """ Encodes an unsigned integer as a length-encoded integer.
    """
    if value < 0 or value >= _MAX_8_BYTES:
        raise ValueError('value out of range for a length-encoded integer')
    if value < _MAX_1_BYTE:
        serializer.write_byte(value)
    elif value < _MAX_2_BYTES:
        serializer.write_byte(0xfc)
        encode_int(serializer, value, length=2, signed=False, byteorder='little')
    elif value < _MAX_3_BYTES:
        serializer.write_byte(0xfd)
        encode_int(serializer, value, length=3, signed=False, byteorder='little')
    else:
        serializer.write_byte(0xfe)
        encode_int(serializer, value, length=8, signed=False, byteorder='little')


def lenenc_int_size(value: int) -> int:
    """ Number of bytes `encode_lenenc_int` writes for the given value.
    """
    if value < _MAX_1_BYTE:
        return 1
    elif value < _MAX_2_BYTES:
        return 3
    elif value < _MAX_3_BYTES:
        return 4
    else:
        return 9


def encode_lenenc_bytes(serializer: Serializer, data: Buffer) -> None:
    """ Encodes a byte string prefixed by its length as a length-encoded integer.
    """
    view = memoryview(data)
    encode_lenenc_int(serializer, len(view))
    serializer.write_bytes(view)


def lenenc_bytes_size(data: Buffer) -> int:
    length = len(memoryview(data))
    return lenenc_int_size(length) + length
