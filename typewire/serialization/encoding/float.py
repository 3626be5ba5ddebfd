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
This module implements encoding of IEEE 754 floating point numbers, in single (4 bytes) or double (8 bytes) precision.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=8)  # writes 3ff8000000000000
>>> encode_float(se, 1.5, length=4)  # writes 3fc00000
>>> encode_float(se, 1.5, length=4, byteorder='little')  # writes 0000c03f
>>> bytes(se.finalize()).hex()
'3ff80000000000003fc000000000c03f'
"""

from typewire.serialization import Serializer

from .int import ByteOrder

_FORMATS = {4: 'f', 8: 'd'}
_BYTE_ORDERS = {'big': '>', 'little': '<'}


def encode_float(serializer: Serializer, value: float, *, length: int, byteorder: ByteOrder = 'big') -> None:
    """ Encode a float using the given precision (byte-length) and byte order.
    """
    if length not in _FORMATS:
        raise ValueError(f'unsupported float length: {length}')
    serializer.write_struct((value,), _BYTE_ORDERS[byteorder] + _FORMATS[length])
