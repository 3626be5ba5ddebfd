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
This module implements encoding of integers with a fixed size, the size, signedness and byte order are parametrized.

Postgres uses a big-endian format while the MySQL binary protocol is little-endian:

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 0, length=1, signed=True)  # writes 00
>>> encode_int(se, 255, length=1, signed=False)  # writes ff
>>> encode_int(se, 1234, length=2, signed=True)  # writes 04d2
>>> encode_int(se, -1234, length=2, signed=True)  # writes fb2e
>>> encode_int(se, 1234, length=2, signed=True, byteorder='little')  # writes d204
>>> bytes(se.finalize()).hex()
'00ff04d2fb2ed204'

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_int(se, 256, length=1, signed=False)
... except ValueError as e:
...     print(*e.args)
too big to encode
"""

from typing import Literal, TypeAlias

from typewire.serialization import Serializer

ByteOrder: TypeAlias = Literal['big', 'little']


def encode_int(
    serializer: Serializer,
    number: int,
    *,
    length: int,
    signed: bool,
    byteorder: ByteOrder = 'big',
) -> None:
    """ Encode an int using the given byte-length, signedness and byte order.

    This modules's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder=byteorder, signed=signed)
    except OverflowError:
        raise ValueError('too big to encode')
    serializer.write_bytes(data)


def int_bounds(*, length: int, signed: bool) -> tuple[int, int]:
    """ Inclusive range of values that can be encoded with the given byte-length and signedness.

    >>> int_bounds(length=1, signed=True)
    (-128, 127)
    >>> int_bounds(length=4, signed=False)
    (0, 4294967295)
    """
    if signed:
        return -(2**(length * 8 - 1)), 2**(length * 8 - 1) - 1
    else:
        return 0, 2**(length * 8) - 1
