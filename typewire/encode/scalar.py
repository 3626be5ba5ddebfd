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
Contracts for the scalar types every backend supports, parametrized by the details that vary between backends (byte
order, type identity, framing of variable length values).
"""

from __future__ import annotations

from typing_extensions import override

from typewire.encode.contract import EncodeContract, TypeInfo
from typewire.serialization import Buffer, Serializer
from typewire.serialization.encoding.bool import encode_bool
from typewire.serialization.encoding.float import encode_float
from typewire.serialization.encoding.int import ByteOrder, encode_int, int_bounds
from typewire.serialization.encoding.lenenc import encode_lenenc_bytes, lenenc_bytes_size
from typewire.serialization.encoding.utf8 import encode_utf8, utf8_size


class BoolContract(EncodeContract[bool]):
    __slots__ = ('_type_info',)

    def __init__(self, type_info: TypeInfo) -> None:
        self._type_info = type_info

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @override
    def _check_value(self, value: bool, /) -> None:
        if not isinstance(value, bool):
            raise TypeError('expected bool')

    @override
    def _encode(self, value: bool, buf: Serializer, /) -> None:
        encode_bool(buf, value)

    @override
    def _size_hint(self, value: bool, /) -> int:
        return 1


class IntContract(EncodeContract[int]):
    """ Signed integers with a fixed size.
    """

    __slots__ = ('_type_info', '_length', '_byteorder')

    def __init__(self, type_info: TypeInfo, *, length: int, byteorder: ByteOrder) -> None:
        self._type_info = type_info
        self._length = length
        self._byteorder = byteorder

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @property
    def length(self) -> int:
        return self._length

    @override
    def _check_value(self, value: int, /) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError('expected integer')
        lower_bound, upper_bound = int_bounds(length=self._length, signed=True)
        if value > upper_bound:
            raise ValueError('above upper bound')
        if value < lower_bound:
            raise ValueError('below lower bound')

    @override
    def _encode(self, value: int, buf: Serializer, /) -> None:
        encode_int(buf, value, length=self._length, signed=True, byteorder=self._byteorder)

    @override
    def _size_hint(self, value: int, /) -> int:
        return self._length


class FloatContract(EncodeContract[float]):
    __slots__ = ('_type_info', '_length', '_byteorder')

    def __init__(self, type_info: TypeInfo, *, length: int, byteorder: ByteOrder) -> None:
        self._type_info = type_info
        self._length = length
        self._byteorder = byteorder

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @override
    def _check_value(self, value: float, /) -> None:
        # XXX: ints are accepted, like they are for a `float` annotation
        if not isinstance(value, (float, int)) or isinstance(value, bool):
            raise TypeError('expected float')

    @override
    def _encode(self, value: float, buf: Serializer, /) -> None:
        encode_float(buf, float(value), length=self._length, byteorder=self._byteorder)

    @override
    def _size_hint(self, value: float, /) -> int:
        return self._length


class TextContract(EncodeContract[str]):
    """ UTF-8 text, either raw (the value is framed by the caller) or with a length-encoded prefix.
    """

    __slots__ = ('_type_info', '_length_prefixed', '_max_bytes')

    def __init__(self, type_info: TypeInfo, *, length_prefixed: bool, max_bytes: int | None = None) -> None:
        self._type_info = type_info
        self._length_prefixed = length_prefixed
        self._max_bytes = max_bytes

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @override
    def _check_value(self, value: str, /) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str')

    @override
    def _encode(self, value: str, buf: Serializer, /) -> None:
        if self._length_prefixed:
            encode_lenenc_bytes(buf.with_optional_max_bytes(self._max_bytes), value.encode('utf-8'))
        else:
            encode_utf8(buf.with_optional_max_bytes(self._max_bytes), value)

    @override
    def _size_hint(self, value: str, /) -> int:
        if self._length_prefixed:
            return lenenc_bytes_size(value.encode('utf-8'))
        return utf8_size(value)


class BytesContract(EncodeContract[bytes]):
    __slots__ = ('_type_info', '_length_prefixed', '_max_bytes')

    def __init__(self, type_info: TypeInfo, *, length_prefixed: bool, max_bytes: int | None = None) -> None:
        self._type_info = type_info
        self._length_prefixed = length_prefixed
        self._max_bytes = max_bytes

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @override
    def _check_value(self, value: bytes, /) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError('expected bytes')

    @override
    def _encode(self, value: Buffer, buf: Serializer, /) -> None:
        if self._length_prefixed:
            encode_lenenc_bytes(buf.with_optional_max_bytes(self._max_bytes), value)
        else:
            buf.with_optional_max_bytes(self._max_bytes).write_bytes(value)

    @override
    def _size_hint(self, value: Buffer, /) -> int:
        if self._length_prefixed:
            return lenenc_bytes_size(value)
        return len(memoryview(value))
