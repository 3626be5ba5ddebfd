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

from __future__ import annotations

from typing import TypeVar

from typing_extensions import override

from typewire.encode.contract import EncodeContract, IsNull, TypeInfo
from typewire.serialization import Serializer

T = TypeVar('T')


class OptionalContract(EncodeContract[T | None]):
    """ Contract for `T | None` values, `None` is sent as the wire "null" marker.

    It writes nothing for `None`, whoever frames the value (a bind parameter, a record field) is expected to use
    `encode_nullable` and write the null marker itself.
    """

    __slots__ = ('_inner',)

    _inner: EncodeContract[T]

    def __init__(self, inner: EncodeContract[T]) -> None:
        self._inner = inner

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._inner.type_info

    @override
    def _check_value(self, value: T | None, /) -> None:
        if value is not None:
            self._inner.check_value(value)

    @override
    def _encode(self, value: T | None, buf: Serializer, /) -> None:
        if value is not None:
            self._inner.encode(value, buf)

    @override
    def _encode_nullable(self, value: T | None, buf: Serializer, /) -> IsNull:
        if value is None:
            return IsNull.YES
        return self._inner.encode_nullable(value, buf)

    @override
    def _size_hint(self, value: T | None, /) -> int:
        if value is None:
            return 0
        return self._inner.size_hint(value)
