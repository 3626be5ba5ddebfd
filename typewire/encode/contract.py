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

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, final

from typewire.serialization import Serializer

T = TypeVar('T')


class IsNull(Enum):
    """ Result of `EncodeContract.encode_nullable`, tells whether the wire "null" marker must be sent instead.
    """
    YES = 'yes'
    NO = 'no'


@dataclass(frozen=True)
class TypeInfo:
    """ Identity of a type on a backend, backends subclass it to add their own type identifiers.
    """
    name: str


class EncodeContract(ABC, Generic[T]):
    """ This class models how values of a known type are written to the wire format of one specific backend.

    Contracts exist for primitive types (shipped by each backend) and are generated for user types by
    `typewire.derive`. Generated contracts normally delegate to the contracts of their members, so a contract can be
    seen as a tree that mirrors the structure of the type it encodes.

    The three operations every contract offers are `encode`, `encode_nullable` and `size_hint`, those are the only
    operations callers (query binding, record encoding) need.
    """

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @property
    @abstractmethod
    def type_info(self) -> TypeInfo:
        """ The backend type this contract produces values for."""
        raise NotImplementedError

    @final
    def encode(self, value: T, buf: Serializer, /) -> None:
        """ Write the wire representation of `value` to `buf`.

        This includes calling a shallow check of the value, so calling `check_value` before is not needed.
        """
        # XXX: subclasses must implement EncodeContract._encode, not EncodeContract.encode
        self._check_value(value)
        self._encode(value, buf)

    @final
    def encode_nullable(self, value: T, buf: Serializer, /) -> IsNull:
        """ Like `encode`, but also report whether the value must be represented by the wire "null" marker.

        When `IsNull.YES` is returned nothing was written to `buf`.
        """
        self._check_value(value)
        return self._encode_nullable(value, buf)

    @final
    def size_hint(self, value: T, /) -> int:
        """ An estimate of the number of bytes `encode` will write, used to pre-size buffers.

        It is never negative, and with the exception of the record header it must not undercount.
        """
        self._check_value(value)
        hint = self._size_hint(value)
        assert hint >= 0, 'size hints cannot be negative'
        return hint

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a `TypeError` if the value is not compatible with this contract."""
        self._check_value(value)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.encode(value, serializer)
        return bytes(serializer.finalize())

    @abstractmethod
    def _check_value(self, value: T, /) -> None:
        """ Inner implementation of `check_value`, it should only check the value itself and not its members.

        Members are checked by their own contracts when they are encoded.
        """
        raise NotImplementedError

    @abstractmethod
    def _encode(self, value: T, buf: Serializer, /) -> None:
        """ Inner implementation of `encode`, you can assume that the given value has been checked.

        When delegating to another contract, its public `encode` should be used so the member gets checked.
        """
        raise NotImplementedError

    def _encode_nullable(self, value: T, buf: Serializer, /) -> IsNull:
        """ Inner implementation of `encode_nullable`, only types that can be null need to override it."""
        self._encode(value, buf)
        return IsNull.NO

    @abstractmethod
    def _size_hint(self, value: T, /) -> int:
        """ Inner implementation of `size_hint`."""
        raise NotImplementedError
