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
from typing import Any, ClassVar

from typewire.encode import EncodeContract, OptionalContract, TypeInfo
from typewire.exception import UnresolvedMemberEncodingError
from typewire.serialization import Serializer
from typewire.utils.typing import get_origin, optional_inner_type


class RecordEncoder(ABC):
    """ Writes the fields of a record one by one, it is created on a buffer and must be finished once.
    """

    @abstractmethod
    def encode(self, value: Any, contract: EncodeContract[Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def finish(self) -> None:
        raise NotImplementedError


class Backend(ABC):
    """ A target database wire format.

    A backend ships the encode contracts of the primitive types and the pieces generated contracts need: a text
    contract for strong enums, a way to name a user type, and (when the backend has a composite type) a record
    encoder.
    """

    name: ClassVar[str]

    # when False, no contract is generated for record-shaped types
    supports_records: ClassVar[bool] = False

    # bytes each record field takes besides its own encoding
    record_field_overhead: ClassVar[int] = 0

    def __init__(self) -> None:
        self._primitives: dict[Any, EncodeContract[Any]] = self._build_primitives()

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.name}>'

    @abstractmethod
    def _build_primitives(self) -> dict[Any, EncodeContract[Any]]:
        """ Map of the annotations this backend knows how to encode natively to their contracts."""
        raise NotImplementedError

    @abstractmethod
    def text_contract(self) -> EncodeContract[str]:
        """ Contract used to send the labels of strong enums."""
        raise NotImplementedError

    @abstractmethod
    def named_type_info(self, name: str) -> TypeInfo:
        """ Identity of a user-defined type known to the database by name (enums and records)."""
        raise NotImplementedError

    def record_encoder(self, buf: Serializer) -> RecordEncoder:
        raise TypeError(f'backend {self.name} does not support records')

    def primitive_types(self) -> list[Any]:
        return list(self._primitives)

    def contract_for(self, type_: Any) -> EncodeContract[Any]:
        """ Find the contract for an annotation, raises `UnresolvedMemberEncodingError` when there is none.

        Optional annotations wrap the contract of their inner type, derived types (also when specialized) use their
        generated contracts and everything else must be one of the backend's primitives.
        """
        if isinstance(type_, str):
            raise UnresolvedMemberEncodingError(type_, self.name, reason='forward references must be resolved')

        inner = optional_inner_type(type_)
        if inner is not None:
            return OptionalContract(self.contract_for(inner))

        from typewire.derive.driver import contract_for_derived, is_derived
        if is_derived(get_origin(type_) or type_):
            return contract_for_derived(type_, self)

        try:
            return self._primitives[type_]
        except (KeyError, TypeError):
            raise UnresolvedMemberEncodingError(type_, self.name) from None
