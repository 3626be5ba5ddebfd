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

from typing import Any, Optional

from structlog import get_logger
from typing_extensions import override

from typewire.backends.backend import Backend
from typewire.derive.generators.utils import check_instance, resolve_field_contract
from typewire.derive.shape import FieldDef, TypeDefinition
from typewire.derive.strategy import Record
from typewire.encode import EncodeContract, TypeInfo
from typewire.serialization import Serializer

logger = get_logger()


class RecordContract(EncodeContract[Any]):
    """ Named aggregates are sent as a record (a composite value) with one entry per field in declaration order.

    The size hint adds a fixed overhead per field (type id and length prefix on Postgres) to the hints of the fields,
    the record header (the field count) is not included.
    """

    __slots__ = ('_type_def', '_type_info', '_fields', '_backend')

    def __init__(
        self,
        type_def: TypeDefinition,
        type_info: TypeInfo,
        fields: tuple[tuple[FieldDef, EncodeContract[Any]], ...],
        backend: Backend,
    ) -> None:
        assert backend.supports_records
        self._type_def = type_def
        self._type_info = type_info
        self._fields = fields
        self._backend = backend

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @property
    def column_count(self) -> int:
        return len(self._fields)

    @override
    def _check_value(self, value: Any, /) -> None:
        check_instance(self._type_def, value)

    @override
    def _encode(self, value: Any, buf: Serializer, /) -> None:
        encoder = self._backend.record_encoder(buf)
        for field, contract in self._fields:
            encoder.encode(field.get_value(value), contract)
        encoder.finish()

    @override
    def _size_hint(self, value: Any, /) -> int:
        overhead = self.column_count * self._backend.record_field_overhead
        return overhead + sum(contract.size_hint(field.get_value(value)) for field, contract in self._fields)


def generate_record(type_def: TypeDefinition, strategy: Record, backend: Backend) -> Optional[RecordContract]:
    """ Returns None when the backend has no composite type, no contract exists for such backends.
    """
    if not backend.supports_records:
        logger.debug('backend does not support records, skipping', type=type_def.name, backend=backend.name)
        return None
    fields = tuple((field, resolve_field_contract(type_def, field, backend)) for field in strategy.fields)
    return RecordContract(type_def, backend.named_type_info(strategy.type_name), fields, backend)
