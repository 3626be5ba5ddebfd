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
from typewire.derive.generators.utils import check_instance, omitted_on_backend, resolve_field_contract
from typewire.derive.shape import FieldDef, TypeDefinition
from typewire.derive.strategy import Transparent
from typewire.encode import EncodeContract, IsNull, TypeInfo
from typewire.serialization import Serializer

logger = get_logger()


class TransparentContract(EncodeContract[Any]):
    """ The wrapper is sent exactly as its only field, nullability included.
    """

    __slots__ = ('_type_def', '_field', '_inner')

    def __init__(self, type_def: TypeDefinition, field: FieldDef, inner: EncodeContract[Any]) -> None:
        self._type_def = type_def
        self._field = field
        self._inner = inner

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._inner.type_info

    @override
    def _check_value(self, value: Any, /) -> None:
        check_instance(self._type_def, value)

    @override
    def _encode(self, value: Any, buf: Serializer, /) -> None:
        self._inner.encode(self._field.get_value(value), buf)

    @override
    def _encode_nullable(self, value: Any, buf: Serializer, /) -> IsNull:
        return self._inner.encode_nullable(self._field.get_value(value), buf)

    @override
    def _size_hint(self, value: Any, /) -> int:
        return self._inner.size_hint(self._field.get_value(value))


def generate_transparent(
    type_def: TypeDefinition,
    strategy: Transparent,
    backend: Backend,
) -> Optional[TransparentContract]:
    """ Returns None when the inner type has no contract for the backend, the wrapper is omitted with it.
    """
    if omitted_on_backend(strategy.field.type, backend):
        logger.debug('inner type not generated for backend, skipping', type=type_def.name, backend=backend.name)
        return None
    inner = resolve_field_contract(type_def, strategy.field, backend)
    return TransparentContract(type_def, strategy.field, inner)
