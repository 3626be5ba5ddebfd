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

from typing import Any

from typing_extensions import override

from typewire.backends.backend import Backend
from typewire.derive.generators.utils import check_instance
from typewire.derive.shape import Enumeration, TypeDefinition
from typewire.derive.strategy import WeakEnum
from typewire.encode import EncodeContract, TypeInfo
from typewire.serialization import Serializer


class WeakEnumContract(EncodeContract[Any]):
    """ Variants are sent as their integer value, using the contract of the `repr` integer type.
    """

    __slots__ = ('_type_def', '_discriminants', '_repr_contract')

    def __init__(
        self,
        type_def: TypeDefinition,
        discriminants: dict[Any, int],
        repr_contract: EncodeContract[int],
    ) -> None:
        self._type_def = type_def
        self._discriminants = discriminants
        self._repr_contract = repr_contract

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._repr_contract.type_info

    @override
    def _check_value(self, value: Any, /) -> None:
        check_instance(self._type_def, value)
        if self._type_def.class_ is None and value not in self._discriminants:
            raise TypeError(f'expected a variant of {self._type_def.name}')

    def _discriminant(self, value: Any) -> int:
        try:
            return self._discriminants[value]
        except KeyError:
            raise AssertionError(f'unreachable: {value!r} is not a variant of {self._type_def.name}') from None

    @override
    def _encode(self, value: Any, buf: Serializer, /) -> None:
        self._repr_contract.encode(self._discriminant(value), buf)

    @override
    def _size_hint(self, value: Any, /) -> int:
        return self._repr_contract.size_hint(self._discriminant(value))


def generate_weak_enum(type_def: TypeDefinition, strategy: WeakEnum, backend: Backend) -> WeakEnumContract:
    assert isinstance(type_def.shape, Enumeration)
    discriminants: dict[Any, int] = {}
    for variant in type_def.shape.variants:
        assert variant.discriminant is not None, 'checked by the attribute resolver'
        discriminants[variant.value] = variant.discriminant
    return WeakEnumContract(type_def, discriminants, backend.contract_for(strategy.repr_type))
