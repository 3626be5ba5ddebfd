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
from typewire.derive.shape import TypeDefinition
from typewire.derive.strategy import StrongEnum
from typewire.encode import EncodeContract, TypeInfo
from typewire.serialization import Serializer


class StrongEnumContract(EncodeContract[Any]):
    """ Variants are sent as text labels, the integer values of the variants (if any) are not used.

    The label table is built once when the contract is generated and covers every variant.
    """

    __slots__ = ('_type_def', '_type_info', '_labels', '_text_contract')

    def __init__(
        self,
        type_def: TypeDefinition,
        type_info: TypeInfo,
        labels: dict[Any, str],
        text_contract: EncodeContract[str],
    ) -> None:
        self._type_def = type_def
        self._type_info = type_info
        self._labels = labels
        self._text_contract = text_contract

    @property
    @override
    def type_info(self) -> TypeInfo:
        return self._type_info

    @property
    def labels(self) -> dict[Any, str]:
        return dict(self._labels)

    @override
    def _check_value(self, value: Any, /) -> None:
        check_instance(self._type_def, value)
        if self._type_def.class_ is None and value not in self._labels:
            raise TypeError(f'expected a variant of {self._type_def.name}')

    def _label(self, value: Any) -> str:
        try:
            return self._labels[value]
        except KeyError:
            raise AssertionError(f'unreachable: {value!r} is not a variant of {self._type_def.name}') from None

    @override
    def _encode(self, value: Any, buf: Serializer, /) -> None:
        self._text_contract.encode(self._label(value), buf)

    @override
    def _size_hint(self, value: Any, /) -> int:
        return self._text_contract.size_hint(self._label(value))


def generate_strong_enum(
    type_def: TypeDefinition,
    strategy: StrongEnum,
    backend: Backend,
) -> StrongEnumContract:
    labels = {variant.value: label for variant, label in strategy.labels}
    assert len(labels) == len(strategy.labels), 'every variant must have its own entry'
    return StrongEnumContract(type_def, backend.named_type_info(strategy.type_name), labels, backend.text_contract())
