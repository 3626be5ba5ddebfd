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

from dataclasses import dataclass
from typing import TypeAlias, Union, assert_never

from typewire.derive.attributes import ResolvedAttributes, variant_label
from typewire.derive.shape import (
    Enumeration,
    FieldDef,
    NamedFields,
    TypeDefinition,
    UnionShape,
    UnitShape,
    UnnamedFields,
    VariantDef,
)
from typewire.types import INTEGER_TYPES_BY_NAME

UNIONS_NOT_SUPPORTED = 'unions are not supported'
UNNAMED_FIELDS_NOT_SUPPORTED = 'structs with zero or more than one unnamed field are not supported'
UNIT_NOT_SUPPORTED = 'unit structs are not supported'


@dataclass(frozen=True)
class Transparent:
    field: FieldDef


@dataclass(frozen=True)
class WeakEnum:
    repr_type: type[int]
    repr_name: str


@dataclass(frozen=True)
class StrongEnum:
    # in declaration order
    labels: tuple[tuple[VariantDef, str], ...]
    type_name: str


@dataclass(frozen=True)
class Record:
    fields: tuple[FieldDef, ...]
    type_name: str


@dataclass(frozen=True)
class Unsupported:
    reason: str


Strategy: TypeAlias = Union[Transparent, WeakEnum, StrongEnum, Record, Unsupported]


def classify(type_def: TypeDefinition, resolved: ResolvedAttributes) -> Strategy:
    """ Pick the encoding strategy for a type, the attributes must have been resolved for the same definition.

    Every shape leads to exactly one strategy, shapes with no strategy give `Unsupported` with the reason.
    """
    container = resolved.container
    match type_def.shape:
        case UnnamedFields(fields) if len(fields) == 1:
            return Transparent(fields[0])
        case UnnamedFields():
            return Unsupported(UNNAMED_FIELDS_NOT_SUPPORTED)
        case Enumeration() if container.representation is not None:
            return WeakEnum(INTEGER_TYPES_BY_NAME[container.representation], container.representation)
        case Enumeration(variants):
            labels = tuple(
                (variant, variant_label(variant, member, container))
                for variant, member in zip(variants, resolved.members)
            )
            return StrongEnum(labels, container.rename or type_def.name)
        case NamedFields(fields):
            return Record(fields, container.rename or type_def.name)
        case UnionShape():
            return Unsupported(UNIONS_NOT_SUPPORTED)
        case UnitShape():
            return Unsupported(UNIT_NOT_SUPPORTED)
    assert_never(type_def.shape)
