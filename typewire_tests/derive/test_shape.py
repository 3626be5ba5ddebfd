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

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, NamedTuple

import pytest

from typewire import Int32, field_options
from typewire.derive.attributes import resolve_attributes
from typewire.derive.shape import (
    Attribute,
    Enumeration,
    FieldDef,
    NamedFields,
    TypeDefinition,
    UnnamedFields,
    describe_type,
)
from typewire.exception import InvalidAttributeCombinationError


class Point(NamedTuple):
    x: Int32
    y: Int32


class Plain:
    kind: ClassVar[str] = 'plain'
    name: str
    size: int


class Flags(IntEnum):
    A = 1
    B = 2
    ALIAS = 1


class Mixed(Enum):
    Yes = True
    Number = 3
    Text = 'text'


def test_named_tuple() -> None:
    type_def = describe_type(Point)
    assert type_def.shape == NamedFields((FieldDef('x', 0, Int32), FieldDef('y', 1, Int32)))
    assert type_def.class_ is Point
    assert type_def.shape.fields[1].get_value(Point(1, 2)) == 2


def test_plain_class_ignores_class_vars() -> None:
    type_def = describe_type(Plain)
    assert isinstance(type_def.shape, NamedFields)
    assert [f.name for f in type_def.shape.fields] == ['name', 'size']


def test_enum_aliases_and_discriminants() -> None:
    type_def = describe_type(Flags)
    assert isinstance(type_def.shape, Enumeration)
    assert [(v.name, v.discriminant) for v in type_def.shape.variants] == [('A', 1), ('B', 2)]

    type_def = describe_type(Mixed)
    assert isinstance(type_def.shape, Enumeration)
    assert [v.discriminant for v in type_def.shape.variants] == [None, 3, None]


def test_member_options_from_field_metadata() -> None:
    @dataclass
    class Row:
        id: Int32 = field(metadata=field_options(rename='row_id'))
        other: Int32 = 0

    type_def = describe_type(Row, members={'other': {'rename': 'x'}})
    assert isinstance(type_def.shape, NamedFields)
    assert [f.attributes for f in type_def.shape.fields] == [
        (Attribute('rename', 'row_id'),),
        (Attribute('rename', 'x'),),
    ]


def test_member_options_given_twice() -> None:
    @dataclass
    class Row:
        id: Int32 = field(metadata=field_options(rename='row_id'))

    type_def = describe_type(Row, members={'id': {'rename': 'other'}})
    with pytest.raises(InvalidAttributeCombinationError):
        resolve_attributes(type_def)


def test_unresolvable_annotations() -> None:
    @dataclass
    class Node:
        next: 'Missing | None'  # type: ignore[name-defined]  # noqa: F821

    with pytest.raises(TypeError):
        describe_type(Node)


def test_not_a_class() -> None:
    with pytest.raises(TypeError):
        describe_type(Int32)


def test_specialize_checks_arity() -> None:
    type_def = TypeDefinition('Box', UnnamedFields((FieldDef(None, 0, int),)))
    with pytest.raises(TypeError):
        type_def.specialize((int,))
