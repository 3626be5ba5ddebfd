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

import ctypes
from dataclasses import dataclass

import pytest

from typewire import Int32, derive_encode, describe_type
from typewire.derive.attributes import resolve_attributes
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
from typewire.derive.strategy import (
    UNIONS_NOT_SUPPORTED,
    UNIT_NOT_SUPPORTED,
    UNNAMED_FIELDS_NOT_SUPPORTED,
    Record,
    StrongEnum,
    Transparent,
    Unsupported,
    WeakEnum,
    classify,
)
from typewire.exception import UnsupportedShapeError
from typewire.types import Int16, Int64
from typewire_tests.fixtures import InventoryItem, Strong, Weak
from typewire_tests.fixtures import Transparent as TransparentFixture


def _classify(type_def: TypeDefinition):
    return classify(type_def, resolve_attributes(type_def))


def test_transparent() -> None:
    strategy = _classify(describe_type(TransparentFixture))
    assert strategy == Transparent(FieldDef(None, 0, Int32))


def test_weak_enum() -> None:
    strategy = _classify(describe_type(Weak, attributes=[_attr('repr', 'int16')]))
    assert strategy == WeakEnum(Int16, 'int16')


def test_strong_enum() -> None:
    type_def = describe_type(
        Strong,
        attributes=[_attr('rename_all', 'lowercase')],
        members={'Three': {'rename': 'four'}},
    )
    strategy = _classify(type_def)
    assert isinstance(strategy, StrongEnum)
    assert [(variant.value, label) for variant, label in strategy.labels] == [
        (Strong.One, 'one'),
        (Strong.Two, 'two'),
        (Strong.Three, 'four'),
    ]
    assert strategy.type_name == 'Strong'


def test_strong_enum_raw_identifiers() -> None:
    strategy = _classify(describe_type(Strong))
    assert isinstance(strategy, StrongEnum)
    assert [label for _, label in strategy.labels] == ['One', 'Two', 'Three']


def test_record() -> None:
    strategy = _classify(describe_type(InventoryItem, attributes=[_attr('rename', 'inventory_item')]))
    assert isinstance(strategy, Record)
    assert strategy.type_name == 'inventory_item'
    assert [(f.name, f.type) for f in strategy.fields] == [
        ('name', str),
        ('supplier_id', Int32 | None),
        ('price', Int64 | None),
    ]


def test_record_default_type_name() -> None:
    strategy = _classify(describe_type(InventoryItem))
    assert isinstance(strategy, Record)
    assert strategy.type_name == 'InventoryItem'


def test_empty_record() -> None:
    strategy = _classify(TypeDefinition('Nothing', NamedFields(())))
    assert strategy == Record((), 'Nothing')


@pytest.mark.parametrize('shape, reason', [
    (UnionShape(), UNIONS_NOT_SUPPORTED),
    (UnitShape(), UNIT_NOT_SUPPORTED),
    (UnnamedFields(()), UNNAMED_FIELDS_NOT_SUPPORTED),
    (UnnamedFields((FieldDef(None, 0, int), FieldDef(None, 1, int))), UNNAMED_FIELDS_NOT_SUPPORTED),
])
def test_unsupported(shape, reason: str) -> None:
    assert _classify(TypeDefinition('Bad', shape)) == Unsupported(reason)


def test_classification_is_deterministic() -> None:
    type_defs = [
        describe_type(TransparentFixture),
        describe_type(Weak, attributes=[_attr('repr', 'int32')]),
        describe_type(Strong, attributes=[_attr('rename_all', 'kebab-case')]),
        describe_type(InventoryItem),
        TypeDefinition('E', Enumeration((VariantDef('A', 'a', None),))),
        TypeDefinition('U', UnionShape()),
    ]
    for type_def in type_defs:
        resolved = resolve_attributes(type_def)
        assert classify(type_def, resolved) == classify(type_def, resolved)
        assert classify(type_def, resolve_attributes(type_def)) == classify(type_def, resolved)


def test_describe_shapes() -> None:
    class Pair(tuple[int, int]):
        pass

    class Empty(tuple[()]):
        pass

    class Many(tuple[int, ...]):
        pass

    @dataclass
    class Unit:
        pass

    class Plain:
        pass

    class CUnion(ctypes.Union):
        _fields_ = [('i', ctypes.c_int), ('f', ctypes.c_float)]

    assert describe_type(Pair).shape == UnnamedFields((FieldDef(None, 0, int), FieldDef(None, 1, int)))
    assert describe_type(Empty).shape == UnnamedFields(())
    assert describe_type(Many).shape == UnnamedFields(())
    assert describe_type(Unit).shape == UnitShape()
    assert describe_type(Plain).shape == UnitShape()
    assert describe_type(CUnion).shape == UnionShape()
    assert describe_type(int | str).shape == UnionShape()


def test_unsupported_shapes_raise_at_definition() -> None:
    with pytest.raises(UnsupportedShapeError) as exc_info:
        @derive_encode
        class Empty(tuple[()]):
            pass

    assert exc_info.value.rule == UNNAMED_FIELDS_NOT_SUPPORTED
    assert str(exc_info.value) == f'Empty: {UNNAMED_FIELDS_NOT_SUPPORTED}'

    with pytest.raises(UnsupportedShapeError) as exc_info:
        @derive_encode
        class Point(tuple[int, int]):
            pass

    assert exc_info.value.rule == UNNAMED_FIELDS_NOT_SUPPORTED

    with pytest.raises(UnsupportedShapeError) as exc_info:
        @derive_encode
        @dataclass
        class Marker:
            pass

    assert exc_info.value.rule == UNIT_NOT_SUPPORTED

    with pytest.raises(UnsupportedShapeError) as exc_info:
        @derive_encode
        class Value(ctypes.Union):
            _fields_ = [('i', ctypes.c_int), ('f', ctypes.c_float)]

    assert exc_info.value.rule == UNIONS_NOT_SUPPORTED


def _attr(key: str, value: object):
    from typewire.derive.shape import Attribute
    return Attribute(key, value)
