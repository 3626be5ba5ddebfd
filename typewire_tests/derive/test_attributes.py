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

from dataclasses import dataclass
from enum import Enum

import pytest

from typewire import Int32, derive_encode
from typewire.derive.attributes import resolve_attributes
from typewire.derive.casing import CasingConvention
from typewire.derive.shape import Attribute, Enumeration, FieldDef, NamedFields, TypeDefinition, VariantDef
from typewire.exception import (
    InvalidAttributeCombinationError,
    InvalidAttributeValueError,
    ShapeError,
    UnknownAttributeError,
)


def _enum_def(*attributes: Attribute, members: dict[str, tuple[Attribute, ...]] | None = None) -> TypeDefinition:
    members = members or {}
    variants = tuple(
        VariantDef(name, name.lower(), discriminant, members.get(name, ()))
        for name, discriminant in [('One', 0), ('Two', 2), ('Three', 4)]
    )
    return TypeDefinition('Numbers', Enumeration(variants), attributes)


def test_strong_enum_attributes() -> None:
    type_def = _enum_def(
        Attribute('rename', 'numbers'),
        Attribute('rename_all', 'lowercase'),
        members={'Three': (Attribute('rename', 'four'),)},
    )
    resolved = resolve_attributes(type_def)
    assert resolved.container.rename == 'numbers'
    assert resolved.container.rename_all is CasingConvention.LOWERCASE
    assert resolved.container.representation is None
    assert [member.rename for member in resolved.members] == [None, None, 'four']


def test_weak_enum_attributes() -> None:
    resolved = resolve_attributes(_enum_def(Attribute('repr', 'int16')))
    assert resolved.container.representation == 'int16'


def test_unknown_option() -> None:
    with pytest.raises(UnknownAttributeError) as exc_info:
        resolve_attributes(_enum_def(Attribute('rename_al', 'lowercase')))
    assert exc_info.value.attribute == 'rename_al'
    assert str(exc_info.value) == 'Numbers: attribute `rename_al`: unknown option'


def test_unknown_member_option() -> None:
    with pytest.raises(UnknownAttributeError) as exc_info:
        resolve_attributes(_enum_def(members={'Two': (Attribute('skip', True),)}))
    assert exc_info.value.member == 'Two'
    assert exc_info.value.attribute == 'skip'


def test_duplicated_option() -> None:
    with pytest.raises(InvalidAttributeCombinationError) as exc_info:
        resolve_attributes(_enum_def(Attribute('rename', 'a'), Attribute('rename', 'b')))
    assert exc_info.value.rule == 'may only be given once'


def test_duplicated_member_rename() -> None:
    rename = (Attribute('rename', 'a'), Attribute('rename', 'b'))
    with pytest.raises(InvalidAttributeCombinationError) as exc_info:
        resolve_attributes(_enum_def(members={'One': rename}))
    assert str(exc_info.value) == 'Numbers.One: attribute `rename`: may only be given once'


@pytest.mark.parametrize('attribute', [
    Attribute('rename_all', 'Title Case'),
    Attribute('rename', 1),
    Attribute('transparent', 'yes'),
    Attribute('repr', 32),
])
def test_invalid_option_values(attribute: Attribute) -> None:
    with pytest.raises(InvalidAttributeValueError) as exc_info:
        resolve_attributes(_enum_def(attribute))
    assert exc_info.value.attribute == attribute.key


def test_weak_enum_unsupported_repr() -> None:
    with pytest.raises(InvalidAttributeValueError) as exc_info:
        resolve_attributes(_enum_def(Attribute('repr', 'int128')))
    assert exc_info.value.attribute == 'repr'
    assert 'int8, int16, int32, int64' in exc_info.value.rule


def test_weak_enum_forbids_rename_all() -> None:
    with pytest.raises(InvalidAttributeCombinationError) as exc_info:
        resolve_attributes(_enum_def(Attribute('repr', 'int32'), Attribute('rename_all', 'lowercase')))
    assert exc_info.value.attribute == 'rename_all'


def test_weak_enum_forbids_variant_rename() -> None:
    with pytest.raises(InvalidAttributeCombinationError) as exc_info:
        resolve_attributes(_enum_def(Attribute('repr', 'int32'), members={'Two': (Attribute('rename', 'two'),)}))
    assert exc_info.value.member == 'Two'


def test_weak_enum_discriminant_out_of_range() -> None:
    with pytest.raises(InvalidAttributeValueError) as exc_info:
        @derive_encode(repr='int8')
        class Big(Enum):
            Small = 1
            Large = 300

    assert exc_info.value.member == 'Large'
    assert exc_info.value.rule == 'value 300 does not fit in int8'


def test_weak_enum_without_integer_values() -> None:
    with pytest.raises(InvalidAttributeValueError) as exc_info:
        @derive_encode(repr='int32')
        class Color(Enum):
            Red = 'red'

    assert exc_info.value.member == 'Red'


def test_strong_enum_forbids_transparent() -> None:
    with pytest.raises(InvalidAttributeCombinationError):
        resolve_attributes(_enum_def(Attribute('transparent', True)))


def test_strong_enum_duplicated_labels() -> None:
    with pytest.raises(InvalidAttributeValueError) as exc_info:
        resolve_attributes(_enum_def(members={'Three': (Attribute('rename', 'Two'),)}))
    assert exc_info.value.member == 'Three'


def test_strong_enum_labels_collide_after_casing() -> None:
    with pytest.raises(ShapeError):
        @derive_encode(rename_all='lowercase')
        class Status(Enum):
            Active = 1
            ACTIVE = 2


def test_transparent_forbids_container_options() -> None:
    for option in [{'rename': 'id'}, {'rename_all': 'lowercase'}, {'repr': 'int32'}]:
        with pytest.raises(InvalidAttributeCombinationError) as exc_info:
            @derive_encode(**option)
            class Id(tuple[Int32]):
                pass

        assert exc_info.value.attribute in option


def test_transparent_forbids_field_rename() -> None:
    with pytest.raises(InvalidAttributeCombinationError) as exc_info:
        @derive_encode(members={'0': {'rename': 'id'}})
        class Id(tuple[Int32]):
            pass

    assert exc_info.value.member == '0'


def test_record_forbids_repr_and_transparent() -> None:
    fields = (FieldDef('a', 0, int),)
    for attribute in [Attribute('repr', 'int32'), Attribute('transparent', True)]:
        type_def = TypeDefinition('Item', NamedFields(fields), (attribute,))
        with pytest.raises(InvalidAttributeCombinationError) as exc_info:
            resolve_attributes(type_def)
        assert exc_info.value.attribute == attribute.key


def test_unknown_member_name() -> None:
    with pytest.raises(UnknownAttributeError) as exc_info:
        @derive_encode(members={'nmae': {'rename': 'label'}})
        @dataclass
        class Item:
            name: str

    assert exc_info.value.member == 'nmae'
