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

"""
Validation and normalization of the options attached to a derived type and to its members.

The grammar is small: a container accepts `repr`, `rename`, `rename_all` and `transparent`, a member (field or
variant) accepts `rename`. Which options are legal depends on the shape of the type, so after parsing there is one
check per shape. Every violation raises a `ShapeError` naming the type, the member when there is one, the option and
the rule.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, NoReturn, Optional

from pydantic import ConfigDict, Field, StrictBool, StrictStr, ValidationError

from typewire.derive.casing import CasingConvention, rename_all
from typewire.derive.shape import Attribute, Enumeration, NamedFields, TypeDefinition, UnnamedFields, VariantDef
from typewire.exception import InvalidAttributeCombinationError, InvalidAttributeValueError, UnknownAttributeError
from typewire.serialization.encoding.int import int_bounds
from typewire.types import INTEGER_SIZES, INTEGER_TYPES_BY_NAME
from typewire.utils.pydantic import BaseModel


class ContainerAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # integer type name, only weak enums have it
    representation: Optional[StrictStr] = Field(default=None, alias='repr')
    rename: Optional[StrictStr] = None
    rename_all: Optional[CasingConvention] = None
    transparent: StrictBool = False


class MemberAttributes(BaseModel):
    rename: Optional[StrictStr] = None


@dataclass(frozen=True)
class ResolvedAttributes:
    container: ContainerAttributes
    # in the same order as the members of the type definition
    members: tuple[MemberAttributes, ...]


def parse_container_attributes(type_name: str, attributes: Iterable[Attribute]) -> ContainerAttributes:
    options = _collect_options(type_name, attributes, member=None)
    try:
        return ContainerAttributes.model_validate(options)
    except ValidationError as e:
        _raise_from_validation_error(type_name, e, member=None)


def parse_member_attributes(type_name: str, member: str, attributes: Iterable[Attribute]) -> MemberAttributes:
    options = _collect_options(type_name, attributes, member=member)
    try:
        return MemberAttributes.model_validate(options)
    except ValidationError as e:
        _raise_from_validation_error(type_name, e, member=member)


def _collect_options(type_name: str, attributes: Iterable[Attribute], *, member: str | None) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for attribute in attributes:
        if attribute.key in options:
            raise InvalidAttributeCombinationError(
                type_name, 'may only be given once', attribute=attribute.key, member=member,
            )
        options[attribute.key] = attribute.value
    return options


def _raise_from_validation_error(type_name: str, e: ValidationError, *, member: str | None) -> NoReturn:
    error = e.errors()[0]
    loc = error.get('loc', ())
    attribute = str(loc[0]) if loc else None
    if error['type'] == 'extra_forbidden':
        raise UnknownAttributeError(type_name, 'unknown option', attribute=attribute, member=member) from e
    raise InvalidAttributeValueError(type_name, error['msg'], attribute=attribute, member=member) from e


def _member_name(type_def: TypeDefinition, index: int) -> str:
    member = type_def.members()[index]
    return member.name if isinstance(member, VariantDef) else member.ident


def _forbid(type_def: TypeDefinition, container: ContainerAttributes, *names: str, rule: str) -> None:
    for name in names:
        value = getattr(container, name)
        if value is not None and value is not False:
            attribute = 'repr' if name == 'representation' else name
            raise InvalidAttributeCombinationError(type_def.name, rule, attribute=attribute)


def _forbid_member_rename(type_def: TypeDefinition, resolved: ResolvedAttributes, *, rule: str) -> None:
    for index, member in enumerate(resolved.members):
        if member.rename is not None:
            raise InvalidAttributeCombinationError(
                type_def.name, rule, attribute='rename', member=_member_name(type_def, index),
            )


def check_transparent_attributes(type_def: TypeDefinition, resolved: ResolvedAttributes) -> None:
    _forbid(
        type_def, resolved.container, 'representation', 'rename', 'rename_all',
        rule='not allowed on transparent types',
    )
    _forbid_member_rename(type_def, resolved, rule='not allowed on the field of a transparent type')


def check_weak_enum_attributes(type_def: TypeDefinition, resolved: ResolvedAttributes) -> None:
    assert isinstance(type_def.shape, Enumeration)
    container = resolved.container
    _forbid(type_def, container, 'transparent', rule='not allowed on enums')
    _forbid(type_def, container, 'rename_all', rule='not allowed on enums with a `repr`')
    _forbid_member_rename(type_def, resolved, rule='not allowed on the variants of an enum with a `repr`')

    assert container.representation is not None
    repr_type = INTEGER_TYPES_BY_NAME.get(container.representation)
    if repr_type is None:
        supported = ', '.join(INTEGER_TYPES_BY_NAME)
        raise InvalidAttributeValueError(
            type_def.name, f'must be one of {supported}, got {container.representation!r}', attribute='repr',
        )

    lower_bound, upper_bound = int_bounds(length=INTEGER_SIZES[repr_type], signed=True)
    for variant in type_def.shape.variants:
        if variant.discriminant is None:
            raise InvalidAttributeValueError(
                type_def.name, 'variants need an integer value', attribute='repr', member=variant.name,
            )
        if not lower_bound <= variant.discriminant <= upper_bound:
            raise InvalidAttributeValueError(
                type_def.name,
                f'value {variant.discriminant} does not fit in {container.representation}',
                attribute='repr',
                member=variant.name,
            )


def check_strong_enum_attributes(type_def: TypeDefinition, resolved: ResolvedAttributes) -> None:
    assert isinstance(type_def.shape, Enumeration)
    _forbid(type_def, resolved.container, 'representation', 'transparent', rule='not allowed on enums without a `repr`')

    seen: dict[str, str] = {}
    for variant, member in zip(type_def.shape.variants, resolved.members):
        label = variant_label(variant, member, resolved.container)
        if label in seen:
            raise InvalidAttributeValueError(
                type_def.name, f'label {label!r} is already used by {seen[label]}', member=variant.name,
            )
        seen[label] = variant.name


def check_record_attributes(type_def: TypeDefinition, resolved: ResolvedAttributes) -> None:
    _forbid(type_def, resolved.container, 'representation', 'transparent', rule='not allowed on structs')


def variant_label(variant: VariantDef, member: MemberAttributes, container: ContainerAttributes) -> str:
    """ The wire label of a strong enum variant: its `rename`, else `rename_all` applied to its name, else its name.
    """
    if member.rename is not None:
        return member.rename
    if container.rename_all is not None:
        return rename_all(variant.name, container.rename_all)
    return variant.name


def resolve_attributes(type_def: TypeDefinition) -> ResolvedAttributes:
    """ Parse every option of the type and its members and check that they are legal for its shape.
    """
    container = parse_container_attributes(type_def.name, type_def.attributes)
    members = tuple(
        parse_member_attributes(type_def.name, _member_name(type_def, index), member.attributes)
        for index, member in enumerate(type_def.members())
    )
    resolved = ResolvedAttributes(container, members)

    match type_def.shape:
        case UnnamedFields(fields) if len(fields) == 1:
            check_transparent_attributes(type_def, resolved)
        case Enumeration() if container.representation is not None:
            check_weak_enum_attributes(type_def, resolved)
        case Enumeration():
            check_strong_enum_attributes(type_def, resolved)
        case NamedFields():
            check_record_attributes(type_def, resolved)
        case _:
            # the classifier rejects every other shape
            pass

    return resolved
