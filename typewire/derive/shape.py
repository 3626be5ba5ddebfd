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
Structural description of the types encode contracts are derived for.

A `TypeDefinition` is what the rest of `typewire.derive` works on: the name of the type, its generic parameters, its
shape and the options attached to it and to its members. It can be captured from a live class with `describe_type`
or built by hand by any other front end (for example one reading a schema file).

These are the classes `describe_type` understands:

- `Enum` subclasses are enumerations, the discriminant of a variant is its value when it is an integer;
- subclasses of `tuple[...]` are unnamed aggregates, one field per tuple item (`class UserId(tuple[Int32])`);
- named tuples, dataclasses and plain annotated classes are named aggregates;
- `int | str` style unions and `ctypes.Union` subclasses are unions;
- dataclasses without fields and classes without annotations are unit types.
"""

from __future__ import annotations

import ctypes
import dataclasses
import typing
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias, TypeVar, Union

from typewire.exception import UnknownAttributeError
from typewire.utils.typing import get_args, get_origin, is_union, pretty_type, substitute_type_vars

# key used in dataclass field metadata to hold member options
FIELD_METADATA_KEY = 'typewire'


@dataclass(frozen=True, slots=True)
class Attribute:
    """ A single parsed option, lists of these keep duplicates so they can be reported."""
    key: str
    value: Any


@dataclass(frozen=True, slots=True)
class FieldDef:
    # None for the fields of unnamed aggregates
    name: str | None
    index: int
    type: Any
    attributes: tuple[Attribute, ...] = ()

    @property
    def ident(self) -> str:
        return self.name if self.name is not None else str(self.index)

    def get_value(self, obj: Any) -> Any:
        if self.name is None:
            return obj[self.index]
        return getattr(obj, self.name)


@dataclass(frozen=True, slots=True)
class VariantDef:
    name: str
    # the object that represents this variant at runtime, for Enum classes it is the member itself
    value: Any
    discriminant: int | None
    attributes: tuple[Attribute, ...] = ()


@dataclass(frozen=True, slots=True)
class UnnamedFields:
    fields: tuple[FieldDef, ...]


@dataclass(frozen=True, slots=True)
class NamedFields:
    fields: tuple[FieldDef, ...]


@dataclass(frozen=True, slots=True)
class Enumeration:
    variants: tuple[VariantDef, ...]


@dataclass(frozen=True, slots=True)
class UnionShape:
    pass


@dataclass(frozen=True, slots=True)
class UnitShape:
    pass


Shape: TypeAlias = Union[UnnamedFields, NamedFields, Enumeration, UnionShape, UnitShape]


@dataclass(frozen=True, slots=True)
class TypeDefinition:
    name: str
    shape: Shape
    attributes: tuple[Attribute, ...] = ()
    generics: tuple[TypeVar, ...] = ()
    # absent for definitions that don't come from a live class
    class_: type | None = None

    @property
    def is_generic(self) -> bool:
        return bool(self.generics)

    def members(self) -> tuple[FieldDef, ...] | tuple[VariantDef, ...]:
        match self.shape:
            case UnnamedFields(fields) | NamedFields(fields):
                return fields
            case Enumeration(variants):
                return variants
            case _:
                return ()

    def specialize(self, args: tuple[Any, ...]) -> TypeDefinition:
        """ Replace the generic parameters with concrete types in the types of every field.

        >>> T = TypeVar('T')
        >>> td = TypeDefinition('W', UnnamedFields((FieldDef(None, 0, T),)), generics=(T,))
        >>> td.specialize((int,)).shape
        UnnamedFields(fields=(FieldDef(name=None, index=0, type=<class 'int'>, attributes=()),))
        """
        if len(args) != len(self.generics):
            raise TypeError(f'{self.name} takes {len(self.generics)} type arguments, {len(args)} given')
        mapping = dict(zip(self.generics, args))

        def _specialize_fields(fields: tuple[FieldDef, ...]) -> tuple[FieldDef, ...]:
            return tuple(dataclasses.replace(f, type=substitute_type_vars(f.type, mapping)) for f in fields)

        shape: Shape
        match self.shape:
            case UnnamedFields(fields):
                shape = UnnamedFields(_specialize_fields(fields))
            case NamedFields(fields):
                shape = NamedFields(_specialize_fields(fields))
            case _:
                shape = self.shape
        return dataclasses.replace(self, shape=shape, generics=())


def field_options(**options: Any) -> dict[str, Any]:
    """ Metadata for `dataclasses.field` carrying member options.

    >>> field_options(rename='supplier')
    {'typewire': {'rename': 'supplier'}}
    """
    return {FIELD_METADATA_KEY: options}


def to_attributes(options: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> tuple[Attribute, ...]:
    items = options.items() if isinstance(options, Mapping) else options
    return tuple(Attribute(key, value) for key, value in items)


def describe_type(
    type_: Any,
    *,
    attributes: Iterable[Attribute] = (),
    members: Mapping[str, Mapping[str, Any]] | None = None,
) -> TypeDefinition:
    """ Capture the definition of a live class, see the module docstring for the classes that are understood.

    `members` maps member names (field or variant names) to their options, dataclass fields can also carry options
    in their metadata (see `field_options`).
    """
    attributes = tuple(attributes)
    member_options = dict(members or {})

    if is_union(type_):
        return TypeDefinition(pretty_type(type_), UnionShape(), attributes)
    if not isinstance(type_, type):
        raise TypeError(f'cannot describe {type_!r}, a class is expected')

    name = type_.__name__
    generics = tuple(getattr(type_, '__parameters__', ()))
    shape: Shape

    if issubclass(type_, ctypes.Union):
        shape = UnionShape()
    elif issubclass(type_, Enum):
        shape = Enumeration(tuple(
            VariantDef(
                name=member.name,
                value=member,
                discriminant=_discriminant(member.value),
                attributes=to_attributes(member_options.pop(member.name, {})),
            )
            for member in type_
        ))
    elif issubclass(type_, tuple) and hasattr(type_, '_fields'):
        hints = _type_hints(type_)
        shape = _named_fields(hints, type_._fields, member_options)
    elif issubclass(type_, tuple):
        shape = UnnamedFields(tuple(
            FieldDef(None, index, item_type, to_attributes(member_options.pop(str(index), {})))
            for index, item_type in enumerate(_tuple_item_types(type_))
        ))
    elif dataclasses.is_dataclass(type_):
        hints = _type_hints(type_)
        fields = dataclasses.fields(type_)
        if not fields:
            shape = UnitShape()
        else:
            field_metadata = {f.name: f.metadata.get(FIELD_METADATA_KEY, {}) for f in fields}
            shape = _named_fields(hints, [f.name for f in fields], member_options, field_metadata)
    else:
        hints = {
            key: value
            for key, value in _type_hints(type_).items()
            if get_origin(value) is not typing.ClassVar
        }
        if not hints:
            shape = UnitShape()
        else:
            shape = _named_fields(hints, list(hints), member_options)

    if member_options:
        unknown = next(iter(member_options))
        raise UnknownAttributeError(name, 'no member with this name', member=unknown)

    return TypeDefinition(name, shape, attributes, generics, type_)


def _discriminant(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return int(value)
    return None


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except NameError as e:
        raise TypeError(f'cannot resolve the annotations of {cls.__name__}: {e}') from e


def _tuple_item_types(cls: type) -> tuple[Any, ...]:
    for base in getattr(cls, '__orig_bases__', ()):
        if get_origin(base) is tuple:
            args = get_args(base)
            # tuple[()] and tuple[int, ...] don't describe a fixed list of fields
            if args == ((),) or Ellipsis in args:
                return ()
            return args
    return ()


def _named_fields(
    hints: Mapping[str, Any],
    names: Iterable[str],
    member_options: dict[str, Mapping[str, Any]],
    field_metadata: Mapping[str, Mapping[str, Any]] | None = None,
) -> NamedFields:
    fields = []
    for index, name in enumerate(names):
        options: list[tuple[str, Any]] = []
        if field_metadata is not None:
            options.extend(field_metadata.get(name, {}).items())
        options.extend(member_options.pop(name, {}).items())
        fields.append(FieldDef(name, index, hints[name], to_attributes(options)))
    return NamedFields(tuple(fields))
