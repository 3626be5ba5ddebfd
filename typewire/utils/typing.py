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

from collections.abc import Mapping
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args as _typing_get_args, get_origin as _typing_get_origin


def get_origin(t: Any, /) -> Any:
    """ Like typing.get_origin, but `typing.Union[...]` and `A | B` both give `types.UnionType`.

    >>> from typing import Optional
    >>> get_origin(Optional[int]) is UnionType
    True
    >>> get_origin(int | None) is UnionType
    True
    >>> get_origin(tuple[int, str])
    <class 'tuple'>
    >>> get_origin(int) is None
    True
    """
    origin = _typing_get_origin(t)
    if origin is Union:
        return UnionType
    return origin


def get_args(t: Any, /) -> tuple[Any, ...]:
    return _typing_get_args(t)


def is_union(t: Any, /) -> bool:
    return get_origin(t) is UnionType


def optional_inner_type(t: Any, /) -> Any | None:
    """ Returns `T` when given `T | None` (or `Optional[T]`), otherwise returns None.

    >>> optional_inner_type(int | None)
    <class 'int'>
    >>> optional_inner_type(int | str | None) is None
    True
    >>> optional_inner_type(int) is None
    True
    """
    if not is_union(t):
        return None
    args = get_args(t)
    if NoneType not in args:
        return None
    rest = tuple(arg for arg in args if arg is not NoneType)
    if len(rest) != 1:
        return None
    inner, = rest
    return inner


def is_subclass(cls: Any, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes, returns False for non-classes.

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(str, int)
    False

    But `is_subclass` also works when a NewType is given as arg 1:

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> M = NewType('M', N)
    >>> is_subclass(M, int)
    True
    >>> is_subclass(M, str)
    False
    >>> is_subclass(int | None, int)
    False
    """
    while (super_type := getattr(cls, '__supertype__', None)) is not None:
        cls = super_type
    if not isinstance(cls, type):
        return False
    return issubclass(cls, class_or_tuple)


def substitute_type_vars(type_: Any, mapping: Mapping[TypeVar, Any], /) -> Any:
    """ Replace type variables in a type expression, including inside its arguments.

    >>> T = TypeVar('T')
    >>> substitute_type_vars(T, {T: int})
    <class 'int'>
    >>> substitute_type_vars(T | None, {T: int})
    int | None
    >>> substitute_type_vars(tuple[T, str], {T: bytes})
    tuple[bytes, str]
    >>> substitute_type_vars(str, {T: int})
    <class 'str'>
    """
    if isinstance(type_, TypeVar):
        return mapping.get(type_, type_)

    args = get_args(type_)
    if not args:
        return type_

    new_args = tuple(substitute_type_vars(arg, mapping) for arg in args)
    origin = get_origin(type_)

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if origin is UnionType:
        return reduce(or_, new_args)  # = new_args[0] | new_args[1] | ... | new_args[N]

    # XXX: user generics keep their own origin class, which is indexable like builtin generics
    assert hasattr(origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return origin[new_args if len(new_args) > 1 else new_args[0]]


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int)
    'int'
    >>> pretty_type(None)
    'None'
    >>> pretty_type(int | None)
    'int | None'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__qualname__', None) or getattr(type_, '__name__', None) or str(type_)
