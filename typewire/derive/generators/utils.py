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

from typewire.backends.backend import Backend
from typewire.derive.shape import FieldDef, TypeDefinition
from typewire.encode import EncodeContract
from typewire.exception import UnresolvedMemberEncodingError
from typewire.utils.typing import get_args, get_origin, optional_inner_type


def resolve_field_contract(type_def: TypeDefinition, field: FieldDef, backend: Backend) -> EncodeContract[Any]:
    """ Contract of a member type, failures name the derived type and the field."""
    try:
        return backend.contract_for(field.type)
    except UnresolvedMemberEncodingError as e:
        raise UnresolvedMemberEncodingError(
            type_def.class_ or type_def.name, backend.name, reason=f'field `{field.ident}`: {e}',
        ) from e


def omitted_on_backend(type_: Any, backend: Backend) -> bool:
    """ Whether a member type is a derived type (maybe optional) that has no contract for the backend.

    Types wrapping such a member are omitted for the backend as well, like records on backends without them.
    """
    from typewire.derive.driver import get_derived, is_derived

    inner = optional_inner_type(type_)
    if inner is not None:
        type_ = inner
    origin = get_origin(type_)
    args = get_args(type_) if origin is not None else ()
    if origin is None:
        origin = type_
    if not is_derived(origin):
        return False
    derived = get_derived(origin)
    if derived.type_def.is_generic and not args:
        return False
    return derived.contract_for(backend, args) is None


def check_instance(type_def: TypeDefinition, value: Any) -> None:
    """ Values of types captured from a class must be instances of it."""
    if type_def.class_ is not None and not isinstance(value, type_def.class_):
        raise TypeError(f'expected {type_def.name}, got {type(value).__name__}')
