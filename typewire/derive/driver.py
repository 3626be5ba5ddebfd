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
Entry points of encode derivation: resolve the options of a type, classify it and generate its contracts.

Classes are usually derived with the `derive_encode` decorator:

    @derive_encode(rename='inventory_item')
    @dataclass
    class InventoryItem:
        name: str
        supplier_id: Int32 | None
        price: Int64 | None

Invalid options and unsupported shapes raise when the class is defined, and contracts for the enabled backends (see
`TypewireSettings.ENABLED_BACKENDS`) are generated right away. Type definitions built by other front ends go through
`expand_derive_encode` instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar, Union, assert_never, overload

from structlog import get_logger

from typewire.backends import Backend, get_backend
from typewire.conf.get_settings import get_global_settings
from typewire.derive.attributes import ResolvedAttributes, resolve_attributes
from typewire.derive.generators.record import generate_record
from typewire.derive.generators.strong_enum import generate_strong_enum
from typewire.derive.generators.transparent import generate_transparent
from typewire.derive.generators.weak_enum import generate_weak_enum
from typewire.derive.shape import TypeDefinition, describe_type, to_attributes
from typewire.derive.strategy import Record, Strategy, StrongEnum, Transparent, Unsupported, WeakEnum, classify
from typewire.encode import EncodeContract
from typewire.exception import UnresolvedMemberEncodingError, UnsupportedShapeError
from typewire.utils.typing import get_args, get_origin

logger = get_logger()

DERIVE_ATTR = '__derive_encode__'

C = TypeVar('C', bound=type)

_ContractKey = tuple[tuple[Any, ...], str]


class DerivedEncode:
    """ Everything derivation knows about a class: its definition, resolved options, strategy and contracts.

    Contracts are kept per backend, and for generic types per list of type arguments as well. A `None` contract
    means the strategy has no contract for that backend (records on backends without a composite type).
    """

    __slots__ = ('type_def', 'attributes', 'strategy', '_contracts', '_in_progress')

    def __init__(self, type_def: TypeDefinition, attributes: ResolvedAttributes, strategy: Strategy) -> None:
        self.type_def = type_def
        self.attributes = attributes
        self.strategy = strategy
        self._contracts: dict[_ContractKey, Optional[EncodeContract[Any]]] = {}
        self._in_progress: set[_ContractKey] = set()

    def __repr__(self) -> str:
        return f'<DerivedEncode {self.type_def.name} {type(self.strategy).__name__}>'

    def contract_for(self, backend: Backend, args: tuple[Any, ...] = ()) -> Optional[EncodeContract[Any]]:
        key = (args, backend.name)
        if key in self._contracts:
            return self._contracts[key]
        if key in self._in_progress:
            raise UnresolvedMemberEncodingError(
                self.type_def.class_ or self.type_def.name, backend.name, reason='recursive types are not supported',
            )

        self._in_progress.add(key)
        try:
            if args:
                type_def = self.type_def.specialize(args)
                strategy = classify(type_def, self.attributes)
            else:
                type_def, strategy = self.type_def, self.strategy
            contract = generate(type_def, strategy, backend)
        finally:
            self._in_progress.discard(key)

        self._contracts[key] = contract
        return contract

    def generated_backends(self) -> list[str]:
        """ Names of the backends a contract was generated for, not counting generic instantiations."""
        return [name for (args, name), contract in self._contracts.items() if not args and contract is not None]


def analyze(type_def: TypeDefinition) -> tuple[ResolvedAttributes, Strategy]:
    """ Resolve the options of a type and classify it, raises a `ShapeError` if no contract can be generated.
    """
    resolved = resolve_attributes(type_def)
    strategy = classify(type_def, resolved)
    if isinstance(strategy, Unsupported):
        raise UnsupportedShapeError(type_def.name, strategy.reason)
    return resolved, strategy


def generate(type_def: TypeDefinition, strategy: Strategy, backend: Backend) -> Optional[EncodeContract[Any]]:
    match strategy:
        case Transparent():
            return generate_transparent(type_def, strategy, backend)
        case WeakEnum():
            return generate_weak_enum(type_def, strategy, backend)
        case StrongEnum():
            return generate_strong_enum(type_def, strategy, backend)
        case Record():
            return generate_record(type_def, strategy, backend)
        case Unsupported(reason):
            raise UnsupportedShapeError(type_def.name, reason)
    assert_never(strategy)


def expand_derive_encode(type_def: TypeDefinition, backend: Backend) -> Optional[EncodeContract[Any]]:
    """ Generate the contract of a type definition for one backend.

    Returns None when the type is a record and the backend has no record support.
    """
    if type_def.is_generic:
        raise TypeError(f'{type_def.name} is generic, specialize it before generating contracts')
    _, strategy = analyze(type_def)
    return generate(type_def, strategy, backend)


@overload
def derive_encode(cls: C, /) -> C:
    ...


@overload
def derive_encode(
    cls: None = None,
    /,
    *,
    members: Mapping[str, Mapping[str, Any]] | None = None,
    **options: Any,
) -> Callable[[C], C]:
    ...


def derive_encode(
    cls: C | None = None,
    /,
    *,
    members: Mapping[str, Mapping[str, Any]] | None = None,
    **options: Any,
) -> C | Callable[[C], C]:
    """ Class decorator that derives encode contracts, it can be used bare or with options.

    `options` are the container options (`repr`, `rename`, `rename_all`, `transparent`) and `members` maps member
    names to their own options (`rename`). When stacked with `@dataclass` it must be applied after it.
    """
    def wrap(cls: C) -> C:
        type_def = describe_type(cls, attributes=to_attributes(options), members=members)
        resolved, strategy = analyze(type_def)
        derived = DerivedEncode(type_def, resolved, strategy)
        setattr(cls, DERIVE_ATTR, derived)

        if type_def.is_generic:
            logger.debug('derived generic type', type=type_def.name, strategy=type(strategy).__name__)
            return cls

        settings = get_global_settings()
        for backend_name in settings.ENABLED_BACKENDS:
            derived.contract_for(get_backend(backend_name))
        logger.debug(
            'derived type',
            type=type_def.name,
            strategy=type(strategy).__name__,
            backends=derived.generated_backends(),
        )
        return cls

    if cls is None:
        return wrap
    return wrap(cls)


def is_derived(type_: Any) -> bool:
    return isinstance(type_, type) and DERIVE_ATTR in vars(type_)


def get_derived(type_: Any) -> DerivedEncode:
    if not is_derived(type_):
        raise TypeError(f'{type_!r} was not decorated with derive_encode')
    derived = vars(type_)[DERIVE_ATTR]
    assert isinstance(derived, DerivedEncode)
    return derived


def contract_for_derived(type_: Any, backend: Backend) -> EncodeContract[Any]:
    """ Contract of a derived type or of an instantiation of a derived generic type, like `Wrapper[Int32]`.
    """
    origin = get_origin(type_)
    if origin is None:
        origin, args = type_, ()
    else:
        args = get_args(type_)
    derived = get_derived(origin)

    if derived.type_def.is_generic and not args:
        raise UnresolvedMemberEncodingError(
            type_, backend.name, reason='generic types must be given their type arguments',
        )

    contract = derived.contract_for(backend, args)
    if contract is None:
        raise UnresolvedMemberEncodingError(type_, backend.name, reason='records are not supported by this backend')
    return contract


def get_contract(type_: Any, backend: Union[Backend, str, None] = None) -> EncodeContract[Any]:
    """ Contract of any encodable type (derived, primitive or optional) for a backend, by default the configured one.
    """
    if backend is None:
        backend = get_global_settings().DEFAULT_BACKEND
    if isinstance(backend, str):
        backend = get_backend(backend)
    return backend.contract_for(type_)
