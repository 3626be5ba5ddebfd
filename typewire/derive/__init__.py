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

from typewire.derive.casing import CasingConvention, rename_all
from typewire.derive.driver import derive_encode, expand_derive_encode, get_contract, get_derived
from typewire.derive.shape import Attribute, TypeDefinition, describe_type, field_options
from typewire.derive.strategy import Record, Strategy, StrongEnum, Transparent, Unsupported, WeakEnum, classify

__all__ = [
    'Attribute',
    'CasingConvention',
    'Record',
    'Strategy',
    'StrongEnum',
    'Transparent',
    'TypeDefinition',
    'Unsupported',
    'WeakEnum',
    'classify',
    'derive_encode',
    'describe_type',
    'expand_derive_encode',
    'field_options',
    'get_contract',
    'get_derived',
    'rename_all',
]
