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

from typewire.derive import (
    CasingConvention,
    TypeDefinition,
    derive_encode,
    describe_type,
    expand_derive_encode,
    field_options,
    get_contract,
)
from typewire.encode import EncodeContract, IsNull
from typewire.types import Float32, Float64, Int8, Int16, Int32, Int64
from typewire.version import __version__

__all__ = [
    'CasingConvention',
    'EncodeContract',
    'Float32',
    'Float64',
    'Int16',
    'Int32',
    'Int64',
    'Int8',
    'IsNull',
    'TypeDefinition',
    '__version__',
    'derive_encode',
    'describe_type',
    'expand_derive_encode',
    'field_options',
    'get_contract',
]
