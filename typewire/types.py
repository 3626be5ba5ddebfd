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
Sized scalar types usable in annotations of derived types.

Python's `int` and `float` don't carry a size, so these `NewType`s are used to pick the exact wire type of a field,
for example `Int32` maps to Postgres' `int4`. A bare `int` is treated as `Int64` and a bare `float` as `Float64`.
"""

from typing import NewType

Int8 = NewType('Int8', int)
Int16 = NewType('Int16', int)
Int32 = NewType('Int32', int)
Int64 = NewType('Int64', int)

Float32 = NewType('Float32', float)
Float64 = NewType('Float64', float)

# Names accepted by the `repr` option of weak enums.
INTEGER_TYPES_BY_NAME: dict[str, type[int]] = {
    'int8': Int8,  # type: ignore[dict-item]
    'int16': Int16,  # type: ignore[dict-item]
    'int32': Int32,  # type: ignore[dict-item]
    'int64': Int64,  # type: ignore[dict-item]
}

# Byte sizes of the sized integer types, all of them are signed.
INTEGER_SIZES: dict[type[int], int] = {
    Int8: 1,  # type: ignore[dict-item]
    Int16: 2,  # type: ignore[dict-item]
    Int32: 4,  # type: ignore[dict-item]
    Int64: 8,  # type: ignore[dict-item]
}
