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
Derived types shared by the tests, they mirror the types used to test the derives of the Postgres driver.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Generic, TypeVar

from typewire import Int32, Int64, derive_encode, field_options

T = TypeVar('T')


@derive_encode(transparent=True)
class Transparent(tuple[Int32]):
    pass


@derive_encode(repr='int32')
class Weak(Enum):
    One = 0
    Two = 2
    Three = 4


@derive_encode(rename='text', rename_all='lowercase', members={'Three': {'rename': 'four'}})
class Strong(Enum):
    One = auto()
    Two = auto()
    Three = auto()


@derive_encode(rename='inventory_item')
@dataclass(frozen=True)
class InventoryItem:
    name: str
    supplier_id: Int32 | None
    price: Int64 | None


@derive_encode(rename_all='SCREAMING_SNAKE_CASE')
class Mood(Enum):
    VeryHappy = 'very happy'
    Sad = 'sad'


@derive_encode
@dataclass(frozen=True)
class Order:
    item: Transparent
    weak: Weak
    mood: Mood
    note: str | None = field(default=None, metadata=field_options(rename='remark'))


@derive_encode
@dataclass(frozen=True)
class Pair(Generic[T]):
    first: T
    second: T | None
