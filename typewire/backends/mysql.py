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
MySQL binary protocol, used for the parameters of prepared statements.

Integers and floats are little-endian with a fixed size, strings and blobs carry a length-encoded prefix. MySQL has
no composite type, so record-shaped types are not encodable on this backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from typing_extensions import override

from typewire.backends.backend import Backend
from typewire.encode import EncodeContract, TypeInfo
from typewire.encode.scalar import BoolContract, BytesContract, FloatContract, IntContract, TextContract
from typewire.types import Float32, Float64, Int8, Int16, Int32, Int64

MYSQL_TYPE_TINY = 0x01
MYSQL_TYPE_SHORT = 0x02
MYSQL_TYPE_LONG = 0x03
MYSQL_TYPE_FLOAT = 0x04
MYSQL_TYPE_DOUBLE = 0x05
MYSQL_TYPE_LONGLONG = 0x08
MYSQL_TYPE_ENUM = 0xf7
MYSQL_TYPE_BLOB = 0xfc


@dataclass(frozen=True)
class MySqlTypeInfo(TypeInfo):
    type_id: int


class MySqlBackend(Backend):
    name = 'mysql'
    supports_records = False

    @override
    def _build_primitives(self) -> dict[Any, EncodeContract[Any]]:
        tiny = IntContract(MySqlTypeInfo('tinyint', MYSQL_TYPE_TINY), length=1, byteorder='little')
        longlong = IntContract(MySqlTypeInfo('bigint', MYSQL_TYPE_LONGLONG), length=8, byteorder='little')
        double = FloatContract(MySqlTypeInfo('double', MYSQL_TYPE_DOUBLE), length=8, byteorder='little')
        return {
            bool: BoolContract(MySqlTypeInfo('boolean', MYSQL_TYPE_TINY)),
            Int8: tiny,
            Int16: IntContract(MySqlTypeInfo('smallint', MYSQL_TYPE_SHORT), length=2, byteorder='little'),
            Int32: IntContract(MySqlTypeInfo('int', MYSQL_TYPE_LONG), length=4, byteorder='little'),
            Int64: longlong,
            int: longlong,
            Float32: FloatContract(MySqlTypeInfo('float', MYSQL_TYPE_FLOAT), length=4, byteorder='little'),
            Float64: double,
            float: double,
            str: self.text_contract(),
            bytes: BytesContract(MySqlTypeInfo('blob', MYSQL_TYPE_BLOB), length_prefixed=True),
        }

    @override
    def text_contract(self) -> EncodeContract[str]:
        return TextContract(MySqlTypeInfo('text', MYSQL_TYPE_BLOB), length_prefixed=True)

    @override
    def named_type_info(self, name: str) -> TypeInfo:
        return MySqlTypeInfo(name, MYSQL_TYPE_ENUM)
