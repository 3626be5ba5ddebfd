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
Postgres binary wire format.

Every value is big-endian, and variable length values (text, bytea) are framed by whoever sends them, so their
contracts write the raw bytes only. Composite values are sent as records:

    int32 column count
    for each column:
        uint32 type oid
        int32 length of the value in bytes, or -1 for NULL
        the value bytes (none for NULL)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from typing_extensions import override

from typewire.backends.backend import Backend, RecordEncoder
from typewire.encode import EncodeContract, IsNull, TypeInfo
from typewire.encode.scalar import BoolContract, BytesContract, FloatContract, IntContract, TextContract
from typewire.serialization import Serializer
from typewire.types import Float32, Float64, Int8, Int16, Int32, Int64

# a field value cannot be bigger than 1GB
PG_MAX_FIELD_BYTES = 2**30 - 1

RECORD_FIELD_OVERHEAD = 4 + 4

# oid used for types only known to the server by name, the server resolves them when the statement is prepared
UNSPECIFIED_OID = 0


@dataclass(frozen=True)
class PgTypeInfo(TypeInfo):
    oid: int


PG_BOOL = PgTypeInfo('bool', 16)
PG_BYTEA = PgTypeInfo('bytea', 17)
PG_CHAR = PgTypeInfo('"char"', 18)
PG_INT8 = PgTypeInfo('int8', 20)
PG_INT2 = PgTypeInfo('int2', 21)
PG_INT4 = PgTypeInfo('int4', 23)
PG_TEXT = PgTypeInfo('text', 25)
PG_OID = PgTypeInfo('oid', 26)
PG_FLOAT4 = PgTypeInfo('float4', 700)
PG_FLOAT8 = PgTypeInfo('float8', 701)
PG_VARCHAR = PgTypeInfo('varchar', 1043)

# user types renamed to one of these are sent with the builtin oid
PG_BUILTIN_TYPES: dict[str, PgTypeInfo] = {
    type_info.name: type_info
    for type_info in [
        PG_BOOL, PG_BYTEA, PG_CHAR, PG_INT8, PG_INT2, PG_INT4, PG_TEXT, PG_OID, PG_FLOAT4, PG_FLOAT8, PG_VARCHAR,
    ]
}


class PgRecordEncoder(RecordEncoder):
    """ Writes a record in the layout described in the module docstring.

    The column count and each length are only known after the values are written, so placeholders are written
    first and patched afterwards.
    """

    __slots__ = ('_buf', '_count_pos', '_count', '_finished')

    def __init__(self, buf: Serializer) -> None:
        self._buf = buf
        self._count_pos = buf.cur_pos()
        self._count = 0
        self._finished = False
        buf.write_struct((0,), '!i')

    @override
    def encode(self, value: Any, contract: EncodeContract[Any]) -> None:
        assert not self._finished, 'record already finished'
        type_info = contract.type_info
        oid = type_info.oid if isinstance(type_info, PgTypeInfo) else UNSPECIFIED_OID
        self._buf.write_struct((oid,), '!I')
        length_pos = self._buf.cur_pos()
        self._buf.write_struct((0,), '!i')
        start = self._buf.cur_pos()
        is_null = contract.encode_nullable(value, self._buf)
        if is_null is IsNull.YES:
            assert self._buf.cur_pos() == start, 'nothing can be written for a null value'
            length = -1
        else:
            length = self._buf.cur_pos() - start
        self._buf.patch_struct(length_pos, (length,), '!i')
        self._count += 1

    @override
    def finish(self) -> None:
        assert not self._finished, 'record already finished'
        self._buf.patch_struct(self._count_pos, (self._count,), '!i')
        self._finished = True


class PostgresBackend(Backend):
    name = 'postgres'
    supports_records = True
    record_field_overhead = RECORD_FIELD_OVERHEAD

    @override
    def _build_primitives(self) -> dict[Any, EncodeContract[Any]]:
        int2 = IntContract(PG_INT2, length=2, byteorder='big')
        int4 = IntContract(PG_INT4, length=4, byteorder='big')
        int8 = IntContract(PG_INT8, length=8, byteorder='big')
        float8 = FloatContract(PG_FLOAT8, length=8, byteorder='big')
        return {
            bool: BoolContract(PG_BOOL),
            Int8: IntContract(PG_CHAR, length=1, byteorder='big'),
            Int16: int2,
            Int32: int4,
            Int64: int8,
            int: int8,
            Float32: FloatContract(PG_FLOAT4, length=4, byteorder='big'),
            Float64: float8,
            float: float8,
            str: self.text_contract(),
            bytes: BytesContract(PG_BYTEA, length_prefixed=False, max_bytes=PG_MAX_FIELD_BYTES),
        }

    @override
    def text_contract(self) -> EncodeContract[str]:
        return TextContract(PG_TEXT, length_prefixed=False, max_bytes=PG_MAX_FIELD_BYTES)

    @override
    def named_type_info(self, name: str) -> TypeInfo:
        builtin = PG_BUILTIN_TYPES.get(name)
        if builtin is not None:
            return builtin
        return PgTypeInfo(name, UNSPECIFIED_OID)

    @override
    def record_encoder(self, buf: Serializer) -> RecordEncoder:
        return PgRecordEncoder(buf)
