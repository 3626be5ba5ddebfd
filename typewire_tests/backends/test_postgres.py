import struct

import pytest

from typewire.backends import POSTGRES, PgRecordEncoder, get_backend
from typewire.backends.postgres import PG_INT4, PG_TEXT, UNSPECIFIED_OID, PgTypeInfo
from typewire.encode import IsNull
from typewire.exception import UnknownBackendError, UnresolvedMemberEncodingError
from typewire.serialization import Serializer
from typewire.types import Float32, Int8, Int16, Int32, Int64
from typewire_tests import unittest


class PostgresPrimitivesTestCase(unittest.TestCase):
    def test_ints_are_big_endian(self) -> None:
        self.assertEqual(POSTGRES.contract_for(Int16).to_bytes(1).hex(), '0001')
        self.assertEqual(POSTGRES.contract_for(Int32).to_bytes(2).hex(), '00000002')
        self.assertEqual(POSTGRES.contract_for(Int64).to_bytes(-1).hex(), 'ff' * 8)

    def test_type_ids(self) -> None:
        expected = {
            bool: 16,
            bytes: 17,
            Int8: 18,
            Int64: 20,
            int: 20,
            Int16: 21,
            Int32: 23,
            str: 25,
            Float32: 700,
            float: 701,
        }
        for type_, oid in expected.items():
            type_info = POSTGRES.contract_for(type_).type_info
            assert isinstance(type_info, PgTypeInfo)
            self.assertEqual(type_info.oid, oid, type_)

    def test_int_range(self) -> None:
        contract = POSTGRES.contract_for(Int32)
        with self.assertRaises(ValueError):
            contract.to_bytes(2**31)
        with self.assertRaises(ValueError):
            contract.to_bytes(-2**31 - 1)
        with self.assertRaises(TypeError):
            contract.to_bytes(True)

    def test_text_is_raw_utf8(self) -> None:
        contract = POSTGRES.contract_for(str)
        self.assertEqual(contract.to_bytes('four'), b'four')
        self.assertEqual(contract.size_hint('ç'), 2)
        with self.assertRaises(TypeError):
            contract.to_bytes(b'four')

    def test_bytes(self) -> None:
        contract = POSTGRES.contract_for(bytes)
        self.assertEqual(contract.to_bytes(b'\x00\x01'), b'\x00\x01')
        self.assertEqual(contract.size_hint(bytearray(3)), 3)

    def test_float(self) -> None:
        self.assertEqual(POSTGRES.contract_for(float).to_bytes(1.5).hex(), '3ff8000000000000')
        self.assertEqual(POSTGRES.contract_for(Float32).to_bytes(1.5).hex(), '3fc00000')
        self.assertEqual(POSTGRES.contract_for(bool).to_bytes(True), b'\x01')

    def test_optional(self) -> None:
        contract = POSTGRES.contract_for(Int32 | None)
        self.assertEqual(contract.type_info, PG_INT4)
        self.assertEqual(self.encode_nullable(contract, None), (IsNull.YES, b''))
        self.assertEqual(self.encode_nullable(contract, 7), (IsNull.NO, b'\x00\x00\x00\x07'))
        self.assertEqual(contract.size_hint(None), 0)
        self.assertEqual(contract.size_hint(7), 4)

    def test_unresolved(self) -> None:
        for type_ in [list[int], int | str, 'Int32', object]:
            with self.assertRaises(UnresolvedMemberEncodingError):
                POSTGRES.contract_for(type_)


class PgRecordEncoderTestCase(unittest.TestCase):
    def test_layout(self) -> None:
        se = Serializer.build_bytes_serializer()
        se.write_bytes(b'prefix')
        encoder = PgRecordEncoder(se)
        encoder.encode('ab', POSTGRES.contract_for(str))
        encoder.encode(None, POSTGRES.contract_for(Int32 | None))
        encoder.finish()
        data = bytes(se.finalize())

        self.assertEqual(data[:6], b'prefix')
        self.assertEqual(struct.unpack_from('!i', data, 6), (2,))
        self.assertEqual(struct.unpack_from('!Ii', data, 10), (PG_TEXT.oid, 2))
        self.assertEqual(data[18:20], b'ab')
        self.assertEqual(struct.unpack_from('!Ii', data, 20), (PG_INT4.oid, -1))
        self.assertEqual(len(data), 28)

    def test_empty_record(self) -> None:
        se = Serializer.build_bytes_serializer()
        encoder = PgRecordEncoder(se)
        encoder.finish()
        self.assertEqual(bytes(se.finalize()), b'\x00\x00\x00\x00')

    def test_cannot_finish_twice(self) -> None:
        encoder = PgRecordEncoder(Serializer.build_bytes_serializer())
        encoder.finish()
        with self.assertRaises(AssertionError):
            encoder.finish()


def test_get_backend() -> None:
    assert get_backend('postgres') is POSTGRES
    with pytest.raises(UnknownBackendError):
        get_backend('oracle')


def test_named_type_info() -> None:
    assert POSTGRES.named_type_info('text') == PG_TEXT
    assert POSTGRES.named_type_info('int4') == PG_INT4
    assert POSTGRES.named_type_info('inventory_item') == PgTypeInfo('inventory_item', UNSPECIFIED_OID)
