import pytest

from typewire.backends import MYSQL
from typewire.backends.mysql import MYSQL_TYPE_BLOB, MYSQL_TYPE_LONG, MySqlTypeInfo
from typewire.serialization import Serializer
from typewire.types import Int16, Int32


def test_no_records() -> None:
    assert not MYSQL.supports_records
    with pytest.raises(TypeError):
        MYSQL.record_encoder(Serializer.build_bytes_serializer())


def test_ints_are_little_endian() -> None:
    assert MYSQL.contract_for(Int32).to_bytes(2).hex() == '02000000'
    assert MYSQL.contract_for(Int16).to_bytes(-2).hex() == 'feff'
    assert MYSQL.contract_for(Int32).type_info == MySqlTypeInfo('int', MYSQL_TYPE_LONG)


def test_text_is_length_encoded() -> None:
    contract = MYSQL.contract_for(str)
    assert contract.to_bytes('four') == b'\x04four'
    assert contract.size_hint('four') == 5
    assert contract.size_hint('x' * 300) == 303
    assert contract.type_info == MySqlTypeInfo('text', MYSQL_TYPE_BLOB)


def test_bytes_are_length_encoded() -> None:
    assert MYSQL.contract_for(bytes).to_bytes(b'\x00') == b'\x01\x00'


def test_named_types_are_enums() -> None:
    type_info = MYSQL.named_type_info('mood')
    assert isinstance(type_info, MySqlTypeInfo)
    assert type_info.name == 'mood'
