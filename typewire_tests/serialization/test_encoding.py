import pytest

from typewire.serialization import Serializer


@pytest.mark.parametrize('value, length, byteorder, expected', [
    (0, 1, 'big', '00'),
    (-1, 1, 'big', 'ff'),
    (2, 4, 'big', '00000002'),
    (2, 4, 'little', '02000000'),
    (-2, 2, 'big', 'fffe'),
    (2**63 - 1, 8, 'big', '7fffffffffffffff'),
])
def test_signed_int(value: int, length: int, byteorder: str, expected: str) -> None:
    from typewire.serialization.encoding.int import encode_int
    se = Serializer.build_bytes_serializer()
    encode_int(se, value, length=length, signed=True, byteorder=byteorder)  # type: ignore[arg-type]
    assert bytes(se.finalize()).hex() == expected


@pytest.mark.parametrize('value, length', [(128, 1), (-129, 1), (2**31, 4)])
def test_signed_int_overflow(value: int, length: int) -> None:
    from typewire.serialization.encoding.int import encode_int
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_int(se, value, length=length, signed=True)


def test_float_invalid_length() -> None:
    from typewire.serialization.encoding.float import encode_float
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_float(se, 1.0, length=2)


@pytest.mark.parametrize('value, size', [
    (0, 1),
    (250, 1),
    (251, 3),
    (2**16 - 1, 3),
    (2**16, 4),
    (2**24 - 1, 4),
    (2**24, 9),
])
def test_lenenc_int_size(value: int, size: int) -> None:
    from typewire.serialization.encoding.lenenc import encode_lenenc_int, lenenc_int_size
    se = Serializer.build_bytes_serializer()
    encode_lenenc_int(se, value)
    assert len(bytes(se.finalize())) == size == lenenc_int_size(value)


def test_lenenc_int_negative() -> None:
    from typewire.serialization.encoding.lenenc import encode_lenenc_int
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_lenenc_int(se, -1)


def test_utf8_has_no_prefix() -> None:
    from typewire.serialization.encoding.utf8 import encode_utf8, utf8_size
    se = Serializer.build_bytes_serializer()
    encode_utf8(se, 'ação')
    data = bytes(se.finalize())
    assert data == 'ação'.encode('utf-8')
    assert utf8_size('ação') == len(data) == 6
