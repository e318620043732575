from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bincodec.exception import InvalidDataError, TruncatedError
from bincodec.serialization import BadDataError, Deserializer, Serializer, TooLongError
from bincodec.serialization.encoding.bool import decode_bool
from bincodec.serialization.encoding.bytes import decode_bytes, encode_bytes
from bincodec.serialization.encoding.char import decode_char, encode_char
from bincodec.serialization.encoding.datetime import decode_datetime, encode_datetime
from bincodec.serialization.encoding.decimal import decode_decimal, encode_decimal
from bincodec.serialization.encoding.float import decode_float, encode_float
from bincodec.serialization.encoding.int import decode_int, encode_int
from bincodec.serialization.encoding.length import decode_length, encode_length
from bincodec.serialization.encoding.utf8 import decode_utf8, encode_utf8


def _encoded(encoder, *args, **kwargs) -> bytes:
    se = Serializer.build_bytes_serializer()
    encoder(se, *args, **kwargs)
    return bytes(se.finalize())


def _decoded(decoder, data: bytes, **kwargs):
    de = Deserializer.build_bytes_deserializer(data)
    value = decoder(de, **kwargs)
    de.finalize()
    return value


@pytest.mark.parametrize('length, signed, lower, upper', [
    (1, True, -2**7, 2**7 - 1),
    (1, False, 0, 2**8 - 1),
    (2, True, -2**15, 2**15 - 1),
    (4, False, 0, 2**32 - 1),
    (8, True, -2**63, 2**63 - 1),
])
def test_int_bounds(length: int, signed: bool, lower: int, upper: int) -> None:
    for n in (lower, upper):
        data = _encoded(encode_int, n, length=length, signed=signed)
        assert len(data) == length
        assert _decoded(decode_int, data, length=length, signed=signed) == n
    with pytest.raises(ValueError):
        _encoded(encode_int, lower - 1, length=length, signed=signed)
    with pytest.raises(ValueError):
        _encoded(encode_int, upper + 1, length=length, signed=signed)


def test_int_is_little_endian() -> None:
    assert _encoded(encode_int, 1, length=4, signed=True) == b'\x01\x00\x00\x00'


def test_length_null_marker() -> None:
    assert _encoded(encode_length, None) == b'\xff\xff\xff\xff'
    assert _decoded(decode_length, b'\xff\xff\xff\xff') is None
    assert _decoded(decode_length, b'\x05\x00\x00\x00') == 5


def test_length_rejects_other_negatives() -> None:
    with pytest.raises(BadDataError):
        _decoded(decode_length, b'\xfe\xff\xff\xff')
    with pytest.raises(ValueError):
        _encoded(encode_length, -1)


def test_length_maximum() -> None:
    with pytest.raises(TooLongError):
        _decoded(decode_length, b'\x09\x00\x00\x00', max_length=8)
    assert _decoded(decode_length, b'\x08\x00\x00\x00', max_length=8) == 8


def test_bool_rejects_other_bytes() -> None:
    assert _decoded(decode_bool, b'\x01') is True
    with pytest.raises(InvalidDataError):
        _decoded(decode_bool, b'\x02')


def test_float_single_precision_loses_precision() -> None:
    data = _encoded(encode_float, 0.1, length=4)
    assert len(data) == 4
    assert _decoded(decode_float, data, length=4) == pytest.approx(0.1, rel=1e-6)
    assert _decoded(decode_float, _encoded(encode_float, 0.1, length=8), length=8) == 0.1


def test_float_out_of_range() -> None:
    with pytest.raises(ValueError):
        _encoded(encode_float, 1e300, length=4)


def test_float_special_values() -> None:
    assert _decoded(decode_float, _encoded(encode_float, float('inf'), length=8), length=8) == float('inf')
    nan = _decoded(decode_float, _encoded(encode_float, float('nan'), length=4), length=4)
    assert nan != nan


@pytest.mark.parametrize('value', [
    Decimal('0'),
    Decimal('1.5'),
    Decimal('-0.001'),
    Decimal('79228162514264337593543950335'),
    Decimal('-7.9228162514264337593543950335'),
    Decimal('123.4500'),
])
def test_decimal_round_trip(value: Decimal) -> None:
    data = _encoded(encode_decimal, value)
    assert len(data) == 16
    result = _decoded(decode_decimal, data)
    assert result == value
    # trailing zeros are part of the scale
    assert result.as_tuple().exponent == value.as_tuple().exponent


def test_decimal_limits() -> None:
    with pytest.raises(ValueError):
        _encoded(encode_decimal, Decimal('79228162514264337593543950336'))
    with pytest.raises(ValueError):
        _encoded(encode_decimal, Decimal('1E-29'))
    with pytest.raises(ValueError):
        _encoded(encode_decimal, Decimal('NaN'))
    with pytest.raises(BadDataError):
        # scale 29 in the flags
        _decoded(decode_decimal, bytes(12) + bytes([0, 0, 29, 0]))


def test_char() -> None:
    assert _decoded(decode_char, _encoded(encode_char, 'é')) == 'é'
    with pytest.raises(ValueError):
        _encoded(encode_char, 'ab')
    with pytest.raises(BadDataError):
        _decoded(decode_char, b'\x00\x00\x11\x00')


def test_utf8_length_counts_bytes() -> None:
    data = _encoded(encode_utf8, 'ação')
    assert data[:4] == b'\x06\x00\x00\x00'
    assert _decoded(decode_utf8, data) == 'ação'


def test_utf8_null_and_empty() -> None:
    assert _encoded(encode_utf8, None) == b'\xff\xff\xff\xff'
    assert _encoded(encode_utf8, '') == b'\x00\x00\x00\x00'
    assert _decoded(decode_utf8, b'\x00\x00\x00\x00') == ''
    assert _decoded(decode_utf8, b'\xff\xff\xff\xff') is None


def test_utf8_is_never_null_terminated() -> None:
    assert _encoded(encode_utf8, 'a') == b'\x01\x00\x00\x00a'


def test_utf8_too_long() -> None:
    with pytest.raises(TooLongError):
        _decoded(decode_utf8, _encoded(encode_utf8, 'abc'), max_length=2)


def test_bytes_truncated() -> None:
    with pytest.raises(TruncatedError):
        _decoded(decode_bytes, b'\x03\x00\x00\x00ab')


def test_bytes_accepts_any_buffer() -> None:
    expected = b'\x02\x00\x00\x00ab'
    assert _encoded(encode_bytes, b'ab') == expected
    assert _encoded(encode_bytes, bytearray(b'ab')) == expected
    assert _encoded(encode_bytes, memoryview(b'xaby')[1:3]) == expected


@pytest.mark.parametrize('value', [
    datetime(2024, 2, 29, 13, 45, 1, 123456),
    datetime(1, 1, 1),
    datetime(9999, 12, 31, 23, 59, 59, 999999),
    datetime(2024, 2, 29, 13, 45, 1, tzinfo=timezone.utc),
])
def test_datetime_round_trip(value: datetime) -> None:
    data = _encoded(encode_datetime, value)
    assert len(data) == 8
    assert _decoded(decode_datetime, data) == value


def test_datetime_converts_to_utc() -> None:
    value = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=-3)))
    result = _decoded(decode_datetime, _encoded(encode_datetime, value))
    assert result.tzinfo is timezone.utc
    assert result == datetime(2024, 1, 1, 15, tzinfo=timezone.utc)


def test_datetime_rejects_unknown_kind() -> None:
    # kind bits set to 3
    with pytest.raises(BadDataError):
        _decoded(decode_datetime, bytes(7) + b'\xc0')
