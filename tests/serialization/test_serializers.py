import io

import pytest

from bincodec.exception import InvalidDataError, TruncatedError
from bincodec.serialization import Deserializer, OutOfDataError, Serializer, TrailingDataError
from bincodec.serialization.adapters import MaxBytesExceededError


def test_bytes_serializer_joins_writes() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_byte(1)
    se.write_bytes(b'\x02\x03')
    se.write_struct((4,), '<H')
    assert se.cur_pos() == 5
    assert bytes(se.finalize()) == b'\x01\x02\x03\x04\x00'


def test_bytes_serializer_copies_mutable_buffers() -> None:
    se = Serializer.build_bytes_serializer()
    data = bytearray(b'ab')
    se.write_bytes(data)
    data[0] = ord('z')
    assert bytes(se.finalize()) == b'ab'


def test_bytes_deserializer_reads_and_tracks_position() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03\x04\x00')
    assert de.peek_byte() == 1
    assert de.read_byte() == 1
    assert bytes(de.read_bytes(2)) == b'\x02\x03'
    assert de.cur_pos() == 3
    assert de.read_struct('<H') == (4,)
    assert de.is_empty()
    de.finalize()


def test_bytes_deserializer_out_of_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01')
    with pytest.raises(OutOfDataError):
        de.read_bytes(2)
    # the failed read does not consume anything
    assert de.read_byte() == 1
    with pytest.raises(TruncatedError):
        de.read_byte()


def test_bytes_deserializer_trailing_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    de.read_byte()
    with pytest.raises(TrailingDataError):
        de.finalize()
    assert issubclass(TrailingDataError, InvalidDataError)


def test_stream_round_trip() -> None:
    stream = io.BytesIO()
    se = Serializer.build_stream_serializer(stream)
    se.write_bytes(b'hello')
    se.write_byte(0x21)
    assert se.cur_pos() == 6
    se.finalize()
    assert stream.getvalue() == b'hello!'

    de = Deserializer.build_stream_deserializer(io.BytesIO(b'hello!rest'))
    assert de.peek_byte() == ord('h')
    assert bytes(de.read_bytes(5)) == b'hello'
    assert de.read_byte() == ord('!')
    assert de.cur_pos() == 6
    assert not de.is_empty()
    assert bytes(de.read_all()) == b'rest'
    de.finalize()


def test_stream_deserializer_out_of_data() -> None:
    de = Deserializer.build_stream_deserializer(io.BytesIO(b'abc'))
    with pytest.raises(OutOfDataError):
        de.read_bytes(4)


def test_max_bytes_serializer() -> None:
    se = Serializer.build_bytes_serializer().with_max_bytes(3)
    se.write_bytes(b'ab')
    se.write_byte(0x63)
    with pytest.raises(MaxBytesExceededError):
        se.write_byte(0x64)


def test_max_bytes_deserializer() -> None:
    de = Deserializer.build_bytes_deserializer(b'abcdef').with_max_bytes(4)
    assert bytes(de.read_bytes(3)) == b'abc'
    with pytest.raises(MaxBytesExceededError):
        de.read_bytes(2)
    # reaching the budget looks like the end of the data to decoders
    assert issubclass(MaxBytesExceededError, TruncatedError)


def test_optional_max_bytes() -> None:
    se = Serializer.build_bytes_serializer()
    assert se.with_optional_max_bytes(None) is se
    limited = se.with_optional_max_bytes(1)
    assert limited is not se
    limited.write_byte(1)
    with pytest.raises(MaxBytesExceededError):
        limited.write_byte(2)
