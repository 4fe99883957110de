import io
import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mpwire.errors import (
    BufferOverflowError,
    DataReadError,
    DataWriteError,
    InsufficientBytesError,
)
from mpwire.streams import (
    ByteBuf,
    Bytes,
    FixedBuffer,
    read_data,
    read_exact,
    write_bytes,
    write_data,
)


def test_bytes_read_exact_advances_position():
    rd = Bytes(b"\xcd\x01\x2c")
    assert rd.read_exact(1) == b"\xcd"
    assert rd.position == 1
    assert rd.read_exact(2) == b"\x01\x2c"
    assert rd.position == 3
    assert rd.remaining == b""


def test_bytes_read_single_byte_from_empty_reports_error_fields():
    rd = Bytes(b"")
    with pytest.raises(InsufficientBytesError) as info:
        rd.read_exact(1)
    assert (info.value.expected, info.value.actual, info.value.position) == (1, 0, 0)


def test_bytes_insufficient_does_not_consume():
    rd = Bytes(b"\x01\x02\x03")
    rd.read_exact(1)
    with pytest.raises(InsufficientBytesError) as info:
        rd.read_exact(5)
    assert info.value.actual == 2
    assert info.value.position == 1
    assert rd.position == 1
    assert rd.remaining == b"\x02\x03"


def test_bytes_error_message():
    rd = Bytes(b"\x01")
    with pytest.raises(InsufficientBytesError) as info:
        rd.read_exact(2)
    assert str(info.value) == "Expected at least bytes 2, but only got 1 (pos 0)"


def test_bytes_read_is_file_like():
    rd = Bytes(b"abcdef")
    assert rd.read(4) == b"abcd"
    assert rd.read(10) == b"ef"
    assert rd.read(1) == b""
    assert rd.tell() == 6


def test_bytebuf_collects_writes():
    buf = ByteBuf()
    assert buf.write(b"\xc3") == 1
    buf.write(bytearray(b"\x2a"))
    assert buf.getvalue() == b"\xc3\x2a"
    assert len(buf) == 2
    assert bytes(buf) == buf.getvalue()


def test_fixed_buffer_writes_in_place():
    buf = FixedBuffer(3)
    buf.write(b"\xdc")
    assert bytes(buf) == b"\xdc\x00\x00"
    assert buf.remaining == 2
    buf.write(b"\xff\xff")
    assert bytes(buf) == b"\xdc\xff\xff"
    assert buf.written == b"\xdc\xff\xff"


def test_fixed_buffer_overflow_leaves_buffer_unchanged():
    buf = FixedBuffer(1)
    with pytest.raises(BufferOverflowError):
        buf.write(b"\x01\x02")
    assert bytes(buf) == b"\x00"
    assert buf.remaining == 1


def test_fixed_buffer_empty_rejects_any_byte():
    buf = FixedBuffer(0)
    with pytest.raises(BufferOverflowError):
        buf.write(b"\xc0")


def test_read_exact_from_file_object():
    rd = io.BytesIO(b"\x01\x02\x03")
    assert read_exact(rd, 2) == b"\x01\x02"
    with pytest.raises(InsufficientBytesError) as info:
        read_exact(rd, 2)
    assert info.value.expected == 2
    assert info.value.actual == 1


def test_read_exact_retries_interrupted_reads():
    class InterruptOnce:
        def __init__(self):
            self.calls = 0

        def read(self, size):
            self.calls += 1
            if self.calls == 1:
                raise InterruptedError("interrupted")
            return b"\xc0"

    rd = InterruptOnce()
    assert read_exact(rd, 1) == b"\xc0"
    assert rd.calls == 2


def test_read_exact_gathers_short_reads():
    class Trickle:
        def __init__(self, data):
            self.data = data

        def read(self, size):
            chunk, self.data = self.data[:1], self.data[1:]
            return chunk

    assert read_exact(Trickle(b"\x01\x02\x03"), 3) == b"\x01\x02\x03"


def test_read_data_pi_from_documented_bytes():
    rd = Bytes(bytes([0xCB, 0x40, 0x09, 0x21, 0xFB, 0x54, 0x44, 0x2D, 0x18]))
    rd.read_exact(1)
    assert read_data(rd, "d") == math.pi
    assert rd.position == 9


def test_read_data_u16_from_documented_bytes():
    rd = Bytes(b"\xcd\x01\x2c")
    rd.read_exact(1)
    assert read_data(rd, "H") == 300


def test_read_data_wraps_short_input():
    rd = Bytes(b"\xff")
    with pytest.raises(DataReadError) as info:
        read_data(rd, "I")
    assert isinstance(info.value.error, InsufficientBytesError)
    assert info.value.__cause__ is info.value.error


def test_read_data_wraps_io_error():
    class Broken:
        def read(self, size):
            raise OSError("Mock Error")

    with pytest.raises(DataReadError) as info:
        read_data(Broken(), "B")
    assert str(info.value.error) == "Mock Error"


def test_write_data_u16_matches_documented_bytes():
    buf = ByteBuf()
    write_data(buf, "H", 300)
    assert buf.getvalue() == b"\x01\x2c"


def test_write_data_f64_matches_documented_bytes():
    buf = ByteBuf()
    write_data(buf, "d", math.pi)
    assert buf.getvalue() == bytes([0x40, 0x09, 0x21, 0xFB, 0x54, 0x44, 0x2D, 0x18])


def test_write_data_overflow_wraps_error():
    buf = FixedBuffer(1)
    with pytest.raises(DataWriteError) as info:
        write_data(buf, "H", 65535)
    assert isinstance(info.value.error, BufferOverflowError)
    assert bytes(buf) == b"\x00"


def test_write_data_rejects_out_of_range_value():
    with pytest.raises(ValueError):
        write_data(ByteBuf(), "B", 256)


def test_write_bytes_handles_partial_writes():
    class Partial:
        def __init__(self):
            self.out = bytearray()

        def write(self, data):
            self.out += bytes(data[:2])
            return min(2, len(data))

    wr = Partial()
    write_bytes(wr, b"abcde")
    assert bytes(wr.out) == b"abcde"


def test_write_bytes_zero_write_raises():
    class Stuck:
        def write(self, data):
            return 0

    with pytest.raises(OSError):
        write_bytes(Stuck(), b"x")


@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_u64_round_trip(value):
    buf = ByteBuf()
    write_data(buf, "Q", value)
    assert len(buf) == 8
    assert read_data(Bytes(buf.getvalue()), "Q") == value


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
def test_i64_round_trip(value):
    buf = ByteBuf()
    write_data(buf, "q", value)
    assert read_data(io.BytesIO(buf.getvalue()), "q") == value


@given(st.floats(allow_nan=False))
def test_f64_round_trip(value):
    buf = ByteBuf()
    write_data(buf, "d", value)
    assert read_data(Bytes(buf.getvalue()), "d") == value


@given(st.binary(), st.integers(min_value=0, max_value=64))
def test_bytes_read_exact_invariant(data, size):
    rd = Bytes(data)
    if size <= len(data):
        assert rd.read_exact(size) == data[:size]
        assert rd.position == size
        assert rd.remaining == data[size:]
    else:
        with pytest.raises(InsufficientBytesError):
            rd.read_exact(size)
        assert rd.position == 0