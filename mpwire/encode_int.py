"""Writing MessagePack integers, either in a fixed width or the most compact one."""

from __future__ import annotations

from mpwire.errors import BufferOverflowError, MarkerWriteError
from mpwire.marker import Marker, MarkerKind
from mpwire.streams import Writer, write_bytes, write_data

__all__ = [
    "write_pfix",
    "write_u8",
    "write_u16",
    "write_u32",
    "write_u64",
    "write_uint",
    "write_nfix",
    "write_i8",
    "write_i16",
    "write_i32",
    "write_i64",
    "write_sint",
]

_U64_MAX = (1 << 64) - 1
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1


def _check_range(val: int, low: int, high: int) -> None:
    if not low <= val <= high:
        raise ValueError(f"value {val} is outside [{low}; {high}]")


def _emit_marker(wr: Writer, marker: Marker) -> None:
    """Write a marker byte, letting the writer's own error propagate."""
    write_bytes(wr, bytes((marker.to_byte(),)))


def _write_marker(wr: Writer, marker: Marker) -> None:
    """Write a marker byte, wrapping any failure in :class:`MarkerWriteError`."""
    try:
        _emit_marker(wr, marker)
    except (OSError, BufferOverflowError) as exc:
        raise MarkerWriteError(exc) from exc


def _write_fixed(wr: Writer, kind: MarkerKind, fmt: str, val: int) -> None:
    _write_marker(wr, Marker(kind))
    write_data(wr, fmt, val)


def write_pfix(wr: Writer, val: int) -> None:
    """Write ``val`` (0 to 127) as a positive fixint.

    Raises :class:`ValueError` if ``val`` is out of range; errors of the
    writer itself propagate unchanged.
    """
    _check_range(val, 0, 127)
    _emit_marker(wr, Marker(MarkerKind.FIX_POS, val))


def write_u8(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as uint 8 (2 bytes)."""
    _check_range(val, 0, 0xFF)
    _write_fixed(wr, MarkerKind.U8, "B", val)


def write_u16(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as uint 16 (3 bytes)."""
    _check_range(val, 0, 0xFFFF)
    _write_fixed(wr, MarkerKind.U16, "H", val)


def write_u32(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as uint 32 (5 bytes)."""
    _check_range(val, 0, 0xFFFFFFFF)
    _write_fixed(wr, MarkerKind.U32, "I", val)


def write_u64(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as uint 64 (9 bytes)."""
    _check_range(val, 0, _U64_MAX)
    _write_fixed(wr, MarkerKind.U64, "Q", val)


def write_uint(wr: Writer, val: int) -> Marker:
    """Write an unsigned ``val`` in its most compact form and return the marker used."""
    _check_range(val, 0, _U64_MAX)
    if val < 128:
        marker = Marker(MarkerKind.FIX_POS, val)
        _write_marker(wr, marker)
        return marker
    if val < 0x100:
        write_u8(wr, val)
        return Marker(MarkerKind.U8)
    if val < 0x10000:
        write_u16(wr, val)
        return Marker(MarkerKind.U16)
    if val < 0x100000000:
        write_u32(wr, val)
        return Marker(MarkerKind.U32)
    write_u64(wr, val)
    return Marker(MarkerKind.U64)


def write_nfix(wr: Writer, val: int) -> None:
    """Write ``val`` (-32 to -1) as a negative fixint.

    Raises :class:`ValueError` if ``val`` is out of range; errors of the
    writer itself propagate unchanged.
    """
    _check_range(val, -32, -1)
    _emit_marker(wr, Marker(MarkerKind.FIX_NEG, val))


def write_i8(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as int 8 (2 bytes)."""
    _check_range(val, -0x80, 0x7F)
    _write_fixed(wr, MarkerKind.I8, "b", val)


def write_i16(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as int 16 (3 bytes)."""
    _check_range(val, -0x8000, 0x7FFF)
    _write_fixed(wr, MarkerKind.I16, "h", val)


def write_i32(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as int 32 (5 bytes)."""
    _check_range(val, -0x80000000, 0x7FFFFFFF)
    _write_fixed(wr, MarkerKind.I32, "i", val)


def write_i64(wr: Writer, val: int) -> None:
    """Write ``val`` strictly as int 64 (9 bytes)."""
    _check_range(val, _I64_MIN, _I64_MAX)
    _write_fixed(wr, MarkerKind.I64, "q", val)


def write_sint(wr: Writer, val: int) -> Marker:
    """Write a signed ``val`` in its most compact form and return the marker used.

    Negative values use the signed formats; non-negative values use the
    unsigned ones, which are never longer.
    """
    _check_range(val, _I64_MIN, _I64_MAX)
    if val >= 0:
        return write_uint(wr, val)
    if val >= -32:
        marker = Marker(MarkerKind.FIX_NEG, val)
        _write_marker(wr, marker)
        return marker
    if val >= -0x80:
        write_i8(wr, val)
        return Marker(MarkerKind.I8)
    if val >= -0x8000:
        write_i16(wr, val)
        return Marker(MarkerKind.I16)
    if val >= -0x80000000:
        write_i32(wr, val)
        return Marker(MarkerKind.I32)
    write_i64(wr, val)
    return Marker(MarkerKind.I64)