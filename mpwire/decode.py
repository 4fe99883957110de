"""Reading MessagePack markers, scalars and container lengths."""

from __future__ import annotations

from typing import Any

from mpwire.errors import MarkerReadError, TypeMismatchError
from mpwire.marker import Marker, MarkerKind
from mpwire.streams import Reader, read_data, read_exact

__all__ = [
    "read_marker",
    "read_nil",
    "read_bool",
    "read_int",
    "read_array_len",
    "read_map_len",
    "marker_to_len",
    "read_bin_len",
    "read_pfix",
    "read_u8",
    "read_u16",
    "read_u32",
    "read_u64",
    "read_nfix",
    "read_i8",
    "read_i16",
    "read_i32",
    "read_i64",
    "read_f32",
    "read_f64",
]

# Struct codes of the data that follows each integer marker.
_INT_FORMATS: dict[MarkerKind, str] = {
    MarkerKind.U8: "B",
    MarkerKind.U16: "H",
    MarkerKind.U32: "I",
    MarkerKind.U64: "Q",
    MarkerKind.I8: "b",
    MarkerKind.I16: "h",
    MarkerKind.I32: "i",
    MarkerKind.I64: "q",
}


def read_marker(rd: Reader) -> Marker:
    """Read one byte and interpret it as a marker.

    Raises :class:`MarkerReadError` if the byte cannot be read.
    """
    try:
        (byte,) = read_exact(rd, 1)
    except (OSError, EOFError) as exc:
        raise MarkerReadError(exc) from exc
    return Marker.from_byte(byte)


def _read_typed(rd: Reader, kind: MarkerKind, fmt: str) -> Any:
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    return read_data(rd, fmt)


def read_nil(rd: Reader) -> None:
    """Read a nil value (``0xc0``)."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.NULL:
        raise TypeMismatchError(marker)


def read_bool(rd: Reader) -> bool:
    """Read a boolean value."""
    marker = read_marker(rd)
    if marker.kind is MarkerKind.TRUE:
        return True
    if marker.kind is MarkerKind.FALSE:
        return False
    raise TypeMismatchError(marker)


def read_int(rd: Reader) -> int:
    """Read an integer in any of its MessagePack representations."""
    marker = read_marker(rd)
    if marker.kind in (MarkerKind.FIX_POS, MarkerKind.FIX_NEG):
        return marker.value
    fmt = _INT_FORMATS.get(marker.kind)
    if fmt is None:
        raise TypeMismatchError(marker)
    return read_data(rd, fmt)


def read_array_len(rd: Reader) -> int:
    """Read the length header of an array."""
    marker = read_marker(rd)
    if marker.kind is MarkerKind.FIX_ARRAY:
        return marker.value
    if marker.kind is MarkerKind.ARRAY16:
        return read_data(rd, "H")
    if marker.kind is MarkerKind.ARRAY32:
        return read_data(rd, "I")
    raise TypeMismatchError(marker)


def read_map_len(rd: Reader) -> int:
    """Read the length header of a map."""
    return marker_to_len(rd, read_marker(rd))


def marker_to_len(rd: Reader, marker: Marker) -> int:
    """Finish reading a map length whose marker was already read."""
    if marker.kind is MarkerKind.FIX_MAP:
        return marker.value
    if marker.kind is MarkerKind.MAP16:
        return read_data(rd, "H")
    if marker.kind is MarkerKind.MAP32:
        return read_data(rd, "I")
    raise TypeMismatchError(marker)


def read_bin_len(rd: Reader) -> int:
    """Read the length header of a binary value."""
    marker = read_marker(rd)
    if marker.kind is MarkerKind.BIN8:
        return read_data(rd, "B")
    if marker.kind is MarkerKind.BIN16:
        return read_data(rd, "H")
    if marker.kind is MarkerKind.BIN32:
        return read_data(rd, "I")
    raise TypeMismatchError(marker)


def read_pfix(rd: Reader) -> int:
    """Read a positive fixint."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.FIX_POS:
        raise TypeMismatchError(marker)
    return marker.value


def read_u8(rd: Reader) -> int:
    """Read a value encoded strictly as uint 8."""
    return _read_typed(rd, MarkerKind.U8, "B")


def read_u16(rd: Reader) -> int:
    """Read a value encoded strictly as uint 16."""
    return _read_typed(rd, MarkerKind.U16, "H")


def read_u32(rd: Reader) -> int:
    """Read a value encoded strictly as uint 32."""
    return _read_typed(rd, MarkerKind.U32, "I")


def read_u64(rd: Reader) -> int:
    """Read a value encoded strictly as uint 64."""
    return _read_typed(rd, MarkerKind.U64, "Q")


def read_nfix(rd: Reader) -> int:
    """Read a negative fixint."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.FIX_NEG:
        raise TypeMismatchError(marker)
    return marker.value


def read_i8(rd: Reader) -> int:
    """Read a value encoded strictly as int 8."""
    return _read_typed(rd, MarkerKind.I8, "b")


def read_i16(rd: Reader) -> int:
    """Read a value encoded strictly as int 16."""
    return _read_typed(rd, MarkerKind.I16, "h")


def read_i32(rd: Reader) -> int:
    """Read a value encoded strictly as int 32."""
    return _read_typed(rd, MarkerKind.I32, "i")


def read_i64(rd: Reader) -> int:
    """Read a value encoded strictly as int 64."""
    return _read_typed(rd, MarkerKind.I64, "q")


def read_f32(rd: Reader) -> float:
    """Read a single-precision float."""
    return _read_typed(rd, MarkerKind.F32, "f")


def read_f64(rd: Reader) -> float:
    """Read a double-precision float."""
    return _read_typed(rd, MarkerKind.F64, "d")