"""Writing MessagePack markers, scalars, strings, binaries and container headers."""

from __future__ import annotations

from mpwire.errors import BufferOverflowError, DataWriteError, MarkerWriteError
from mpwire.marker import Marker, MarkerKind
from mpwire.streams import Writer, write_bytes, write_data

__all__ = [
    "write_marker",
    "write_nil",
    "write_bool",
    "write_array_len",
    "write_map_len",
    "write_ext_meta",
    "write_bin_len",
    "write_bin",
    "write_str_len",
    "write_str",
    "write_f32",
    "write_f64",
]

_U32_MAX = 0xFFFFFFFF

_FIXEXT_KINDS: dict[int, MarkerKind] = {
    1: MarkerKind.FIX_EXT1,
    2: MarkerKind.FIX_EXT2,
    4: MarkerKind.FIX_EXT4,
    8: MarkerKind.FIX_EXT8,
    16: MarkerKind.FIX_EXT16,
}


def _check_length(length: int) -> None:
    if not 0 <= length <= _U32_MAX:
        raise ValueError(f"length {length} does not fit in 32 bits")


def _emit(wr: Writer, marker: Marker) -> None:
    write_bytes(wr, bytes((marker.to_byte(),)))


def write_marker(wr: Writer, marker: Marker) -> None:
    """Write a single marker byte.

    Any failure of the writer is raised as :class:`MarkerWriteError`.
    """
    try:
        _emit(wr, marker)
    except (OSError, BufferOverflowError) as exc:
        raise MarkerWriteError(exc) from exc


def write_nil(wr: Writer) -> None:
    """Write a nil value (``0xc0``); errors of the writer propagate unchanged."""
    _emit(wr, Marker(MarkerKind.NULL))


def write_bool(wr: Writer, val: bool) -> None:
    """Write a boolean value; errors of the writer propagate unchanged."""
    _emit(wr, Marker(MarkerKind.TRUE if val else MarkerKind.FALSE))


def _write_len(
    wr: Writer,
    length: int,
    fix_kind: MarkerKind,
    kind16: MarkerKind,
    kind32: MarkerKind,
) -> Marker:
    _check_length(length)
    if length < 16:
        marker = Marker(fix_kind, length)
        write_marker(wr, marker)
        return marker
    if length <= 0xFFFF:
        write_marker(wr, Marker(kind16))
        write_data(wr, "H", length)
        return Marker(kind16)
    write_marker(wr, Marker(kind32))
    write_data(wr, "I", length)
    return Marker(kind32)


def write_array_len(wr: Writer, length: int) -> Marker:
    """Write the most compact array header for ``length`` and return its marker."""
    return _write_len(wr, length, MarkerKind.FIX_ARRAY, MarkerKind.ARRAY16, MarkerKind.ARRAY32)


def write_map_len(wr: Writer, length: int) -> Marker:
    """Write the most compact map header for ``length`` and return its marker."""
    return _write_len(wr, length, MarkerKind.FIX_MAP, MarkerKind.MAP16, MarkerKind.MAP32)


def write_ext_meta(wr: Writer, length: int, typeid: int) -> Marker:
    """Write the most compact extension header and return its marker.

    ``typeid`` must fit in a signed byte; the payload is left to the caller.
    """
    _check_length(length)
    if not -0x80 <= typeid <= 0x7F:
        raise ValueError(f"extension type {typeid} does not fit in a signed byte")
    fixed = _FIXEXT_KINDS.get(length)
    if fixed is not None:
        marker = Marker(fixed)
        write_marker(wr, marker)
    elif length < 0x100:
        marker = Marker(MarkerKind.EXT8)
        write_marker(wr, marker)
        write_data(wr, "B", length)
    elif length < 0x10000:
        marker = Marker(MarkerKind.EXT16)
        write_marker(wr, marker)
        write_data(wr, "H", length)
    else:
        marker = Marker(MarkerKind.EXT32)
        write_marker(wr, marker)
        write_data(wr, "I", length)
    write_data(wr, "b", typeid)
    return marker


def write_bin_len(wr: Writer, length: int) -> Marker:
    """Write the most compact binary header for ``length`` and return its marker."""
    _check_length(length)
    if length < 0x100:
        kind, fmt = MarkerKind.BIN8, "B"
    elif length <= 0xFFFF:
        kind, fmt = MarkerKind.BIN16, "H"
    else:
        kind, fmt = MarkerKind.BIN32, "I"
    write_marker(wr, Marker(kind))
    write_data(wr, fmt, length)
    return Marker(kind)


def _write_payload(wr: Writer, data: bytes) -> None:
    try:
        write_bytes(wr, data)
    except (OSError, BufferOverflowError) as exc:
        raise DataWriteError(exc) from exc


def write_bin(wr: Writer, data: bytes | bytearray | memoryview) -> None:
    """Write ``data`` as a binary value in its most compact form."""
    raw = bytes(data)
    write_bin_len(wr, len(raw))
    _write_payload(wr, raw)


def write_str_len(wr: Writer, length: int) -> Marker:
    """Write the most compact string header for ``length`` and return its marker."""
    _check_length(length)
    if length < 32:
        marker = Marker(MarkerKind.FIX_STR, length)
        write_marker(wr, marker)
        return marker
    if length < 0x100:
        kind, fmt = MarkerKind.STR8, "B"
    elif length <= 0xFFFF:
        kind, fmt = MarkerKind.STR16, "H"
    else:
        kind, fmt = MarkerKind.STR32, "I"
    write_marker(wr, Marker(kind))
    write_data(wr, fmt, length)
    return Marker(kind)


def write_str(wr: Writer, data: str) -> None:
    """Write ``data`` as a UTF-8 string value in its most compact form."""
    raw = data.encode("utf-8")
    write_str_len(wr, len(raw))
    _write_payload(wr, raw)


def write_f32(wr: Writer, val: float) -> None:
    """Write ``val`` as a single-precision float (5 bytes)."""
    write_marker(wr, Marker(MarkerKind.F32))
    write_data(wr, "f", val)


def write_f64(wr: Writer, val: float) -> None:
    """Write ``val`` as a double-precision float (9 bytes)."""
    write_marker(wr, Marker(MarkerKind.F64))
    write_data(wr, "d", val)