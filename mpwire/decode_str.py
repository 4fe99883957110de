"""Reading MessagePack strings.

Failures to read the marker or data raise the :class:`ValueReadError`
family; problems specific to strings raise :class:`DecodeStringError`.
"""

from __future__ import annotations

from mpwire.decode import read_marker
from mpwire.errors import (
    BufferSizeTooSmallError,
    DataReadError,
    InvalidUtf8Error,
    TypeMismatchError,
)
from mpwire.marker import MarkerKind
from mpwire.streams import Bytes, Reader, read_data, read_exact

__all__ = [
    "read_str_len",
    "read_str",
    "read_str_data",
    "read_str_ref",
    "read_str_from_slice",
]

_LENGTH_FORMATS: dict[MarkerKind, str] = {
    MarkerKind.STR8: "B",
    MarkerKind.STR16: "H",
    MarkerKind.STR32: "I",
}


def read_str_len(rd: Reader) -> int:
    """Read the length header of a string."""
    marker = read_marker(rd)
    if marker.kind is MarkerKind.FIX_STR:
        return marker.value
    fmt = _LENGTH_FORMATS.get(marker.kind)
    if fmt is None:
        raise TypeMismatchError(marker)
    return read_data(rd, fmt)


def _decode_utf8(raw: bytes, reported: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error(reported, exc) from exc


def read_str(rd: Reader, limit: int) -> str:
    """Read a whole string whose encoded length may be at most ``limit`` bytes.

    Raises :class:`BufferSizeTooSmallError` (after reading only the header)
    when the string is longer than ``limit``.
    """
    length = read_str_len(rd)
    if limit < length:
        raise BufferSizeTooSmallError(length)
    return read_str_data(rd, length)


def read_str_data(rd: Reader, length: int) -> str:
    """Read ``length`` bytes of string data, whose header was already read."""
    try:
        raw = read_exact(rd, length)
    except (OSError, EOFError) as exc:
        raise DataReadError(exc) from exc
    return _decode_utf8(raw, raw)


def read_str_ref(data: bytes | bytearray | memoryview) -> bytes:
    """Return the raw bytes of the string at the start of ``data``, unchecked for UTF-8."""
    cur = Bytes(data)
    length = read_str_len(cur)
    remaining = cur.remaining
    if len(remaining) < length:
        raise BufferSizeTooSmallError(length)
    return remaining[:length]


def read_str_from_slice(data: bytes | bytearray | memoryview) -> tuple[str, bytes]:
    """Decode the string at the start of ``data``.

    Returns the string and the bytes that follow it.
    """
    buf = bytes(data)
    cur = Bytes(buf)
    length = read_str_len(cur)
    start = cur.position
    if len(buf) - start < length:
        raise BufferSizeTooSmallError(length)
    end = start + length
    return _decode_utf8(buf[start:end], buf), buf[end:]