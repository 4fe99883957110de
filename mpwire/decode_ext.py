"""Reading MessagePack extension values and their headers."""

from __future__ import annotations

from dataclasses import dataclass

from mpwire.decode import read_marker
from mpwire.errors import TypeMismatchError
from mpwire.marker import MarkerKind
from mpwire.streams import Reader, read_data

__all__ = [
    "ExtMeta",
    "read_fixext1",
    "read_fixext2",
    "read_fixext4",
    "read_fixext8",
    "read_fixext16",
    "read_ext_meta",
]

_FIXED_SIZES: dict[MarkerKind, int] = {
    MarkerKind.FIX_EXT1: 1,
    MarkerKind.FIX_EXT2: 2,
    MarkerKind.FIX_EXT4: 4,
    MarkerKind.FIX_EXT8: 8,
    MarkerKind.FIX_EXT16: 16,
}

_LENGTH_FORMATS: dict[MarkerKind, str] = {
    MarkerKind.EXT8: "B",
    MarkerKind.EXT16: "H",
    MarkerKind.EXT32: "I",
}


@dataclass(frozen=True)
class ExtMeta:
    """Header of an extension value.

    ``typeid`` is the application-defined type (0 to 127; negative values
    are reserved by the format) and ``size`` the length of the payload.
    """

    typeid: int
    size: int


def _read_fixext(rd: Reader, kind: MarkerKind) -> tuple[int, bytes]:
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    typeid = read_data(rd, "b")
    data = read_data(rd, f"{_FIXED_SIZES[kind]}s")
    return typeid, data


def read_fixext1(rd: Reader) -> tuple[int, int]:
    """Read a fixext 1 value, returning its type and its single data byte."""
    typeid, data = _read_fixext(rd, MarkerKind.FIX_EXT1)
    return typeid, data[0]


def read_fixext2(rd: Reader) -> tuple[int, bytes]:
    """Read a fixext 2 value, returning its type and 2 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT2)


def read_fixext4(rd: Reader) -> tuple[int, bytes]:
    """Read a fixext 4 value, returning its type and 4 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT4)


def read_fixext8(rd: Reader) -> tuple[int, bytes]:
    """Read a fixext 8 value, returning its type and 8 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT8)


def read_fixext16(rd: Reader) -> tuple[int, bytes]:
    """Read a fixext 16 value, returning its type and 16 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT16)


def read_ext_meta(rd: Reader) -> ExtMeta:
    """Read the header of any extension value, leaving its payload unread."""
    marker = read_marker(rd)
    size = _FIXED_SIZES.get(marker.kind)
    if size is None:
        fmt = _LENGTH_FORMATS.get(marker.kind)
        if fmt is None:
            raise TypeMismatchError(marker)
        size = read_data(rd, fmt)
    typeid = read_data(rd, "b")
    return ExtMeta(typeid=typeid, size=size)