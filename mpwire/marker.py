"""MessagePack format markers: the first byte of every encoded value."""

from __future__ import annotations

import enum
from dataclasses import dataclass

MSGPACK_VERSION = 5
"""Version of the MessagePack specification implemented here."""

_FIXSTR_SIZE = 0x1F
_FIXARRAY_SIZE = 0x0F
_FIXMAP_SIZE = 0x0F


class MarkerKind(enum.Enum):
    """The family of a MessagePack marker byte."""

    FIX_POS = "FixPos"
    FIX_NEG = "FixNeg"
    NULL = "Null"
    TRUE = "True"
    FALSE = "False"
    U8 = "U8"
    U16 = "U16"
    U32 = "U32"
    U64 = "U64"
    I8 = "I8"
    I16 = "I16"
    I32 = "I32"
    I64 = "I64"
    F32 = "F32"
    F64 = "F64"
    FIX_STR = "FixStr"
    STR8 = "Str8"
    STR16 = "Str16"
    STR32 = "Str32"
    BIN8 = "Bin8"
    BIN16 = "Bin16"
    BIN32 = "Bin32"
    FIX_ARRAY = "FixArray"
    ARRAY16 = "Array16"
    ARRAY32 = "Array32"
    FIX_MAP = "FixMap"
    MAP16 = "Map16"
    MAP32 = "Map32"
    FIX_EXT1 = "FixExt1"
    FIX_EXT2 = "FixExt2"
    FIX_EXT4 = "FixExt4"
    FIX_EXT8 = "FixExt8"
    FIX_EXT16 = "FixExt16"
    EXT8 = "Ext8"
    EXT16 = "Ext16"
    EXT32 = "Ext32"
    RESERVED = "Reserved"

    @property
    def has_payload(self) -> bool:
        """Whether markers of this kind carry a value inside the byte."""
        return self in _PAYLOAD_KINDS


_PAYLOAD_KINDS = frozenset(
    {
        MarkerKind.FIX_POS,
        MarkerKind.FIX_NEG,
        MarkerKind.FIX_STR,
        MarkerKind.FIX_ARRAY,
        MarkerKind.FIX_MAP,
    }
)

_FIXED_BYTES: dict[MarkerKind, int] = {
    MarkerKind.NULL: 0xC0,
    MarkerKind.RESERVED: 0xC1,
    MarkerKind.FALSE: 0xC2,
    MarkerKind.TRUE: 0xC3,
    MarkerKind.BIN8: 0xC4,
    MarkerKind.BIN16: 0xC5,
    MarkerKind.BIN32: 0xC6,
    MarkerKind.EXT8: 0xC7,
    MarkerKind.EXT16: 0xC8,
    MarkerKind.EXT32: 0xC9,
    MarkerKind.F32: 0xCA,
    MarkerKind.F64: 0xCB,
    MarkerKind.U8: 0xCC,
    MarkerKind.U16: 0xCD,
    MarkerKind.U32: 0xCE,
    MarkerKind.U64: 0xCF,
    MarkerKind.I8: 0xD0,
    MarkerKind.I16: 0xD1,
    MarkerKind.I32: 0xD2,
    MarkerKind.I64: 0xD3,
    MarkerKind.FIX_EXT1: 0xD4,
    MarkerKind.FIX_EXT2: 0xD5,
    MarkerKind.FIX_EXT4: 0xD6,
    MarkerKind.FIX_EXT8: 0xD7,
    MarkerKind.FIX_EXT16: 0xD8,
    MarkerKind.STR8: 0xD9,
    MarkerKind.STR16: 0xDA,
    MarkerKind.STR32: 0xDB,
    MarkerKind.ARRAY16: 0xDC,
    MarkerKind.ARRAY32: 0xDD,
    MarkerKind.MAP16: 0xDE,
    MarkerKind.MAP32: 0xDF,
}

_KIND_BY_BYTE: dict[int, MarkerKind] = {byte: kind for kind, byte in _FIXED_BYTES.items()}


@dataclass(frozen=True)
class Marker:
    """A decoded marker byte.

    ``value`` holds the number packed into the byte for the fix kinds
    (the integer of a fixint, or the length of a fixstr, fixarray or
    fixmap) and is 0 for every other kind.
    """

    kind: MarkerKind
    value: int = 0

    def __post_init__(self) -> None:
        if not self.kind.has_payload and self.value != 0:
            raise ValueError(f"marker {self.kind.value} carries no value")

    @classmethod
    def from_byte(cls, byte: int) -> Marker:
        """Interpret a single byte as a marker."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"marker byte out of range: {byte}")
        if byte <= 0x7F:
            return cls(MarkerKind.FIX_POS, byte)
        if byte >= 0xE0:
            return cls(MarkerKind.FIX_NEG, byte - 0x100)
        if byte <= 0x8F:
            return cls(MarkerKind.FIX_MAP, byte & _FIXMAP_SIZE)
        if byte <= 0x9F:
            return cls(MarkerKind.FIX_ARRAY, byte & _FIXARRAY_SIZE)
        if byte <= 0xBF:
            return cls(MarkerKind.FIX_STR, byte & _FIXSTR_SIZE)
        return cls(_KIND_BY_BYTE[byte])

    def to_byte(self) -> int:
        """Return the single-byte representation of this marker."""
        kind = self.kind
        if kind in (MarkerKind.FIX_POS, MarkerKind.FIX_NEG):
            return self.value & 0xFF
        if kind is MarkerKind.FIX_STR:
            return 0xA0 | (self.value & _FIXSTR_SIZE)
        if kind is MarkerKind.FIX_ARRAY:
            return 0x90 | (self.value & _FIXARRAY_SIZE)
        if kind is MarkerKind.FIX_MAP:
            return 0x80 | (self.value & _FIXMAP_SIZE)
        return _FIXED_BYTES[kind]

    def __int__(self) -> int:
        return self.to_byte()

    def __repr__(self) -> str:
        if self.kind.has_payload:
            return f"Marker.{self.kind.value}({self.value})"
        return f"Marker.{self.kind.value}"