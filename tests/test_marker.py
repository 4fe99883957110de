import pytest

from mpwire.marker import Marker, MarkerKind


@pytest.mark.parametrize(
    "byte, expected",
    [
        (0x7F, Marker(MarkerKind.FIX_POS, 127)),
        (0x00, Marker(MarkerKind.FIX_POS, 0)),
        (0xE0, Marker(MarkerKind.FIX_NEG, -32)),
        (0xFF, Marker(MarkerKind.FIX_NEG, -1)),
        (0x9F, Marker(MarkerKind.FIX_ARRAY, 15)),
        (0x8F, Marker(MarkerKind.FIX_MAP, 15)),
        (0xBF, Marker(MarkerKind.FIX_STR, 31)),
        (0xAA, Marker(MarkerKind.FIX_STR, 10)),
        (0xC0, Marker(MarkerKind.NULL)),
        (0xC1, Marker(MarkerKind.RESERVED)),
        (0xC2, Marker(MarkerKind.FALSE)),
        (0xC3, Marker(MarkerKind.TRUE)),
        (0xCD, Marker(MarkerKind.U16)),
        (0xD3, Marker(MarkerKind.I64)),
        (0xCB, Marker(MarkerKind.F64)),
        (0xD8, Marker(MarkerKind.FIX_EXT16)),
        (0xDF, Marker(MarkerKind.MAP32)),
    ],
)
def test_from_byte_known_values(byte, expected):
    assert Marker.from_byte(byte) == expected


@pytest.mark.parametrize("byte", range(256))
def test_every_byte_round_trips(byte):
    marker = Marker.from_byte(byte)
    assert marker.to_byte() == byte
    assert int(marker) == byte


def test_fixed_kinds_are_distinct_bytes():
    bytes_seen = {Marker(kind).to_byte() for kind in MarkerKind if not kind.has_payload}
    fixed_kinds = [kind for kind in MarkerKind if not kind.has_payload]
    assert len(bytes_seen) == len(fixed_kinds)
    assert all(0xC0 <= b <= 0xDF for b in bytes_seen)


def test_length_payload_is_masked():
    assert Marker(MarkerKind.FIX_STR, 31 + 32).to_byte() == 0xBF
    assert Marker(MarkerKind.FIX_ARRAY, 15 + 16).to_byte() == 0x9F
    assert Marker(MarkerKind.FIX_MAP, 15 + 16).to_byte() == 0x8F


@pytest.mark.parametrize("byte", [-1, 256])
def test_from_byte_rejects_out_of_range(byte):
    with pytest.raises(ValueError):
        Marker.from_byte(byte)


def test_payload_on_fixed_kind_rejected():
    with pytest.raises(ValueError):
        Marker(MarkerKind.NULL, 1)


def test_markers_are_hashable_and_comparable():
    markers = {Marker.from_byte(0xC0), Marker(MarkerKind.NULL)}
    assert markers == {Marker(MarkerKind.NULL)}
    assert Marker(MarkerKind.FIX_POS, 1) != Marker(MarkerKind.FIX_POS, 2)