# mpwire

Low-level MessagePack building blocks. Each function reads or writes exactly one
wire-format element (a marker, a scalar, a string, a binary, or the header of an
array, map or extension), so you decide which representation is used and how
values are laid out. Failures are raised as specific exceptions.

## Installation

```
pip install mpwire
```

## Writing

Writers accept any object with a `write(bytes)` method, such as `io.BytesIO`,
`mpwire.streams.ByteBuf` (growable, never fails) or
`mpwire.streams.FixedBuffer` (fixed capacity; a write that does not fit raises
`BufferOverflowError` and leaves the buffer unchanged).

```python
from mpwire.streams import ByteBuf
from mpwire.encode import write_bool, write_str, write_array_len
from mpwire.encode_int import write_uint, write_sint, write_u16

buf = ByteBuf()
write_bool(buf, True)           # c3
write_sint(buf, 300)            # cd 01 2c  (most compact form)
write_u16(buf, 42)              # cd 00 2a  (exact form requested)
write_array_len(buf, 2)         # 92
write_str(buf, "hi")            # a2 68 69
print(buf.getvalue().hex())
```

Module `mpwire.encode_int`:

- `write_uint` and `write_sint` pick the smallest encoding and return the
  `Marker` they used. Non-negative values always use the unsigned formats.
- `write_pfix`, `write_nfix`, `write_u8` ... `write_u64`, `write_i8` ...
  `write_i64` always use the form you ask for and raise `ValueError` for a
  value outside its range.

Module `mpwire.encode`:

- `write_marker`, `write_nil`, `write_bool`
- `write_array_len`, `write_map_len`, `write_bin_len`, `write_str_len` and
  `write_ext_meta` write the most compact header and return its marker;
  lengths must fit in 32 bits.
- `write_bin`, `write_str` write a header followed by the payload.
- `write_f32`, `write_f64`.

## Reading

Readers accept any object with a `read(size)` method, such as `io.BytesIO` or
`mpwire.streams.Bytes`. `Bytes` tracks its `position` and exposes the
`remaining` bytes. Interrupted reads are retried.

```python
from mpwire.streams import Bytes
from mpwire.decode import read_int, read_u16
from mpwire.decode_str import read_str_from_slice

rd = Bytes(bytes([0xcd, 0x01, 0x2c]))
assert read_int(rd) == 300
assert rd.position == 3

text, rest = read_str_from_slice(bytes([0xa2, 0x68, 0x69, 0x00]))
assert text == "hi" and rest == b"\x00"
```

- `mpwire.decode`: `read_marker`, `read_nil`, `read_bool`, `read_int`,
  `read_pfix`, `read_nfix`, `read_u8` ... `read_u64`, `read_i8` ...
  `read_i64`, `read_f32`, `read_f64`, `read_array_len`, `read_map_len`,
  `marker_to_len`, `read_bin_len`.
- `mpwire.decode_ext`: `read_fixext1` ... `read_fixext16` return
  `(typeid, data)`; `read_ext_meta` returns an `ExtMeta(typeid, size)` and
  leaves the payload unread.
- `mpwire.decode_str`: `read_str_len`, `read_str(rd, limit)`,
  `read_str_data(rd, length)`, `read_str_ref(data)` (raw bytes, not checked
  for UTF-8) and `read_str_from_slice(data)`.

The strict readers (`read_u16`, `read_f64`, ...) raise `TypeMismatchError`,
carrying the marker they found, when the value uses a different encoding.
`read_int` accepts any integer encoding.

## Errors

All exceptions in `mpwire.errors` derive from `MessagePackError`:

- `MarkerReadError`, `DataReadError`, `TypeMismatchError` (all
  `ValueReadError`) when reading; the underlying I/O error is kept in `error`
  and as the cause.
- `InsufficientBytesError` when an in-memory reader runs out of bytes.
- `BufferSizeTooSmallError`, `InvalidUtf8Error` (both `DecodeStringError`)
  for strings.
- `MarkerWriteError`, `DataWriteError` (both `ValueWriteError`) when writing.
  `write_nil`, `write_bool`, `write_pfix` and `write_nfix` let the writer's
  own error through unchanged.
- `BufferOverflowError` from `FixedBuffer`.
- `OutOfRangeError` is defined for callers that need it; no reader raises it,
  since Python integers have no fixed width.

## Markers

`mpwire.marker.Marker` models every format byte as a `MarkerKind` plus, for the
fix kinds, the value packed into the byte: `Marker.from_byte(0xc0)` gives the
nil marker, `Marker.from_byte(0x93)` a fixarray of length 3, and `to_byte()`
converts back. `MSGPACK_VERSION` names the specification version implemented.

## What this package does not do

There is no whole-value serializer: nothing here turns a nested Python object
into bytes or back in one call. Arrays, maps and extensions are handled by
their headers only; writing or reading their elements is up to you.