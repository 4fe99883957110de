"""Byte sources and sinks for reading and writing MessagePack data.

Readers are objects with a ``read(size)`` method (any binary file object
works, as does :class:`Bytes`). Writers are objects with a ``write(data)``
method (any binary file object, :class:`ByteBuf` or :class:`FixedBuffer`).
"""

from __future__ import annotations

import struct
from typing import Any, Protocol

from mpwire.errors import (
    BufferOverflowError,
    DataReadError,
    DataWriteError,
    InsufficientBytesError,
)


class Reader(Protocol):
    def read(self, size: int = -1, /) -> bytes | None: ...


class Writer(Protocol):
    def write(self, data: bytes, /) -> int | None: ...


class Bytes:
    """A reader over an in-memory byte string that tracks its position."""

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    @property
    def remaining(self) -> bytes:
        """The bytes not yet consumed."""
        return self._data[self._offset:]

    def tell(self) -> int:
        return self._offset

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes; all remaining bytes if ``size`` is negative."""
        end = len(self._data) if size < 0 else min(len(self._data), self._offset + size)
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes, consuming nothing if too few remain."""
        available = len(self._data) - self._offset
        if size > available:
            raise InsufficientBytesError(size, available, self._offset)
        return self.read(size)

    def __len__(self) -> int:
        return len(self._data) - self._offset

    def __repr__(self) -> str:
        return f"Bytes(position={self._offset}, remaining={self.remaining!r})"


class ByteBuf:
    """A growable in-memory writer whose writes never fail."""

    __slots__ = ("_buf",)

    def __init__(self, data: bytes | bytearray = b"") -> None:
        self._buf = bytearray(data)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Append ``data`` and return the number of bytes written."""
        self._buf += data
        return len(data)

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buf)

    def __bytes__(self) -> bytes:
        return self.getvalue()

    def __len__(self) -> int:
        return len(self._buf)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteBuf):
            return self._buf == other._buf
        return NotImplemented

    def __repr__(self) -> str:
        return f"ByteBuf({bytes(self._buf)!r})"


class FixedBuffer:
    """A writer into a buffer of fixed capacity.

    A write that does not fit raises :class:`BufferOverflowError` and
    leaves the buffer unchanged.
    """

    __slots__ = ("buffer", "_offset")

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.buffer = bytearray(capacity)
        self._offset = 0

    @property
    def remaining(self) -> int:
        """Room left, in bytes."""
        return len(self.buffer) - self._offset

    @property
    def written(self) -> bytes:
        """The bytes written so far."""
        return bytes(self.buffer[: self._offset])

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Copy ``data`` into the buffer and return the number of bytes written."""
        size = len(data)
        if size > self.remaining:
            raise BufferOverflowError()
        self.buffer[self._offset : self._offset + size] = data
        self._offset += size
        return size

    def __bytes__(self) -> bytes:
        return bytes(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def __repr__(self) -> str:
        return f"FixedBuffer({bytes(self.buffer)!r}, written={self._offset})"


def _position_of(rd: Any) -> int:
    tell = getattr(rd, "tell", None)
    if tell is None:
        return 0
    try:
        return int(tell())
    except (OSError, ValueError):
        return 0


def read_exact(rd: Reader, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``rd``.

    Interrupted reads are retried. Running out of input raises
    :class:`InsufficientBytesError`; other I/O errors propagate unchanged.
    """
    if isinstance(rd, Bytes):
        return rd.read_exact(size)
    chunks = bytearray()
    while len(chunks) < size:
        try:
            chunk = rd.read(size - len(chunks))
        except InterruptedError:
            continue
        if chunk is None:
            raise BlockingIOError("reader has no data available")
        if not chunk:
            raise InsufficientBytesError(size, len(chunks), _position_of(rd))
        chunks += chunk
    return bytes(chunks)


def _normalize(fmt: str) -> str:
    return fmt if fmt[:1] in ("<", ">", "!", "=", "@") else ">" + fmt


def read_data(rd: Reader, fmt: str) -> Any:
    """Read one big-endian value described by the :mod:`struct` code ``fmt``.

    Any failure to read raises :class:`DataReadError` wrapping the cause.
    """
    layout = struct.Struct(_normalize(fmt))
    try:
        raw = read_exact(rd, layout.size)
    except (OSError, EOFError) as exc:
        raise DataReadError(exc) from exc
    (value,) = layout.unpack(raw)
    return value


def write_bytes(wr: Writer, data: bytes | bytearray | memoryview) -> None:
    """Write all of ``data`` to ``wr``, retrying interrupted and partial writes."""
    view = memoryview(bytes(data))
    while view:
        try:
            written = wr.write(view)
        except InterruptedError:
            continue
        if written is None:
            return
        if written == 0:
            raise OSError("failed to write whole buffer")
        view = view[written:]


def write_data(wr: Writer, fmt: str, value: Any) -> None:
    """Write ``value`` big-endian as described by the :mod:`struct` code ``fmt``.

    Any failure to write raises :class:`DataWriteError` wrapping the cause.
    """
    try:
        raw = struct.pack(_normalize(fmt), value)
    except struct.error as exc:
        raise ValueError(f"value {value!r} does not fit format {fmt!r}") from exc
    try:
        write_bytes(wr, raw)
    except (OSError, BufferOverflowError) as exc:
        raise DataWriteError(exc) from exc