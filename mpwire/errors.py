"""Exceptions raised while reading or writing MessagePack data."""

from __future__ import annotations

from mpwire.marker import Marker


class MessagePackError(Exception):
    """Base class of every error raised by this package."""


class InsufficientBytesError(MessagePackError, EOFError):
    """An in-memory reader ran out of bytes."""

    def __init__(self, expected: int, actual: int, position: int) -> None:
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(
            f"Expected at least bytes {expected}, but only got {actual} (pos {position})"
        )


class BufferOverflowError(MessagePackError):
    """A fixed-capacity buffer has no room left for the bytes being written."""

    def __init__(self) -> None:
        super().__init__("Capacity overflow for fixed-size byte buffer")


class _Wrapping:
    """Mixin holding the underlying I/O error, also exposed as the cause."""

    error: BaseException | None

    def _wrap(self, error: BaseException | None) -> None:
        self.error = error
        if error is not None:
            self.__cause__ = error


class ValueReadError(MessagePackError):
    """A MessagePack value could not be read."""

    message = "failed to read MessagePack value"

    def __init__(self, *args: object) -> None:
        super().__init__(*(args or (self.message,)))


class MarkerReadError(_Wrapping, ValueReadError):
    """The marker byte could not be read."""

    message = "failed to read MessagePack marker"

    def __init__(self, error: BaseException | None = None) -> None:
        super().__init__(self.message)
        self._wrap(error)


class DataReadError(_Wrapping, ValueReadError):
    """The data following a marker could not be read."""

    message = "failed to read MessagePack data"

    def __init__(self, error: BaseException | None = None) -> None:
        super().__init__(self.message)
        self._wrap(error)


class TypeMismatchError(ValueReadError):
    """The marker read is not of the expected type."""

    message = "the type decoded isn't match with the expected one"

    def __init__(self, marker: Marker) -> None:
        super().__init__(self.message)
        self.marker = marker


class OutOfRangeError(ValueReadError):
    """An integer does not fit in the requested range."""

    message = "out of range integral type conversion attempted"

    def __init__(self) -> None:
        super().__init__(self.message)


class DecodeStringError(MessagePackError):
    """A string value could not be decoded."""

    message = "error while decoding string"

    def __init__(self, *args: object) -> None:
        super().__init__(*(args or (self.message,)))


class BufferSizeTooSmallError(DecodeStringError):
    """The space available is smaller than the string's declared length."""

    def __init__(self, length: int) -> None:
        super().__init__(self.message)
        self.length = length


class InvalidUtf8Error(DecodeStringError):
    """The string's bytes are not valid UTF-8."""

    def __init__(self, data: bytes, error: UnicodeDecodeError) -> None:
        super().__init__(self.message)
        self.data = bytes(data)
        self.error = error
        self.valid_up_to = error.start
        self.__cause__ = error


class ValueWriteError(_Wrapping, MessagePackError):
    """A multi-byte MessagePack value could not be written."""

    message = "error while writing multi-byte MessagePack value"

    def __init__(self, error: BaseException | None = None) -> None:
        super().__init__(self.message)
        self._wrap(error)


class MarkerWriteError(ValueWriteError):
    """The marker byte could not be written."""


class DataWriteError(ValueWriteError):
    """The data following a marker could not be written."""