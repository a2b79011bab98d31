"""Forward-only byte cursor used by the decoder.

The cursor never seeks backwards.  Every read either returns exactly the
number of bytes requested or raises :class:`TruncatedInputError`.
"""

import struct

from ._types import ByteSource
from .errors import TruncatedInputError

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")


class ByteCursor:
    """Sequential reader over ``bytes``-like data or a binary file object.

    Args:
        source: A ``bytes``, ``bytearray`` or ``memoryview`` buffer, or any
            object with a ``read(n)`` method returning bytes.  File objects
            are read from their current position and are never closed.
    """

    def __init__(self, source: ByteSource) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._buffer: bytes | None = bytes(source)
            self._stream = None
        elif hasattr(source, "read"):
            self._buffer = None
            self._stream = source
        else:
            raise TypeError(
                f"Expected bytes-like object or binary stream, got {type(source).__name__}"
            )
        self._pending = b""
        self.offset = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(offset={self.offset})"

    # -- raw access ---------------------------------------------------------
    def _pull(self, n: int) -> bytes:
        """Return up to *n* bytes without raising on a short read."""
        if self._buffer is not None:
            chunk = self._buffer[self.offset : self.offset + n]
        else:
            chunk = self._pending[:n]
            self._pending = self._pending[n:]
            while len(chunk) < n:
                more = self._stream.read(n - len(chunk))
                if not more:
                    break
                chunk += more
        self.offset += len(chunk)
        return chunk

    def read(self, n: int) -> bytes:
        """Return exactly *n* bytes."""
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bytes ({n})")
        start = self.offset
        chunk = self._pull(n)
        if len(chunk) != n:
            raise TruncatedInputError(start, n, len(chunk))
        return chunk

    def read_cstring(self) -> bytes:
        """Read a NUL-terminated byte string and return it without the NUL.

        The terminator must be present; running out of input first raises
        :class:`TruncatedInputError`.
        """
        start = self.offset
        if self._buffer is not None:
            end = self._buffer.find(b"\x00", start)
            if end < 0:
                available = len(self._buffer) - start
                self.offset = len(self._buffer)
                raise TruncatedInputError(start, available + 1, available)
            value = self._buffer[start:end]
            self.offset = end + 1
        else:
            out = bytearray()
            while True:
                byte = self._pull(1)
                if not byte:
                    raise TruncatedInputError(start, len(out) + 1, len(out))
                if byte == b"\x00":
                    break
                out += byte
            value = bytes(out)
        return value.rstrip(b"\x00")

    def at_eof(self) -> bool:
        """True if no further byte can be read."""
        if self._buffer is not None:
            return self.offset >= len(self._buffer)
        if self._pending:
            return False
        self._pending = self._stream.read(1) or b""
        return not self._pending

    # -- typed little-endian reads ------------------------------------------
    def u8(self) -> int:
        return _U8.unpack(self.read(1))[0]

    def u16(self) -> int:
        return _U16.unpack(self.read(2))[0]

    def u32(self) -> int:
        return _U32.unpack(self.read(4))[0]

    def i32(self) -> int:
        return _I32.unpack(self.read(4))[0]

    def u64(self) -> int:
        return _U64.unpack(self.read(8))[0]

    def section(self, declared_size: int, consumed: int = 0) -> "Section":
        """Open a :class:`Section` window over the following bytes."""
        return Section(self, declared_size, consumed)


class Section:
    """Bookkeeping for a structure whose own size field gates later fields.

    Tracks how many bytes of the structure have been consumed against the
    size it declared.  :meth:`u32_if_declared` reads a field only while the
    declared size still covers it, so size thresholds such as "present if
    LinkInfoHeaderSize > 28" fall out of the byte count instead of being
    compared by hand.
    """

    def __init__(self, cursor: ByteCursor, declared_size: int, consumed: int = 0) -> None:
        self.cursor = cursor
        self.declared_size = declared_size
        self.consumed = consumed

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(declared_size={self.declared_size}, "
            f"consumed={self.consumed})"
        )

    def u32(self) -> int:
        value = self.cursor.u32()
        self.consumed += 4
        return value

    def u32_if_declared(self) -> int | None:
        """Read a u32 if the declared size extends past what was consumed."""
        if self.consumed < self.declared_size:
            return self.u32()
        return None
