"""Byte sources used by the TZif decoder.

The decoder only needs a handful of sequential big endian reads. Those are
described by the `ByteSource` protocol so a file, an in-memory buffer or any
other transport can feed the decoder. `ByteReader` implements the protocol on
top of a binary file object.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Protocol

__all__ = [
    "ByteSource",
    "ByteReader",
]

# struct formats for the supported big endian signed integer widths
_INT_FORMATS = {
    4: ">l",
    8: ">q",
}


class ByteSource(Protocol):
    """Sequential reads required to decode a TZif file.

    Any read that cannot supply the requested number of bytes raises
    `EOFError` (or the transport's own `OSError`).
    """

    def read_exact(self, size: int) -> bytes:
        """Read exactly `size` bytes."""

    def read_u8(self) -> int:
        """Read a single unsigned byte."""

    def read_be_u32(self) -> int:
        """Read a big endian unsigned 32-bit integer."""

    def read_be_i32(self) -> int:
        """Read a big endian signed 32-bit integer."""

    def read_be_int(self, width: int) -> int:
        """Read a big endian signed integer of 4 or 8 bytes."""


class ByteReader:
    """A `ByteSource` reading from a binary file object."""

    def __init__(self, fileobj: BinaryIO) -> None:
        """Initialize ByteReader."""
        self._fileobj = fileobj

    @classmethod
    def from_bytes(cls, content: bytes) -> ByteReader:
        """Create a reader over an in-memory buffer."""
        return cls(io.BytesIO(content))

    def read_exact(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"Negative read size: {size}")
        # Streams may return fewer bytes than requested before the end of data
        data = bytearray()
        while len(data) < size:
            if not (chunk := self._fileobj.read(size - len(data))):
                raise EOFError(
                    f"Unexpected end of data: wanted {size} bytes, got {len(data)}"
                )
            data += chunk
        return bytes(data)

    def read_u8(self) -> int:
        return self.read_exact(1)[0]

    def read_be_u32(self) -> int:
        (value,) = struct.unpack(">L", self.read_exact(4))
        return value

    def read_be_i32(self) -> int:
        (value,) = struct.unpack(">l", self.read_exact(4))
        return value

    def read_be_int(self, width: int) -> int:
        if (fmt := _INT_FORMATS.get(width)) is None:
            raise ValueError(f"Unsupported integer width: {width}")
        (value,) = struct.unpack(fmt, self.read_exact(width))
        return value
