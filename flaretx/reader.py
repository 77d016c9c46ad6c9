"""A bounds-checked big-endian cursor over a transaction buffer."""

from __future__ import annotations

from .errors import ParseError, ParserError


class Reader:
    """Reads big-endian integers and byte runs from a buffer, advancing an offset."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = bytes(data)
        self.offset = offset

    def __len__(self) -> int:
        return len(self.data)

    @property
    def remaining(self) -> int:
        """Number of bytes left after the current offset."""
        return max(len(self.data) - self.offset, 0)

    def require(self, length: int) -> None:
        """Raise unless at least ``length`` bytes remain."""
        if length < 0 or self.offset + length > len(self.data):
            raise ParseError(
                ParserError.UNEXPECTED_BUFFER_END,
                f"need {length} bytes at offset {self.offset}",
            )

    def peek(self, length: int) -> bytes:
        """Return the next ``length`` bytes without advancing."""
        self.require(length)
        return self.data[self.offset : self.offset + length]

    def read_bytes(self, length: int) -> bytes:
        """Return the next ``length`` bytes and advance past them."""
        chunk = self.peek(length)
        self.offset += length
        return chunk

    def skip(self, length: int) -> None:
        """Advance past ``length`` bytes, checking they exist."""
        self.require(length)
        self.offset += length

    def _read_int(self, size: int) -> int:
        return int.from_bytes(self.read_bytes(size), "big")

    def read_u8(self) -> int:
        return self._read_int(1)

    def read_u16(self) -> int:
        return self._read_int(2)

    def read_u32(self) -> int:
        return self._read_int(4)

    def read_u64(self) -> int:
        return self._read_int(8)

    def at_end(self) -> bool:
        """True when every byte of the buffer has been consumed."""
        return self.offset == len(self.data)