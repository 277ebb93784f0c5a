"""
Forward-only read cursor over an immutable byte buffer.

The cursor keeps a running lower bound on the buffer size. Each
length-prefixed or terminated field grows the bound with ``require`` before
its content is read, so a truncated buffer is rejected before any read can
run past its end.
"""

import struct

from .types import MIN_CONTAINER_SIZE, TooShortError


class ByteCursor:
    """Cursor that only moves forward and never passes the end of ``data``."""

    def __init__(self, data: bytes, required: int = MIN_CONTAINER_SIZE):
        self._data = data
        self._size = len(data)
        self.position = 0
        self.required = required
        self.check()

    @property
    def size(self) -> int:
        return self._size

    @property
    def remaining(self) -> int:
        return self._size - self.position

    def check(self) -> None:
        """Fail if the buffer is shorter than the bound accumulated so far."""
        if self._size < self.required:
            raise TooShortError(
                f"Buffer too short: {self._size} bytes, need at least {self.required}"
            )

    def require(self, count: int) -> None:
        """Grow the required size by ``count`` bytes and check it."""
        self.required += count
        self.check()

    def _advance(self, count: int) -> int:
        start = self.position
        if start + count > self._size:
            raise TooShortError(
                f"Read of {count} bytes at offset {start} runs past end of "
                f"{self._size}-byte buffer"
            )
        self.position = start + count
        return start

    def read(self, count: int) -> bytes:
        start = self._advance(count)
        return self._data[start:self.position]

    def skip(self, count: int) -> None:
        self._advance(count)

    def read_u8(self) -> int:
        return self._data[self._advance(1)]

    def read_u16le(self) -> int:
        return struct.unpack_from("<H", self._data, self._advance(2))[0]

    def read_i32le(self) -> int:
        return struct.unpack_from("<i", self._data, self._advance(4))[0]

    def read_u32le(self) -> int:
        return struct.unpack_from("<I", self._data, self._advance(4))[0]

    def find(self, value: int) -> int:
        """
        Return the distance from the cursor to the first byte equal to
        ``value``, or -1 if it does not occur in the rest of the buffer.
        """
        index = self._data.find(bytes((value,)), self.position)
        if index < 0:
            return -1
        return index - self.position

    def consumed(self) -> bytes:
        """Return every byte before the cursor."""
        return self._data[:self.position]
