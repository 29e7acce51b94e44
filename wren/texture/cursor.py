# wren/texture/cursor.py
from __future__ import annotations

import struct
from typing import Optional, Union

from wren.errors import OutOfBoundsError

BytesLike = Union[bytes, bytearray, memoryview]

_U32_LE = struct.Struct("<I")
_U32_BE = struct.Struct(">I")


class ByteCursor:
    """
    Sequential reader over a read-only view of a byte buffer.

    Every slice it returns aliases the source buffer; nothing is copied.
    """

    __slots__ = ("_view", "offset")

    def __init__(self, raw: BytesLike, offset: int = 0) -> None:
        view = memoryview(raw)
        if view.ndim != 1 or view.itemsize != 1:
            view = view.cast("B")
        self._view = view.toreadonly()
        self.offset = offset

    def __len__(self) -> int:
        return len(self._view)

    @property
    def remaining(self) -> int:
        return len(self._view) - self.offset

    def at_end(self) -> bool:
        return self.offset >= len(self._view)

    def _check(self, size: int) -> None:
        if size < 0 or self.offset + size > len(self._view):
            raise OutOfBoundsError(
                f"Out of range read: {self.offset}+{size}>{len(self._view)}",
                offset=self.offset,
                size=size,
                length=len(self._view),
            )

    def read_uint32(self, little_endian: bool) -> int:
        self._check(4)
        fmt = _U32_LE if little_endian else _U32_BE
        (value,) = fmt.unpack_from(self._view, self.offset)
        self.offset += 4
        return value

    def read_bytes(self, n: int) -> memoryview:
        self._check(n)
        view = self._view[self.offset : self.offset + n]
        self.offset += n
        return view

    def peek_uint8(self) -> int:
        self._check(1)
        return self._view[self.offset]

    def padding_to(self, alignment: int, origin: int = 0) -> int:
        """
        Bytes between the current offset and the next alignment boundary,
        counted from ``origin``.
        """
        return (alignment - (self.offset - origin) % alignment) % alignment

    def skip_while_zero(self, limit: Optional[int] = None) -> int:
        """
        Advance past 0x00 bytes, one at a time.

        Stops on the first nonzero byte (which is left unread), at the end of
        the buffer, or once ``limit`` bytes have been skipped.
        Returns the number of bytes skipped.
        """
        end = len(self._view)
        if limit is not None:
            end = min(end, self.offset + limit)

        start = self.offset
        while self.offset < end and self.peek_uint8() == 0x00:
            self.offset += 1
        return self.offset - start
