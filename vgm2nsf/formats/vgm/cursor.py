"""
Bounds-checked little-endian reader over an immutable byte buffer.

All numeric decoding of VGM data goes through BinaryCursor, so an
out-of-range read always surfaces as OutOfBounds instead of an
IndexError or struct.error deep inside a parser.
"""

import struct
from typing import Union

from vgm2nsf.errors import OutOfBounds


class BinaryCursor:
    """
    Random access reader for VGM data.

    Example:
        cursor = BinaryCursor(data)
        version = cursor.read_u32le(0x08)
    """

    def __init__(self, buffer: Union[bytes, bytearray, memoryview]):
        # Copy mutable inputs so the buffer can never change under us
        self.buffer: bytes = bytes(buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def remaining(self, offset: int) -> int:
        """Number of bytes available from offset to the end."""
        return max(0, len(self.buffer) - offset)

    def _check(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(self.buffer):
            raise OutOfBounds(offset, length, len(self.buffer))

    def read_u8(self, offset: int) -> int:
        self._check(offset, 1)
        return self.buffer[offset]

    def read_u16le(self, offset: int) -> int:
        self._check(offset, 2)
        return struct.unpack_from("<H", self.buffer, offset)[0]

    def read_u32le(self, offset: int) -> int:
        self._check(offset, 4)
        return struct.unpack_from("<I", self.buffer, offset)[0]

    def read_bytes(self, offset: int, length: int) -> bytes:
        self._check(offset, length)
        return self.buffer[offset : offset + length]
