"""
Error types raised by the VGM -> NSF pipeline.

Only header problems and catastrophic truncation abort a conversion.
Metadata problems and unrecognized opcodes are reported as warnings and
diagnostic counters instead of exceptions.
"""


class VGMError(Exception):
    """Base class for all vgm2nsf errors."""

    pass


class ParseError(VGMError, ValueError):
    """Raised when a VGM buffer cannot be parsed."""

    pass


class SignatureMismatch(ParseError):
    """Raised when the buffer does not start with the 'Vgm ' signature."""

    def __init__(self, found: bytes):
        self.found = found
        super().__init__(f"Invalid VGM file signature: {found!r} (expected b'Vgm ')")


class OutOfBounds(ParseError):
    """Raised when a read would run past the end of the buffer."""

    def __init__(self, offset: int, length: int, size: int = -1):
        self.offset = offset
        self.length = length
        self.size = size
        message = f"Read of {length} byte(s) at offset 0x{offset:X} is out of bounds"
        if size >= 0:
            message += f" (buffer size {size})"
        super().__init__(message)


class ConversionError(VGMError, ValueError):
    """Raised when a parsed song cannot be converted to NSF."""

    pass
