"""
Song-level data models: VGM header, GD3 metadata and the parsed song.
"""

from dataclasses import dataclass, field
from typing import Tuple

# VGM streams are always logged at 44.1 kHz
VGM_SAMPLE_RATE = 44100


@dataclass(frozen=True)
class SongHeader:
    """
    Fixed VGM header fields.

    Attributes:
        signature: First four bytes of the file (always b"Vgm ")
        version: BCD version number (0x150 = 1.50)
        eof_offset: Relative end-of-file offset (from byte 0x04)
        sn76489_clock: SN76489 clock in Hz (defaulted when zero)
        ym2413_clock: YM2413 clock in Hz (0 = chip not used)
        gd3_offset: Relative GD3 offset (from byte 0x14), 0 = no tag
        total_samples: Total song length in 44.1 kHz samples
        loop_offset: Relative loop offset (from byte 0x1C), 0 = no loop
        loop_samples: Number of samples in the looped part
        data_offset: Absolute offset of the command stream
    """

    signature: bytes
    version: int
    eof_offset: int
    sn76489_clock: int
    ym2413_clock: int
    gd3_offset: int
    total_samples: int
    loop_offset: int
    loop_samples: int
    data_offset: int

    @property
    def version_string(self) -> str:
        """Human readable version, e.g. '1.50'."""
        return f"{(self.version >> 8) & 0xFF:X}.{self.version & 0xFF:02X}"

    @property
    def duration_seconds(self) -> float:
        return self.total_samples / VGM_SAMPLE_RATE

    @property
    def has_loop(self) -> bool:
        return self.loop_offset != 0 and self.loop_samples != 0

    @property
    def absolute_gd3_offset(self) -> int:
        """GD3 tag position in the file, or 0 when there is no tag."""
        return self.gd3_offset + 0x14 if self.gd3_offset else 0

    @property
    def absolute_loop_offset(self) -> int:
        """Loop start position in the file, or 0 when there is no loop."""
        return self.loop_offset + 0x1C if self.loop_offset else 0


@dataclass(frozen=True)
class Gd3Metadata:
    """Metadata strings extracted from a GD3 tag."""

    track_name: str = ""
    game_name: str = ""
    system_name: str = ""
    author: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.track_name or self.game_name or self.system_name or self.author)


@dataclass(frozen=True)
class ParsedSong:
    """
    Result of parsing a VGM buffer.

    Attributes:
        header: Parsed fixed header
        metadata: GD3 metadata (empty when unavailable)
        raw: The original, unmodified VGM bytes
        warnings: Non-fatal problems found while parsing
    """

    header: SongHeader
    metadata: Gd3Metadata = field(default_factory=Gd3Metadata)
    raw: bytes = field(default=b"", repr=False)
    warnings: Tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return len(self.raw)
