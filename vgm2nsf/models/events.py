"""
Decoded VGM command events.

Every event carries the cumulative wait-sample counter at the moment it
was emitted. Events are produced in non-decreasing sample_index order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class EventType(Enum):
    """Kinds of events produced by the command stream decoder."""

    TONE = "tone"
    NOISE = "noise"
    FM_WRITE = "fm_write"  # YM2413 passthrough, not translated
    PCM_BLOCK = "pcm_block"
    END = "end"


@dataclass(frozen=True)
class ToneEvent:
    """
    SN76489 tone register write.

    Attributes:
        sample_index: Sample position of the write
        channel: Tone channel (0-2)
        period: Coarse period index (low 6 bits of the data byte)
        volume: Volume field, bits 4-3 of the data byte, so only 0-3
            rather than the 0-15 range of the NES volume nibble
        data: Raw SN76489 data byte
    """

    sample_index: int
    channel: int
    period: int
    volume: int
    data: int = 0

    type = EventType.TONE


@dataclass(frozen=True)
class NoiseEvent:
    """SN76489 noise register write (register holds the raw data byte)."""

    sample_index: int
    register: int

    type = EventType.NOISE

    @property
    def noise_type(self) -> int:
        """1 = white noise, 0 = periodic."""
        return (self.register >> 2) & 0x01

    @property
    def rate(self) -> int:
        return self.register & 0x03


@dataclass(frozen=True)
class FmWriteEvent:
    """YM2413 register write, kept as a raw register/data pair."""

    sample_index: int
    register: int
    data: int

    type = EventType.FM_WRITE


@dataclass(frozen=True)
class PcmBlockEvent:
    """
    PCM data block converted to 1-bit delta form.

    Attributes:
        sample_index: Sample position of the block
        delta_encoded: DPCM bytes (one byte per 8 source samples)
        block_type: VGM data block type byte
        source_length: Length of the original PCM block in bytes
    """

    sample_index: int
    delta_encoded: bytes
    block_type: int = 0
    source_length: int = 0

    type = EventType.PCM_BLOCK


@dataclass(frozen=True)
class EndEvent:
    """End of command stream."""

    sample_index: int

    type = EventType.END


Event = Union[ToneEvent, NoiseEvent, FmWriteEvent, PcmBlockEvent, EndEvent]
