"""
Translated NES channel tracks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from vgm2nsf.models.events import Event


class NesChannel(Enum):
    """
    NES APU channels that receive translated data.

    The triangle channel has no SN76489 counterpart and is not used.
    """

    PULSE1 = "pulse1"
    PULSE2 = "pulse2"
    NOISE = "noise"
    DPCM = "dpcm"

    @property
    def tag(self) -> bytes:
        """Four byte chunk tag used in the NSF payload."""
        return {
            NesChannel.PULSE1: b"PLS1",
            NesChannel.PULSE2: b"PLS2",
            NesChannel.NOISE: b"NOIS",
            NesChannel.DPCM: b"DPCM",
        }[self]


# Payload order
CHANNEL_ORDER = (NesChannel.PULSE1, NesChannel.PULSE2, NesChannel.NOISE, NesChannel.DPCM)


@dataclass(frozen=True)
class TrackEntry:
    """
    One register update on a NES channel.

    Attributes:
        sample_index: Sample position of the update
        value: Pulse period or packed noise register
        volume: NES volume field (None for noise and DPCM entries)
        payload: DPCM sample bytes (DPCM entries only)
    """

    sample_index: int
    value: int = 0
    volume: Optional[int] = None
    payload: bytes = field(default=b"", repr=False)


@dataclass(frozen=True)
class LoopPoint:
    """
    Detected loop point.

    Attributes:
        offset: Loop start as a sample index
        correlation: Match score in [0.0, 1.0]
        matching_points: Number of points that matched at this offset
        event_index: Position of the loop start in the amplitude sequence
    """

    offset: int
    correlation: float
    matching_points: int = 0
    event_index: int = 0


@dataclass(frozen=True)
class TranslatedTrack:
    """
    NES-ready channel data produced from a decoded VGM stream.

    Attributes:
        pulse1: Entries for NES pulse 1 (SN76489 tone 0)
        pulse2: Entries for NES pulse 2 (SN76489 tone 1)
        noise: Entries for the NES noise channel
        dpcm: Entries for the NES DMC channel
        unmapped: Events with no NES destination (tone 2, YM2413)
        loop_point: Detected loop, if any
        total_samples: Song length in samples
    """

    pulse1: Tuple[TrackEntry, ...] = ()
    pulse2: Tuple[TrackEntry, ...] = ()
    noise: Tuple[TrackEntry, ...] = ()
    dpcm: Tuple[TrackEntry, ...] = ()
    unmapped: Tuple[Event, ...] = ()
    loop_point: Optional[LoopPoint] = None
    total_samples: int = 0

    def channel(self, channel: NesChannel) -> Tuple[TrackEntry, ...]:
        """Get the entries for a NES channel."""
        return getattr(self, channel.value)

    def channels(self) -> Dict[NesChannel, Tuple[TrackEntry, ...]]:
        """Get all channels in payload order."""
        return {ch: self.channel(ch) for ch in CHANNEL_ORDER}

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.channels().values())

    @property
    def has_information_loss(self) -> bool:
        return bool(self.unmapped)
