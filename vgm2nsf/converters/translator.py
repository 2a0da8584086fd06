"""
SN76489 to NES APU register translation.

The translation is a direct bit-field reinterpretation. Periods and
volumes are forwarded as-is instead of being rescaled through each chip's
clock divider, so pitch is not frequency accurate. sn_period_to_hz and
nes_period_for_hz describe the remap a frequency accurate stage would do.

Channel mapping:
    SN76489 tone 0 -> NES pulse 1
    SN76489 tone 1 -> NES pulse 2
    SN76489 tone 2 -> unmapped
    SN76489 noise  -> NES noise
    PCM blocks     -> NES DMC
    YM2413 writes  -> unmapped
"""

import logging
from typing import Dict, List, Sequence

from vgm2nsf.models.events import (
    EndEvent,
    Event,
    FmWriteEvent,
    NoiseEvent,
    PcmBlockEvent,
    ToneEvent,
)
from vgm2nsf.models.track import NesChannel, TrackEntry, TranslatedTrack

logger = logging.getLogger(__name__)

TONE_CHANNEL_MAP = {
    0: NesChannel.PULSE1,
    1: NesChannel.PULSE2,
}

# NES CPU clock (NTSC)
NES_CPU_CLOCK = 1789773


def translate_tone(event: ToneEvent) -> TrackEntry:
    """Forward period and volume bits to a NES pulse entry."""
    return TrackEntry(
        sample_index=event.sample_index,
        value=event.period & 0x3F,
        volume=event.volume & 0x0F,
    )


def pack_noise_register(data: int) -> int:
    """
    Pack an SN76489 noise control byte into a NES noise register value.

    Bit 2 (white/periodic) moves to bit 7, bits 1-0 (rate) stay in place.
    """
    noise_type = (data >> 2) & 0x01
    rate = data & 0x03
    return (noise_type << 7) | (rate & 0x0F)


def translate_noise(event: NoiseEvent) -> TrackEntry:
    return TrackEntry(sample_index=event.sample_index, value=pack_noise_register(event.register))


def translate_pcm(event: PcmBlockEvent) -> TrackEntry:
    return TrackEntry(
        sample_index=event.sample_index,
        value=len(event.delta_encoded),
        payload=event.delta_encoded,
    )


def translate_events(
    events: Sequence[Event], preserve_noise_channel: bool = True, total_samples: int = 0
) -> TranslatedTrack:
    """
    Translate decoded events into NES channel tracks.

    Args:
        events: Decoded events in timeline order
        preserve_noise_channel: Keep noise writes (dropped when False)
        total_samples: Song length to use when the stream has no End event

    Returns:
        TranslatedTrack without a loop point
    """
    channels: Dict[NesChannel, List[TrackEntry]] = {ch: [] for ch in NesChannel}
    unmapped: List[Event] = []

    for event in events:
        if isinstance(event, ToneEvent):
            target = TONE_CHANNEL_MAP.get(event.channel)
            if target is None:
                unmapped.append(event)
            else:
                channels[target].append(translate_tone(event))

        elif isinstance(event, NoiseEvent):
            if preserve_noise_channel:
                channels[NesChannel.NOISE].append(translate_noise(event))

        elif isinstance(event, PcmBlockEvent):
            channels[NesChannel.DPCM].append(translate_pcm(event))

        elif isinstance(event, FmWriteEvent):
            unmapped.append(event)

        elif isinstance(event, EndEvent):
            total_samples = event.sample_index

    if unmapped:
        logger.info("%d event(s) have no NES channel and were not translated", len(unmapped))

    return TranslatedTrack(
        pulse1=tuple(channels[NesChannel.PULSE1]),
        pulse2=tuple(channels[NesChannel.PULSE2]),
        noise=tuple(channels[NesChannel.NOISE]),
        dpcm=tuple(channels[NesChannel.DPCM]),
        unmapped=tuple(unmapped),
        total_samples=total_samples,
    )


def sn_period_to_hz(period: int, clock: int) -> float:
    """
    SN76489 tone frequency for a 10-bit period register.

    Args:
        period: Tone period (0 behaves like 1 on real hardware)
        clock: Chip clock in Hz

    Returns:
        Frequency in Hz
    """
    return clock / (32 * max(period, 1))


def nes_period_for_hz(frequency: float, cpu_clock: int = NES_CPU_CLOCK) -> int:
    """
    Nearest NES pulse timer value for a frequency, clamped to 11 bits.

    Args:
        frequency: Target frequency in Hz
        cpu_clock: NES CPU clock in Hz

    Returns:
        Timer period (0-0x7FF)
    """
    if frequency <= 0:
        return 0x7FF
    period = int(round(cpu_clock / (16 * frequency) - 1))
    return max(0, min(0x7FF, period))
