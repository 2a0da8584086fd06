"""Tests for SN76489 to NES APU register translation."""

import pytest

from vgm2nsf.converters.translator import (
    nes_period_for_hz,
    pack_noise_register,
    sn_period_to_hz,
    translate_events,
)
from vgm2nsf.models.events import (
    EndEvent,
    FmWriteEvent,
    NoiseEvent,
    PcmBlockEvent,
    ToneEvent,
)
from vgm2nsf.models.track import NesChannel, TrackEntry


class TestToneTranslation:
    """Test cases for tone channel mapping."""

    def test_channel_mapping(self):
        """Test that tone 0/1 go to pulse 1/2 with bits forwarded."""
        events = [
            ToneEvent(0, channel=0, period=10, volume=1),
            ToneEvent(5, channel=1, period=37, volume=3),
            EndEvent(10),
        ]
        track = translate_events(events)

        assert track.pulse1 == (TrackEntry(0, value=10, volume=1),)
        assert track.pulse2 == (TrackEntry(5, value=37, volume=3),)
        assert track.total_samples == 10

    def test_third_channel_unmapped(self):
        """Test that tone 2 is kept as an unmapped event."""
        event = ToneEvent(0, channel=2, period=5, volume=0)
        track = translate_events([event])

        assert track.pulse1 == ()
        assert track.pulse2 == ()
        assert track.unmapped == (event,)
        assert track.has_information_loss


class TestNoiseTranslation:
    """Test cases for noise register packing."""

    @pytest.mark.parametrize(
        "data, expected",
        [
            (0x60, 0x00),  # periodic, rate 0
            (0x63, 0x03),  # periodic, rate 3
            (0x64, 0x80),  # white, rate 0
            (0x66, 0x82),  # white, rate 2
            (0xE7, 0x83),  # latch bit ignored
        ],
    )
    def test_pack(self, data, expected):
        """Test (type << 7) | rate packing."""
        assert pack_noise_register(data) == expected

    def test_noise_channel(self):
        """Test that noise writes land on the NES noise channel."""
        track = translate_events([NoiseEvent(7, 0x66)])

        assert track.noise == (TrackEntry(7, value=0x82),)
        assert track.noise[0].volume is None

    def test_noise_dropped_when_disabled(self):
        """Test that preserve_noise_channel=False drops noise writes."""
        track = translate_events([NoiseEvent(7, 0x66)], preserve_noise_channel=False)

        assert track.noise == ()
        assert not track.has_information_loss


class TestOtherEvents:
    """Test cases for PCM and FM events."""

    def test_pcm_to_dpcm(self):
        """Test that PCM blocks become DPCM entries."""
        track = translate_events([PcmBlockEvent(3, b"\x01\x02", source_length=16)])

        assert track.dpcm[0].payload == b"\x01\x02"
        assert track.dpcm[0].value == 2
        assert track.dpcm[0].sample_index == 3

    def test_fm_passthrough(self):
        """Test that YM2413 writes are reported as unmapped."""
        event = FmWriteEvent(0, 0x10, 0x20)
        track = translate_events([event])

        assert track.unmapped == (event,)

    def test_total_samples_without_end(self):
        """Test the fallback length when no End event exists."""
        track = translate_events([ToneEvent(0, 0, 1, 1)], total_samples=99)
        assert track.total_samples == 99

    def test_channels_in_payload_order(self):
        """Test the channel ordering helper."""
        track = translate_events([])
        assert list(track.channels()) == [
            NesChannel.PULSE1,
            NesChannel.PULSE2,
            NesChannel.NOISE,
            NesChannel.DPCM,
        ]


class TestFrequencyHelpers:
    """Test cases for the frequency remap helpers."""

    def test_sn_period_to_hz(self):
        """Test the SN76489 tone formula."""
        assert sn_period_to_hz(254, 3579545) == pytest.approx(440.4, abs=0.1)

    def test_nes_period_for_hz(self):
        """Test the NES pulse timer formula (A4 = 0x0FD)."""
        assert nes_period_for_hz(440.0) == 0x0FD

    def test_nes_period_clamped(self):
        """Test clamping of very low frequencies."""
        assert nes_period_for_hz(1.0) == 0x7FF
        assert nes_period_for_hz(0) == 0x7FF
