"""Tests for autocorrelation loop detection."""

import pytest

from vgm2nsf.analysis.loop_detector import amplitude_sequence, detect
from vgm2nsf.models.events import EndEvent, FmWriteEvent, NoiseEvent, ToneEvent


def periodic(period: int, repetitions: int, shift_odd: int = 0):
    """
    Build a sequence that repeats every `period` points.

    Values step by 37 (mod 128) so that shifts by other multiples of 100
    never line up. Odd repetitions can be shifted up by shift_odd.
    """
    base = [(i * 37) % 128 for i in range(period)]
    sequence = []
    for rep in range(repetitions):
        shift = shift_odd if rep % 2 else 0
        sequence.extend(v + shift for v in base)
    return sequence


class TestDetect:
    """Test cases for loop detection."""

    @pytest.mark.parametrize("period, repetitions", [(200, 5), (300, 4), (100, 3)])
    def test_exact_period(self, period, repetitions):
        """Test that an exact repeat is found at its period with correlation 1.0."""
        loop = detect(periodic(period, repetitions))

        assert loop is not None
        assert loop.offset == period
        assert loop.correlation == pytest.approx(1.0)
        assert loop.matching_points == period * (repetitions - 1)

    def test_first_match_wins(self):
        """Test that the first qualifying offset is returned, not the best one."""
        loop = detect(periodic(100, 6))

        assert loop.offset == 100

    def test_threshold(self):
        """Test that near matches only pass a lower threshold."""
        sequence = periodic(100, 6, shift_odd=5)

        # Neighbouring repetitions differ by 5, every other one is exact
        assert detect(sequence, threshold=0.85).offset == 100
        assert detect(sequence, threshold=0.95).offset == 200

    def test_single_match_qualifies(self):
        """Test that one exact match is enough without a coverage minimum."""
        sequence = [(i * 37) % 128 for i in range(400)]
        sequence[100] = sequence[0]
        loop = detect(sequence)

        assert loop.offset == 100
        assert loop.matching_points == 1
        assert loop.correlation == pytest.approx(1.0)

    def test_step_signal(self):
        """Test that a step signal matches within each flat half."""
        loop = detect([0] * 300 + [127] * 300)

        assert loop.offset == 100
        assert loop.matching_points == 400

    def test_short_sequence(self):
        """Test that sequences too short for offset 100 give no loop."""
        assert detect(periodic(50, 3)) is None
        assert detect([]) is None

    def test_period_off_offset_grid(self):
        """Test that a period between candidate offsets is not found."""
        assert detect([(i * 37) % 128 for i in range(400)]) is None


class TestMinCoverage:
    """Test cases for the optional match coverage requirement."""

    def test_sparse_matches_rejected(self):
        """Test that a single exact match is rejected when coverage is required."""
        sequence = [(i * 37) % 128 for i in range(400)]
        sequence[100] = sequence[0]

        assert detect(sequence, min_coverage=0.5) is None

    def test_step_signal_rejected(self):
        """Test that matches covering 80% of the window fail a 0.85 minimum."""
        assert detect([0] * 300 + [127] * 300, min_coverage=0.85) is None
        assert detect([0] * 300 + [127] * 300, min_coverage=0.75).offset == 100

    def test_full_repeat_passes(self):
        """Test that an exact repeat satisfies any coverage minimum."""
        assert detect(periodic(200, 5), min_coverage=1.0).offset == 200


class TestAmplitudeSequence:
    """Test cases for the event amplitude mapping."""

    def test_mapping(self):
        """Test tone and noise amplitudes, other events skipped."""
        events = [
            ToneEvent(0, channel=0, period=10, volume=1),
            FmWriteEvent(0, 0x10, 0x20),
            NoiseEvent(5, 0xE6),
            ToneEvent(9, channel=2, period=63, volume=3),
            EndEvent(9),
        ]

        assert amplitude_sequence(events) == [20, 0x66, 126]
