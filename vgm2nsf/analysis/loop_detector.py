"""
Loop point detection.

Brute-force autocorrelation over the decoded amplitude sequence. Candidate
offsets are tried in steps of 100 and the first one that clears the
threshold is returned, not the best one.
"""

import logging
from typing import List, Optional, Sequence

from vgm2nsf.models.events import Event, NoiseEvent, ToneEvent
from vgm2nsf.models.track import LoopPoint

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.85

OFFSET_START = 100
OFFSET_STEP = 100

# Two points match when they differ by less than this
MATCH_TOLERANCE = 10

# Largest amplitude difference, used to scale match quality
AMPLITUDE_RANGE = 127


def amplitude_sequence(events: Sequence[Event]) -> List[int]:
    """
    Build the amplitude sequence used for loop detection.

    Tone writes contribute period * 2, noise writes their register value,
    both in the 0-127 range. Other events are skipped.

    Args:
        events: Decoded events in timeline order

    Returns:
        Amplitude values in event order
    """
    amplitudes = []
    for event in events:
        if isinstance(event, ToneEvent):
            amplitudes.append((event.period * 2) & 0x7F)
        elif isinstance(event, NoiseEvent):
            amplitudes.append(event.register & 0x7F)
    return amplitudes


def _score(sequence: Sequence[int], offset: int):
    """Return (correlation, matches, compared) for one candidate offset."""
    total = 0.0
    matches = 0
    compared = len(sequence) - offset

    for i in range(compared):
        delta = abs(sequence[i] - sequence[i + offset])
        if delta < MATCH_TOLERANCE:
            total += (1 - delta / AMPLITUDE_RANGE) ** 2
            matches += 1

    correlation = total / matches if matches else 0.0
    return correlation, matches, compared


def detect(
    sequence: Sequence[int],
    threshold: float = DEFAULT_THRESHOLD,
    min_coverage: Optional[float] = None,
) -> Optional[LoopPoint]:
    """
    Find the first offset at which the sequence repeats itself.

    Args:
        sequence: Amplitude values (0-127)
        threshold: Minimum correlation, exclusive
        min_coverage: If set, an offset also needs matches on at least this
            fraction of the compared points. Without it a single exact
            match is enough to qualify.

    Returns:
        LoopPoint whose offset is an index into sequence, or None

    Example:
        >>> detect(list(range(100)) * 4).offset
        100
    """
    max_offset = len(sequence) // 2

    for offset in range(OFFSET_START, max_offset + 1, OFFSET_STEP):
        correlation, matches, compared = _score(sequence, offset)

        if min_coverage is not None and matches < min_coverage * compared:
            continue

        if correlation > threshold:
            logger.debug(
                "Loop found at offset %d (correlation %.3f, %d matches)",
                offset,
                correlation,
                matches,
            )
            return LoopPoint(
                offset=offset,
                correlation=correlation,
                matching_points=matches,
                event_index=offset,
            )

    return None
