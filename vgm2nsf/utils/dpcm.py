"""
PCM to DPCM delta encoding.

Encoding scheme:
- Take 8 source samples per output byte
- Compare each sample to the previous one (state carries across chunks)
- Set the bit when the sample changed, clear it otherwise
- Bits are filled LSB first, the order the NES DMC reads them

This is lossy: it records whether the signal changed, not the direction
or size of the change.

Example:
    Input:  [0x80, 0x80, 0x90, 0x90, 0x90, 0x80, 0x80, 0x80]
    Output: [0b00100100]
"""

from typing import List, Union

SAMPLES_PER_BYTE = 8


def encode(pcm: Union[bytes, List[int]]) -> bytes:
    """
    Encode 8-bit PCM samples as 1-bit change flags.

    Args:
        pcm: Raw unsigned 8-bit PCM samples

    Returns:
        ceil(len(pcm) / 8) bytes of delta flags

    Example:
        >>> encode(bytes([5] * 8))
        b'\\x00'
    """
    if isinstance(pcm, list):
        pcm = bytes(pcm)

    result = bytearray()
    if not pcm:
        return bytes(result)

    previous = pcm[0]

    for i in range(0, len(pcm), SAMPLES_PER_BYTE):
        chunk = pcm[i : i + SAMPLES_PER_BYTE]
        packed = 0

        for bit, sample in enumerate(chunk):
            if sample != previous:
                packed |= 1 << bit
            previous = sample

        result.append(packed)

    return bytes(result)


def encoded_length(sample_count: int) -> int:
    """Number of DPCM bytes produced for sample_count samples."""
    return (sample_count + SAMPLES_PER_BYTE - 1) // SAMPLES_PER_BYTE
