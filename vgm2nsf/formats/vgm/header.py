"""
VGM header parser.

Header layout (little-endian, only the fields used here):
    0x00  4  "Vgm " signature
    0x04  4  EOF offset (relative to 0x04)
    0x08  4  Version (BCD)
    0x0C  4  SN76489 clock
    0x10  4  YM2413 clock
    0x14  4  GD3 offset (relative to 0x14)
    0x18  4  Total samples
    0x1C  4  Loop offset (relative to 0x1C)
    0x20  4  Loop samples
    0x34  4  Data offset (relative to 0x34), 0 in files older than 1.50
"""

import logging
from typing import Union

from vgm2nsf.errors import SignatureMismatch
from vgm2nsf.formats.vgm.cursor import BinaryCursor
from vgm2nsf.models.song import SongHeader

logger = logging.getLogger(__name__)

VGM_SIGNATURE = b"Vgm "

# Command stream start for files without a data offset field
LEGACY_DATA_OFFSET = 0x40

# Standard NTSC master clock, used when the header clock is zero
DEFAULT_SN76489_CLOCK = 3579545


class Offsets:
    SIGNATURE = 0x00
    EOF = 0x04
    VERSION = 0x08
    SN76489_CLOCK = 0x0C
    YM2413_CLOCK = 0x10
    GD3 = 0x14
    TOTAL_SAMPLES = 0x18
    LOOP_OFFSET = 0x1C
    LOOP_SAMPLES = 0x20
    DATA_OFFSET = 0x34


def resolve_data_offset(stored: int) -> int:
    """
    Convert the stored data offset to an absolute stream position.

    Args:
        stored: Value of the header field at 0x34

    Returns:
        Absolute offset of the first command
    """
    if stored == 0:
        return LEGACY_DATA_OFFSET
    return Offsets.DATA_OFFSET + stored


def parse_header(buffer: Union[bytes, BinaryCursor]) -> SongHeader:
    """
    Parse the fixed VGM header.

    Args:
        buffer: Raw VGM bytes or a cursor over them

    Returns:
        Parsed SongHeader

    Raises:
        SignatureMismatch: If the buffer does not start with "Vgm "
        OutOfBounds: If the buffer is shorter than the fixed header
    """
    cursor = buffer if isinstance(buffer, BinaryCursor) else BinaryCursor(buffer)

    signature = cursor.buffer[:4]
    if signature != VGM_SIGNATURE:
        raise SignatureMismatch(signature)

    # Reading the last field first fails fast on truncated files
    stored_data_offset = cursor.read_u32le(Offsets.DATA_OFFSET)

    sn_clock = cursor.read_u32le(Offsets.SN76489_CLOCK)
    if sn_clock == 0:
        logger.debug("SN76489 clock is zero, using %d Hz", DEFAULT_SN76489_CLOCK)
        sn_clock = DEFAULT_SN76489_CLOCK

    header = SongHeader(
        signature=signature,
        version=cursor.read_u32le(Offsets.VERSION),
        eof_offset=cursor.read_u32le(Offsets.EOF),
        sn76489_clock=sn_clock,
        ym2413_clock=cursor.read_u32le(Offsets.YM2413_CLOCK),
        gd3_offset=cursor.read_u32le(Offsets.GD3),
        total_samples=cursor.read_u32le(Offsets.TOTAL_SAMPLES),
        loop_offset=cursor.read_u32le(Offsets.LOOP_OFFSET),
        loop_samples=cursor.read_u32le(Offsets.LOOP_SAMPLES),
        data_offset=resolve_data_offset(stored_data_offset),
    )

    logger.debug(
        "VGM %s: data at 0x%X, %d samples",
        header.version_string,
        header.data_offset,
        header.total_samples,
    )
    return header
