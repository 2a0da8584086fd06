"""
GD3 tag parser.

Extraction is best-effort: a missing or damaged tag yields empty
metadata plus a warning, never an exception.
"""

import logging
from typing import List, Tuple, Union

from vgm2nsf.formats.vgm.cursor import BinaryCursor
from vgm2nsf.models.song import Gd3Metadata

logger = logging.getLogger(__name__)

GD3_SIGNATURE_SIZE = 4
SCAN_WINDOW = 500
MAX_STRINGS = 4


def _collect_strings(cursor: BinaryCursor, start: int) -> List[str]:
    """Collect null-terminated printable ASCII runs from start."""
    strings: List[str] = []
    current = []
    end = min(start + SCAN_WINDOW, len(cursor))

    for offset in range(start, end):
        byte = cursor.read_u8(offset)
        if byte == 0x00:
            strings.append("".join(current))
            current = []
            if len(strings) >= MAX_STRINGS:
                break
        elif 32 <= byte <= 126:
            current.append(chr(byte))

    return strings


def parse_gd3(
    buffer: Union[bytes, BinaryCursor], gd3_offset: int
) -> Tuple[Gd3Metadata, List[str]]:
    """
    Extract GD3 metadata strings.

    Args:
        buffer: Raw VGM bytes or a cursor over them
        gd3_offset: Absolute offset of the GD3 tag (0 = no tag)

    Returns:
        Tuple of (metadata, warnings). Missing fields are empty strings.
    """
    cursor = buffer if isinstance(buffer, BinaryCursor) else BinaryCursor(buffer)
    warnings: List[str] = []

    if gd3_offset == 0:
        return Gd3Metadata(), warnings

    if gd3_offset >= len(cursor):
        message = f"GD3 offset 0x{gd3_offset:X} is beyond end of file ({len(cursor)} bytes)"
        logger.warning(message)
        warnings.append(message)
        return Gd3Metadata(), warnings

    strings = _collect_strings(cursor, gd3_offset + GD3_SIGNATURE_SIZE)
    if not strings:
        message = f"No metadata strings found in GD3 tag at 0x{gd3_offset:X}"
        logger.warning(message)
        warnings.append(message)

    # Pad so positional assignment always has four slots
    strings = strings + [""] * (MAX_STRINGS - len(strings))

    metadata = Gd3Metadata(
        track_name=strings[0],
        game_name=strings[1],
        system_name=strings[2],
        author=strings[3],
    )
    return metadata, warnings
