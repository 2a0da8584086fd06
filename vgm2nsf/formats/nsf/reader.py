"""
NSF header reader.

Reads back the fixed header of an NSF file for inspection.
"""

import struct
from dataclasses import dataclass

from vgm2nsf.errors import ParseError
from vgm2nsf.formats.nsf.writer import NSFWriter


@dataclass(frozen=True)
class NSFHeader:
    """Parsed NSF header fields."""

    magic: bytes
    version: int
    total_songs: int
    starting_song: int
    load_address: int
    init_address: int
    play_address: int
    name: str
    artist: str
    copyright: str
    ntsc_speed: int
    pal_speed: int
    region: int
    expansion: int

    def is_valid(self) -> bool:
        return self.magic == NSFWriter.MAGIC


def _read_string(data: bytes, offset: int) -> str:
    raw = data[offset : offset + NSFWriter.STRING_SIZE]
    return raw.split(b"\x00", 1)[0].decode("ascii", errors="replace")


def read_nsf_header(data: bytes) -> NSFHeader:
    """
    Parse the 128-byte NSF header.

    Args:
        data: NSF file contents (at least 128 bytes)

    Returns:
        NSFHeader

    Raises:
        ParseError: If data is shorter than a header
    """
    if len(data) < NSFWriter.HEADER_SIZE:
        raise ParseError(f"Invalid NSF size: {len(data)} (expected at least 128)")

    offsets = NSFWriter.Offsets
    load, init, play = struct.unpack_from("<HHH", data, offsets.LOAD)

    return NSFHeader(
        magic=data[0:5],
        version=data[offsets.VERSION],
        total_songs=data[offsets.TOTAL_SONGS],
        starting_song=data[offsets.STARTING_SONG],
        load_address=load,
        init_address=init,
        play_address=play,
        name=_read_string(data, offsets.NAME),
        artist=_read_string(data, offsets.ARTIST),
        copyright=_read_string(data, offsets.COPYRIGHT),
        ntsc_speed=struct.unpack_from("<H", data, offsets.NTSC_SPEED)[0],
        pal_speed=struct.unpack_from("<H", data, offsets.PAL_SPEED)[0],
        region=data[offsets.REGION],
        expansion=data[offsets.EXPANSION],
    )
