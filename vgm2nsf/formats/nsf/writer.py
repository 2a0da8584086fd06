"""
NSF file writer.

Builds the 128-byte NSF header and appends the translated channel data.

Header layout:
    0x00-0x04: "NESM" + 0x1A
    0x05:      Version
    0x06:      Total songs
    0x07:      Starting song
    0x08-0x09: Load address
    0x0A-0x0B: Init address
    0x0C-0x0D: Play address
    0x0E-0x2D: Song name
    0x2E-0x4D: Artist
    0x4E-0x6D: Copyright
    0x6E-0x6F: NTSC play speed (microseconds)
    0x70-0x77: Bankswitch init values
    0x78-0x79: PAL play speed (microseconds)
    0x7A:      Region flags (0 = NTSC)
    0x7B:      Expansion chip flags
    0x7C-0x7F: Reserved

No 6502 driver is generated, so the load/init/play addresses are fixed
placeholders. The payload after the header is a sequence of tagged
channel chunks, not bank-switched program data.
"""

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from vgm2nsf.models.song import Gd3Metadata
from vgm2nsf.models.track import CHANNEL_ORDER, NesChannel, TrackEntry, TranslatedTrack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NsfFile:
    """
    Assembled NSF file.

    Attributes:
        header: The 128-byte header
        payload: Serialized channel chunks
    """

    header: bytes
    payload: bytes = b""

    @property
    def data(self) -> bytes:
        return self.header + self.payload

    def __len__(self) -> int:
        return len(self.header) + len(self.payload)

    def write(self, filepath: Union[str, Path]) -> None:
        """
        Write the NSF file to disk.

        Args:
            filepath: Output file path
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(self.data)


class NSFWriter:
    """
    Writer for NSF files.

    Example:
        nsf = NSFWriter().assemble(track, song.metadata)
        nsf.write("song.nsf")
    """

    HEADER_SIZE = 128
    MAGIC = b"NESM\x1a"
    VERSION = 1
    STRING_SIZE = 32

    LOAD_ADDRESS = 0x8000
    INIT_ADDRESS = 0x8000
    PLAY_ADDRESS = 0x8010

    NTSC_SPEED = 16639
    PAL_SPEED = 19997

    REGION_NTSC = 0x00
    NO_EXPANSION = 0x00

    # Used when the GD3 tag has no value for a field
    DEFAULT_TITLE = "Converted VGM"
    DEFAULT_ARTIST = "Unknown"
    DEFAULT_COPYRIGHT = "Unknown"

    # Volume byte written for entries without a volume
    NO_VOLUME = 0xFF

    LOOP_TAG = b"LOOP"

    class Offsets:
        MAGIC = 0x00
        VERSION = 0x05
        TOTAL_SONGS = 0x06
        STARTING_SONG = 0x07
        LOAD = 0x08
        INIT = 0x0A
        PLAY = 0x0C
        NAME = 0x0E
        ARTIST = 0x2E
        COPYRIGHT = 0x4E
        NTSC_SPEED = 0x6E
        BANKSWITCH = 0x70
        PAL_SPEED = 0x78
        REGION = 0x7A
        EXPANSION = 0x7B

    def __init__(self):
        self._buffer: bytearray = bytearray()

    def assemble(self, track: TranslatedTrack, metadata: Gd3Metadata) -> NsfFile:
        """
        Build an NSF file from translated tracks and metadata.

        Args:
            track: Translated channel data
            metadata: GD3 metadata for the name fields

        Returns:
            NsfFile with a 128-byte header and the channel payload
        """
        header = self.build_header(metadata)
        payload = self.build_payload(track)

        logger.debug("Assembled NSF: %d header + %d payload bytes", len(header), len(payload))
        return NsfFile(header=header, payload=payload)

    def build_header(self, metadata: Gd3Metadata) -> bytes:
        """Build the fixed 128-byte header."""
        self._buffer = bytearray(self.HEADER_SIZE)

        self._buffer[0:5] = self.MAGIC
        self._buffer[self.Offsets.VERSION] = self.VERSION

        # Multi-song NSF output is not supported
        self._buffer[self.Offsets.TOTAL_SONGS] = 1
        self._buffer[self.Offsets.STARTING_SONG] = 1

        struct.pack_into("<H", self._buffer, self.Offsets.LOAD, self.LOAD_ADDRESS)
        struct.pack_into("<H", self._buffer, self.Offsets.INIT, self.INIT_ADDRESS)
        struct.pack_into("<H", self._buffer, self.Offsets.PLAY, self.PLAY_ADDRESS)

        self._write_string(self.Offsets.NAME, metadata.track_name or self.DEFAULT_TITLE)
        self._write_string(self.Offsets.ARTIST, metadata.author or self.DEFAULT_ARTIST)
        self._write_string(self.Offsets.COPYRIGHT, metadata.game_name or self.DEFAULT_COPYRIGHT)

        struct.pack_into("<H", self._buffer, self.Offsets.NTSC_SPEED, self.NTSC_SPEED)
        struct.pack_into("<H", self._buffer, self.Offsets.PAL_SPEED, self.PAL_SPEED)

        self._buffer[self.Offsets.REGION] = self.REGION_NTSC
        self._buffer[self.Offsets.EXPANSION] = self.NO_EXPANSION

        return bytes(self._buffer)

    def _write_string(self, offset: int, text: str) -> None:
        """Write a string field, truncated to 32 bytes."""
        encoded = text.encode("ascii", errors="replace")[: self.STRING_SIZE]
        self._buffer[offset : offset + len(encoded)] = encoded

    def build_payload(self, track: TranslatedTrack) -> bytes:
        """Serialize channel chunks in pulse1, pulse2, noise, dpcm order."""
        payload = bytearray()

        for channel in CHANNEL_ORDER:
            entries = track.channel(channel)
            payload += channel.tag
            payload += struct.pack("<I", len(entries))

            for entry in entries:
                payload += self._pack_entry(channel, entry)

        if track.loop_point is not None:
            payload += self.LOOP_TAG
            payload += struct.pack(
                "<IH",
                track.loop_point.offset,
                int(round(track.loop_point.correlation * 1000)),
            )

        return bytes(payload)

    def _pack_entry(self, channel: NesChannel, entry: TrackEntry) -> bytes:
        if channel == NesChannel.DPCM:
            return struct.pack("<II", entry.sample_index, len(entry.payload)) + entry.payload

        volume = self.NO_VOLUME if entry.volume is None else entry.volume & 0x0F
        return struct.pack("<IHB", entry.sample_index, entry.value & 0xFFFF, volume)


def assemble(track: TranslatedTrack, metadata: Gd3Metadata) -> NsfFile:
    """
    Assemble an NSF file.

    Args:
        track: Translated channel data
        metadata: GD3 metadata

    Returns:
        NsfFile
    """
    return NSFWriter().assemble(track, metadata)
