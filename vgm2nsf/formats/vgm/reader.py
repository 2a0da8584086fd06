"""
VGM file reader.

Reads .vgm data and builds the ParsedSong model from the header and
GD3 tag.
"""

import logging
from pathlib import Path
from typing import Union

from vgm2nsf.formats.vgm.cursor import BinaryCursor
from vgm2nsf.formats.vgm.decoder import DecodeResult, VGMCommandDecoder
from vgm2nsf.formats.vgm.gd3 import parse_gd3
from vgm2nsf.formats.vgm.header import VGM_SIGNATURE, parse_header
from vgm2nsf.models.song import ParsedSong

logger = logging.getLogger(__name__)


class VGMReader:
    """
    Reader for SN76489 VGM files.

    Example:
        song = VGMReader.read("stage1.vgm")
        print(f"{song.metadata.track_name}: {song.header.duration_seconds:.1f}s")
    """

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> ParsedSong:
        """
        Read a VGM file and return a ParsedSong.

        Args:
            filepath: Path to .vgm file

        Returns:
            Parsed song
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        return cls().parse_bytes(data)

    def parse_bytes(self, data: bytes) -> ParsedSong:
        """
        Parse VGM data from bytes.

        Args:
            data: Raw VGM file contents

        Returns:
            Parsed song

        Raises:
            SignatureMismatch: If data is not a VGM file
            OutOfBounds: If data is too short to hold a header
        """
        cursor = BinaryCursor(data)
        header = parse_header(cursor)
        metadata, warnings = parse_gd3(cursor, header.absolute_gd3_offset)

        if header.data_offset >= len(cursor):
            message = f"Data offset 0x{header.data_offset:X} is beyond end of file"
            logger.warning(message)
            warnings.append(message)

        return ParsedSong(
            header=header,
            metadata=metadata,
            raw=cursor.buffer,
            warnings=tuple(warnings),
        )

    @staticmethod
    def decode_events(song: ParsedSong, enable_pcm: bool = True) -> DecodeResult:
        """Decode the command stream of an already parsed song."""
        return VGMCommandDecoder(enable_pcm=enable_pcm).decode(song.raw, song.header.data_offset)

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like a VGM file.

        Args:
            filepath: Path to check

        Returns:
            True if the file starts with the VGM signature
        """
        filepath = Path(filepath)

        if not filepath.exists():
            return False

        try:
            with open(filepath, "rb") as f:
                return f.read(4) == VGM_SIGNATURE
        except OSError:
            return False


def parse(data: bytes) -> ParsedSong:
    """
    Parse a VGM buffer.

    Args:
        data: Raw VGM file contents

    Returns:
        ParsedSong

    Raises:
        ParseError: On a bad signature or a truncated header
    """
    return VGMReader().parse_bytes(data)
