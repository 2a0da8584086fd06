"""
vgm2nsf - Convert SN76489 VGM music logs to NSF files.

This library provides tools to:
- Parse VGM files recorded from the SN76489 PSG (Master System, Game Gear, SG-1000)
- Translate PSG register writes to NES APU channel data
- Detect loop points and write NSF files

Example usage:
    from vgm2nsf import parse, convert, ConversionOptions

    with open("stage1.vgm", "rb") as f:
        song = parse(f.read())

    nsf = convert(song, ConversionOptions(detect_loops=False))
    nsf.write("stage1.nsf")
"""

__version__ = "0.1.0"
__author__ = "vgm2nsf Contributors"

from vgm2nsf.errors import (
    VGMError,
    ParseError,
    SignatureMismatch,
    OutOfBounds,
    ConversionError,
)
from vgm2nsf.formats.vgm.reader import VGMReader, parse
from vgm2nsf.formats.nsf.writer import NSFWriter, NsfFile
from vgm2nsf.converters.vgm_to_nsf import ConversionOptions, VGMToNSFConverter, convert
from vgm2nsf.models.song import ParsedSong, SongHeader, Gd3Metadata

__all__ = [
    "VGMError",
    "ParseError",
    "SignatureMismatch",
    "OutOfBounds",
    "ConversionError",
    "VGMReader",
    "NSFWriter",
    "NsfFile",
    "ConversionOptions",
    "VGMToNSFConverter",
    "ParsedSong",
    "SongHeader",
    "Gd3Metadata",
    "parse",
    "convert",
]
