"""VGM (Video Game Music) format support."""

from vgm2nsf.formats.vgm.cursor import BinaryCursor
from vgm2nsf.formats.vgm.decoder import DecodeResult, VGMCommandDecoder, decode
from vgm2nsf.formats.vgm.gd3 import parse_gd3
from vgm2nsf.formats.vgm.header import parse_header
from vgm2nsf.formats.vgm.reader import VGMReader, parse

__all__ = [
    "BinaryCursor",
    "DecodeResult",
    "VGMCommandDecoder",
    "VGMReader",
    "decode",
    "parse",
    "parse_gd3",
    "parse_header",
]
