"""
Converters from VGM songs to NSF files.

Example:
    from vgm2nsf.converters import convert_file

    convert_file("stage1.vgm", "stage1.nsf")
"""

from vgm2nsf.converters.translator import translate_events
from vgm2nsf.converters.vgm_to_nsf import (
    ConversionOptions,
    ConversionResult,
    VGMToNSFConverter,
    convert,
    convert_file,
)

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "VGMToNSFConverter",
    "convert",
    "convert_file",
    "translate_events",
]
