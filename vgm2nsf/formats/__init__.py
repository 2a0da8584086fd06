"""Format handlers for VGM input and NSF output."""

from vgm2nsf.formats.vgm import VGMReader
from vgm2nsf.formats.nsf import NSFWriter, NsfFile

__all__ = ["VGMReader", "NSFWriter", "NsfFile"]
