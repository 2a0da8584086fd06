"""NSF (NES Sound Format) output."""

from vgm2nsf.formats.nsf.writer import NSFWriter, NsfFile, assemble
from vgm2nsf.formats.nsf.reader import NSFHeader, read_nsf_header

__all__ = ["NSFWriter", "NsfFile", "NSFHeader", "assemble", "read_nsf_header"]
