"""
Song analysis.

Provides loop point detection over decoded event sequences.
"""

from vgm2nsf.analysis.loop_detector import amplitude_sequence, detect

__all__ = ["amplitude_sequence", "detect"]
