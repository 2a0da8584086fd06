"""Utility functions for vgm2nsf."""

from vgm2nsf.utils.dpcm import encode, encoded_length
from vgm2nsf.utils.validation import ValidationError, validate_loop_threshold

__all__ = [
    "encode",
    "encoded_length",
    "ValidationError",
    "validate_loop_threshold",
]
