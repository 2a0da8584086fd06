"""
CLI display modules.
"""

from cli.display.tables import (
    display_vgm_info,
    display_decode_stats,
    display_conversion_summary,
    display_nsf_info,
)
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_vgm_info",
    "display_decode_stats",
    "display_conversion_summary",
    "display_nsf_info",
    "display_hex_dump",
]
