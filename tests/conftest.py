"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path
from typing import Optional

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Stored data offset that places the stream right after the 64-byte header
DEFAULT_STORED_DATA_OFFSET = 0x0C


def build_vgm(
    commands: bytes = b"\x66",
    gd3: Optional[bytes] = None,
    stored_data_offset: int = DEFAULT_STORED_DATA_OFFSET,
    sn_clock: int = 3579545,
    ym_clock: int = 0,
    total_samples: int = 0,
    version: int = 0x150,
) -> bytes:
    """
    Build a minimal VGM file in memory.

    The command stream starts at the position given by stored_data_offset
    (0x40 for both the default and the legacy value 0). An optional GD3
    tag is appended after the commands.
    """
    data_start = 0x40 if stored_data_offset == 0 else 0x34 + stored_data_offset
    header = bytearray(max(0x40, data_start))
    header[0:4] = b"Vgm "
    struct.pack_into("<I", header, 0x08, version)
    struct.pack_into("<I", header, 0x0C, sn_clock)
    struct.pack_into("<I", header, 0x10, ym_clock)
    struct.pack_into("<I", header, 0x18, total_samples)
    struct.pack_into("<I", header, 0x34, stored_data_offset)

    data = header + commands

    if gd3 is not None:
        struct.pack_into("<I", data, 0x14, len(data) - 0x14)
        data += gd3

    struct.pack_into("<I", data, 0x04, len(data) - 0x04)
    return bytes(data)


def gd3_tag(*strings: str) -> bytes:
    """Build a GD3 tag holding null-terminated ASCII strings."""
    return b"Gd3 " + b"".join(s.encode("ascii") + b"\x00" for s in strings)


def data_block(payload: bytes, block_type: int = 0x00) -> bytes:
    """Build a 0x67 data block command."""
    return bytes([0x67, 0x66, block_type]) + struct.pack("<I", len(payload)) + payload


@pytest.fixture
def minimal_vgm():
    """One tone write, one wait and the end command."""
    return build_vgm(bytes([0x50, 0x0A, 0x61, 0x10, 0x00, 0x66]))


@pytest.fixture
def tagged_vgm():
    """A VGM with tone, noise and FM writes and a GD3 tag."""
    commands = bytes(
        [
            0x50, 0x0A,        # tone ch0
            0x50, 0x25,        # tone ch1
            0x50, 0x45,        # tone ch2 (unmapped)
            0x50, 0x66,        # noise
            0x51, 0x10, 0x20,  # YM2413 write
            0x62,              # wait 735
            0x66,
        ]
    )
    return build_vgm(commands, gd3=gd3_tag("Green Hill", "Sonic", "Master System", "Yuzo"))


@pytest.fixture
def vgm_file(tmp_path, tagged_vgm):
    """Write the tagged VGM to disk and return its path."""
    path = tmp_path / "song.vgm"
    path.write_bytes(tagged_vgm)
    return path
