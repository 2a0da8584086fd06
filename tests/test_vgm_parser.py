"""Tests for the VGM binary cursor, header parser and GD3 parser."""

import struct

import pytest

from conftest import build_vgm, gd3_tag

from vgm2nsf.errors import OutOfBounds, ParseError, SignatureMismatch
from vgm2nsf.formats.vgm.cursor import BinaryCursor
from vgm2nsf.formats.vgm.gd3 import parse_gd3
from vgm2nsf.formats.vgm.header import (
    DEFAULT_SN76489_CLOCK,
    LEGACY_DATA_OFFSET,
    parse_header,
    resolve_data_offset,
)
from vgm2nsf.formats.vgm.reader import VGMReader, parse


class TestBinaryCursor:
    """Test cases for bounds-checked reads."""

    def test_little_endian_reads(self):
        """Test u8/u16/u32 decoding."""
        cursor = BinaryCursor(bytes([0x01, 0x02, 0x03, 0x04, 0x05]))

        assert cursor.read_u8(0) == 0x01
        assert cursor.read_u16le(0) == 0x0201
        assert cursor.read_u32le(1) == 0x05040302
        assert cursor.read_bytes(1, 3) == b"\x02\x03\x04"

    def test_read_past_end(self):
        """Test that reading past the end raises OutOfBounds."""
        cursor = BinaryCursor(bytes(4))

        with pytest.raises(OutOfBounds) as exc_info:
            cursor.read_u32le(2)

        assert exc_info.value.offset == 2
        assert exc_info.value.length == 4

    def test_read_exactly_to_end(self):
        """Test that a read ending on the last byte succeeds."""
        cursor = BinaryCursor(bytes(4))
        assert cursor.read_u32le(0) == 0

    def test_negative_offset(self):
        """Test that negative offsets are rejected."""
        with pytest.raises(OutOfBounds):
            BinaryCursor(bytes(4)).read_u8(-1)

    def test_out_of_bounds_is_parse_error(self):
        """Test the error hierarchy."""
        with pytest.raises(ParseError):
            BinaryCursor(b"").read_u8(0)

    def test_buffer_is_copied(self):
        """Test that later changes to a bytearray do not leak in."""
        source = bytearray(b"\x01\x02")
        cursor = BinaryCursor(source)
        source[0] = 0xFF

        assert cursor.read_u8(0) == 0x01


class TestHeaderParser:
    """Test cases for the VGM header."""

    def test_parse_fields(self):
        """Test that all header fields are read."""
        data = build_vgm(sn_clock=3546893, ym_clock=3579545, total_samples=44100, version=0x151)
        header = parse_header(data)

        assert header.signature == b"Vgm "
        assert header.version == 0x151
        assert header.version_string == "1.51"
        assert header.sn76489_clock == 3546893
        assert header.ym2413_clock == 3579545
        assert header.total_samples == 44100
        assert header.duration_seconds == pytest.approx(1.0)
        assert header.eof_offset == len(data) - 4

    @pytest.mark.parametrize(
        "data",
        [b"", b"Vgm", b"VGM " + bytes(60), b"RIFF" + bytes(60), b"\x00" * 64],
    )
    def test_invalid_signature(self, data):
        """Test that anything not starting with 'Vgm ' is rejected."""
        with pytest.raises(SignatureMismatch):
            parse_header(data)

    def test_truncated_header(self):
        """Test that a header shorter than 64 bytes is rejected."""
        with pytest.raises(OutOfBounds):
            parse_header(b"Vgm " + bytes(20))

    def test_legacy_data_offset(self):
        """Test that a zero data offset resolves to the legacy constant."""
        header = parse_header(build_vgm(stored_data_offset=0))

        assert header.data_offset == LEGACY_DATA_OFFSET == 0x40

    @pytest.mark.parametrize("stored", [0x0C, 0x4C, 0xCC])
    def test_relative_data_offset(self, stored):
        """Test that a non-zero data offset is relative to 0x34."""
        header = parse_header(build_vgm(stored_data_offset=stored))

        assert header.data_offset == 52 + stored
        assert resolve_data_offset(stored) == 52 + stored

    def test_zero_clock_defaults(self):
        """Test that a zero SN76489 clock falls back to NTSC."""
        header = parse_header(build_vgm(sn_clock=0))
        assert header.sn76489_clock == DEFAULT_SN76489_CLOCK == 3579545

    def test_relative_offsets(self):
        """Test absolute GD3 and loop offset helpers."""
        data = bytearray(build_vgm())
        struct.pack_into("<I", data, 0x14, 0x100)
        struct.pack_into("<I", data, 0x1C, 0x20)
        struct.pack_into("<I", data, 0x20, 500)
        header = parse_header(bytes(data))

        assert header.absolute_gd3_offset == 0x114
        assert header.absolute_loop_offset == 0x3C
        assert header.has_loop

    def test_no_gd3_offset(self):
        """Test that a zero GD3 offset stays zero."""
        assert parse_header(build_vgm()).absolute_gd3_offset == 0


class TestGd3Parser:
    """Test cases for GD3 metadata extraction."""

    def test_positional_strings(self):
        """Test that the first four strings fill the four fields."""
        tag = gd3_tag("Track", "Game", "System", "Author", "Extra")
        metadata, warnings = parse_gd3(b"\x00" * 8 + tag, 8)

        assert metadata.track_name == "Track"
        assert metadata.game_name == "Game"
        assert metadata.system_name == "System"
        assert metadata.author == "Author"
        assert warnings == []

    def test_missing_fields_default_empty(self):
        """Test that fewer than four strings leave the rest empty."""
        metadata, _ = parse_gd3(b"\xff" + gd3_tag("Only Track"), 1)

        assert metadata.track_name == "Only Track"
        assert metadata.game_name == ""
        assert metadata.author == ""

    def test_non_printable_bytes_dropped(self):
        """Test that bytes outside 32-126 are skipped."""
        tag = b"Gd3 " + b"Ab\x01c\x7f\x00"
        metadata, _ = parse_gd3(b"\xff" + tag, 1)

        assert metadata.track_name == "Abc"

    def test_zero_offset(self):
        """Test that a zero offset gives empty metadata without warnings."""
        metadata, warnings = parse_gd3(bytes(64), 0)

        assert metadata.is_empty
        assert warnings == []

    def test_offset_out_of_range(self):
        """Test that an offset past the end degrades to empty metadata."""
        metadata, warnings = parse_gd3(bytes(64), 1000)

        assert metadata.is_empty
        assert len(warnings) == 1

    def test_scan_window_limit(self):
        """Test that strings beyond 500 bytes are not collected."""
        tag = b"Gd3 " + b"A" * 600 + b"\x00" + b"Late\x00"
        metadata, _ = parse_gd3(b"\xff" + tag, 1)

        assert metadata.is_empty

    def test_truncated_tag(self):
        """Test a tag cut off before any terminator."""
        metadata, warnings = parse_gd3(b"\xff" + b"Gd3 Unterminated", 1)

        assert metadata.is_empty
        assert warnings


class TestVGMReader:
    """Test cases for the reader entry points."""

    def test_parse_with_metadata(self, tagged_vgm):
        """Test parsing header and GD3 together."""
        song = parse(tagged_vgm)

        assert song.metadata.track_name == "Green Hill"
        assert song.metadata.game_name == "Sonic"
        assert song.metadata.system_name == "Master System"
        assert song.metadata.author == "Yuzo"
        assert song.raw == tagged_vgm
        assert song.warnings == ()

    def test_parse_rejects_non_vgm(self):
        """Test that parse raises on a bad signature."""
        with pytest.raises(SignatureMismatch):
            parse(b"NESM\x1a" + bytes(200))

    def test_bad_gd3_offset_is_warning(self):
        """Test that a broken GD3 offset does not fail parsing."""
        data = bytearray(build_vgm())
        struct.pack_into("<I", data, 0x14, 0xFFFF)
        song = parse(bytes(data))

        assert song.metadata.is_empty
        assert len(song.warnings) == 1

    def test_read_file(self, vgm_file):
        """Test reading from disk."""
        song = VGMReader.read(vgm_file)
        assert song.metadata.author == "Yuzo"

    def test_read_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            VGMReader.read(tmp_path / "missing.vgm")

    def test_can_read(self, vgm_file, tmp_path):
        """Test signature sniffing."""
        other = tmp_path / "other.bin"
        other.write_bytes(b"RIFF")

        assert VGMReader.can_read(vgm_file)
        assert not VGMReader.can_read(other)
        assert not VGMReader.can_read(tmp_path / "missing.vgm")
