#!/usr/bin/env python3
"""
Example: Basic VGM to NSF conversion

Shows how to parse a VGM file, inspect the decoded stream and write an NSF.
"""

import sys

sys.path.insert(0, "..")

from vgm2nsf import ConversionOptions, VGMToNSFConverter, parse


def main():
    if len(sys.argv) < 2:
        print("Usage: basic_conversion.py <file.vgm> [out.nsf]")
        return 1

    with open(sys.argv[1], "rb") as f:
        song = parse(f.read())

    # Header and metadata
    print(f"Track: {song.metadata.track_name or 'N/A'}")
    print(f"Game: {song.metadata.game_name or 'N/A'}")
    print(f"Version: {song.header.version_string}")
    print(f"Length: {song.header.duration_seconds:.1f}s")
    print()

    # Convert without PCM, keep the intermediate results
    converter = VGMToNSFConverter(ConversionOptions(enable_pcm=False))
    result = converter.convert_detailed(song)

    print(f"Decoded events: {len(result.decode.events)}")
    print(f"Skipped opcodes: {result.decode.skipped_opcodes}")
    for channel, entries in result.track.channels().items():
        print(f"  {channel.value}: {len(entries)} entries")
    print(f"Unmapped events: {len(result.track.unmapped)}")

    if result.track.loop_point:
        print(f"Loop at sample {result.track.loop_point.offset}")

    output = sys.argv[2] if len(sys.argv) > 2 else "out.nsf"
    result.nsf.write(output)
    print(f"Wrote {len(result.nsf)} bytes to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
