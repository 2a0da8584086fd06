"""
VGM to NSF converter.

Runs the full pipeline on an already parsed song:

1. Decode the command stream into timeline events
2. Translate SN76489 writes and PCM blocks into NES channel tracks
3. Detect a loop point over the event amplitudes (optional)
4. Assemble the NSF header and channel payload

Every stage produces new immutable data, so one converter can be used
for any number of songs.
"""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from vgm2nsf.analysis.loop_detector import DEFAULT_THRESHOLD, amplitude_sequence, detect
from vgm2nsf.converters.translator import translate_events
from vgm2nsf.errors import ConversionError
from vgm2nsf.formats.nsf.writer import NSFWriter, NsfFile
from vgm2nsf.formats.vgm.decoder import DecodeResult, VGMCommandDecoder
from vgm2nsf.formats.vgm.reader import VGMReader
from vgm2nsf.models.events import NoiseEvent, ToneEvent
from vgm2nsf.models.song import ParsedSong
from vgm2nsf.models.track import LoopPoint, TranslatedTrack
from vgm2nsf.utils.validation import ValidationError, validate_loop_threshold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOptions:
    """
    Options for a single conversion.

    Attributes:
        preserve_noise_channel: Translate SN76489 noise writes
        enable_pcm: Convert PCM data blocks to DPCM
        detect_loops: Search for a loop point
        loop_threshold: Correlation a loop must exceed (0.5-1.0)
    """

    preserve_noise_channel: bool = True
    enable_pcm: bool = True
    detect_loops: bool = True
    loop_threshold: float = DEFAULT_THRESHOLD


@dataclass(frozen=True)
class ConversionResult:
    """
    NSF output plus the intermediate data of a conversion.

    Attributes:
        nsf: Assembled NSF file
        track: Translated channel tracks
        decode: Decoder output and diagnostics
    """

    nsf: NsfFile
    track: TranslatedTrack
    decode: DecodeResult


class VGMToNSFConverter:
    """
    Converter from parsed VGM songs to NSF files.

    Example:
        song = VGMReader.read("stage1.vgm")
        converter = VGMToNSFConverter(ConversionOptions(enable_pcm=False))
        nsf = converter.convert(song)
        nsf.write("stage1.nsf")
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()

    def convert(self, song: ParsedSong) -> NsfFile:
        """
        Convert a parsed song to NSF.

        Args:
            song: Result of parse()

        Returns:
            NsfFile

        Raises:
            ConversionError: If the options are invalid
        """
        return self.convert_detailed(song).nsf

    def convert_detailed(self, song: ParsedSong) -> ConversionResult:
        """Convert a parsed song and keep the intermediate results."""
        try:
            validate_loop_threshold(self.options.loop_threshold)
        except ValidationError as e:
            raise ConversionError(str(e)) from e

        decoded = VGMCommandDecoder(enable_pcm=self.options.enable_pcm).decode(
            song.raw, song.header.data_offset
        )
        if not decoded.ok:
            logger.warning(
                "Command stream did not end cleanly (truncated=%s, capped=%s)",
                decoded.truncated,
                decoded.capped,
            )

        track = translate_events(
            decoded.events,
            preserve_noise_channel=self.options.preserve_noise_channel,
            total_samples=decoded.total_samples,
        )

        if self.options.detect_loops:
            loop_point = self.find_loop(decoded)
            if loop_point is not None:
                track = dataclasses.replace(track, loop_point=loop_point)

        nsf = NSFWriter().assemble(track, song.metadata)

        logger.info(
            "Converted %d events into %d NES entries (%d bytes)",
            len(decoded.events),
            track.entry_count,
            len(nsf),
        )
        return ConversionResult(nsf=nsf, track=track, decode=decoded)

    def find_loop(self, decoded: DecodeResult) -> Optional[LoopPoint]:
        """
        Detect a loop over the decoded tone/noise amplitudes.

        The detector works on positions in the amplitude sequence; the
        returned loop point is mapped back to a sample index.
        """
        amplitude_events = [
            e for e in decoded.events if isinstance(e, (ToneEvent, NoiseEvent))
        ]
        found = detect(amplitude_sequence(amplitude_events), self.options.loop_threshold)
        if found is None:
            return None

        return dataclasses.replace(
            found,
            offset=amplitude_events[found.event_index].sample_index,
        )


def convert(song: ParsedSong, options: Optional[ConversionOptions] = None) -> NsfFile:
    """
    Convert a parsed song to an NSF file.

    Args:
        song: Result of parse()
        options: Conversion options (defaults when None)

    Returns:
        NsfFile

    Raises:
        ConversionError: If the options are invalid
    """
    return VGMToNSFConverter(options).convert(song)


def convert_file(
    source: Union[str, Path],
    output: Union[str, Path],
    options: Optional[ConversionOptions] = None,
) -> NsfFile:
    """
    Convert a VGM file on disk to an NSF file on disk.

    Args:
        source: Input .vgm path
        output: Output .nsf path
        options: Conversion options

    Returns:
        The written NsfFile
    """
    song = VGMReader.read(source)
    nsf = convert(song, options)
    nsf.write(output)
    return nsf
