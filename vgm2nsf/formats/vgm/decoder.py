"""
VGM command stream decoder.

Walks the command stream once, keeps a running wait-sample counter and
emits events stamped with it.

Supported commands:
    0x4F dd          Game Gear stereo (ignored)
    0x50 dd          SN76489 write
    0x51 aa dd       YM2413 write (passthrough)
    0x61 nn nn       Wait n samples
    0x62             Wait 735 samples (1/60 s)
    0x63             Wait 882 samples (1/50 s)
    0x66             End of sound data
    0x67 66 tt ss ss ss ss [data]
                     Data block of type tt and size s
    0x7n             Wait n+1 samples

Any other byte is skipped on its own so decoding can resynchronize.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple, Union

from vgm2nsf.errors import OutOfBounds
from vgm2nsf.formats.vgm.cursor import BinaryCursor
from vgm2nsf.models.events import (
    EndEvent,
    Event,
    FmWriteEvent,
    NoiseEvent,
    PcmBlockEvent,
    ToneEvent,
)
from vgm2nsf.utils.dpcm import encode

logger = logging.getLogger(__name__)

# Upper bound on emitted events for malformed or endless streams
MAX_EVENTS = 10000

# Sample indices are stored as u32 in the NSF payload
MAX_SAMPLE_INDEX = 0xFFFFFFFF

NTSC_FRAME_SAMPLES = 735
PAL_FRAME_SAMPLES = 882

# Data block types below this value are uncompressed PCM streams
PCM_BLOCK_TYPE_LIMIT = 0x40

# SN76489 channel field value reserved for the noise channel
NOISE_CHANNEL = 3


class Command:
    GG_STEREO = 0x4F
    SN76489_WRITE = 0x50
    YM2413_WRITE = 0x51
    WAIT_N = 0x61
    WAIT_NTSC = 0x62
    WAIT_PAL = 0x63
    END = 0x66
    DATA_BLOCK = 0x67
    WAIT_SHORT_FIRST = 0x70
    WAIT_SHORT_LAST = 0x7F


@dataclass(frozen=True)
class DecodeResult:
    """
    Output of a decoding pass.

    Attributes:
        events: Events in timeline order
        ok: True when the stream ended with an End command
        skipped_opcodes: Number of unrecognized bytes skipped
        data_blocks: Number of data blocks seen (PCM or not)
        truncated: True when an operand ran past the end of the buffer
        capped: True when decoding stopped at the event cap or when the
            wait counter would pass MAX_SAMPLE_INDEX
        total_samples: Wait counter value when decoding stopped
    """

    events: Tuple[Event, ...]
    ok: bool
    skipped_opcodes: int = 0
    data_blocks: int = 0
    truncated: bool = False
    capped: bool = False
    total_samples: int = 0


def classify_sn76489(data: int, sample_index: int) -> Event:
    """
    Turn an SN76489 data byte into a tone or noise event.

    Bits 6-5 select the channel; channel value 3 is the noise channel.
    """
    channel = (data >> 5) & 0x03
    if channel == NOISE_CHANNEL:
        return NoiseEvent(sample_index=sample_index, register=data)

    return ToneEvent(
        sample_index=sample_index,
        channel=channel,
        period=data & 0x3F,
        volume=(data >> 3) & 0x03,
        data=data,
    )


class VGMCommandDecoder:
    """
    Decoder for the VGM command stream.

    Example:
        decoder = VGMCommandDecoder(enable_pcm=False)
        result = decoder.decode(data, header.data_offset)
        for event in result.events:
            print(event.type, event.sample_index)
    """

    def __init__(self, enable_pcm: bool = True, max_events: int = MAX_EVENTS):
        self.enable_pcm = enable_pcm
        self.max_events = max_events

    def decode(self, buffer: Union[bytes, BinaryCursor], data_offset: int) -> DecodeResult:
        """
        Decode the command stream starting at data_offset.

        Args:
            buffer: Raw VGM bytes or a cursor over them
            data_offset: Absolute offset of the first command

        Returns:
            DecodeResult with the events accumulated before decoding stopped
        """
        cursor = buffer if isinstance(buffer, BinaryCursor) else BinaryCursor(buffer)

        events: List[Event] = []
        offset = data_offset
        samples = 0
        skipped = 0
        blocks = 0
        ended = False
        truncated = False
        overflowed = False

        while offset < len(cursor) and len(events) < self.max_events:
            command = cursor.read_u8(offset)

            try:
                if command == Command.SN76489_WRITE:
                    data = cursor.read_u8(offset + 1)
                    events.append(classify_sn76489(data, samples))
                    offset += 2

                elif command == Command.YM2413_WRITE:
                    register = cursor.read_u8(offset + 1)
                    data = cursor.read_u8(offset + 2)
                    events.append(FmWriteEvent(samples, register, data))
                    offset += 3

                elif command == Command.WAIT_N:
                    samples += cursor.read_u16le(offset + 1)
                    offset += 3

                elif command == Command.WAIT_NTSC:
                    samples += NTSC_FRAME_SAMPLES
                    offset += 1

                elif command == Command.WAIT_PAL:
                    samples += PAL_FRAME_SAMPLES
                    offset += 1

                elif command == Command.END:
                    events.append(EndEvent(samples))
                    ended = True
                    break

                elif command == Command.DATA_BLOCK:
                    block_type = cursor.read_u8(offset + 2)
                    size = cursor.read_u32le(offset + 3)
                    payload = cursor.read_bytes(offset + 7, size)
                    blocks += 1
                    if self.enable_pcm and block_type < PCM_BLOCK_TYPE_LIMIT:
                        events.append(
                            PcmBlockEvent(
                                sample_index=samples,
                                delta_encoded=encode(payload),
                                block_type=block_type,
                                source_length=size,
                            )
                        )
                    else:
                        logger.debug(
                            "Data block type 0x%02X (%d bytes) at 0x%X not converted",
                            block_type,
                            size,
                            offset,
                        )
                    offset += 7 + size

                elif Command.WAIT_SHORT_FIRST <= command <= Command.WAIT_SHORT_LAST:
                    samples += (command & 0x0F) + 1
                    offset += 1

                elif command == Command.GG_STEREO:
                    offset += 2

                else:
                    skipped += 1
                    offset += 1

            except OutOfBounds as e:
                logger.warning("Command 0x%02X at 0x%X truncated: %s", command, offset, e)
                truncated = True
                break

            if samples > MAX_SAMPLE_INDEX:
                logger.warning(
                    "Wait counter passed 0x%X at 0x%X, stopping", MAX_SAMPLE_INDEX, offset
                )
                samples = MAX_SAMPLE_INDEX
                overflowed = True
                break

        capped = overflowed or (
            not ended and not truncated and len(events) >= self.max_events
        )
        if capped and not overflowed:
            logger.warning("Stopped decoding after %d events", self.max_events)
        if skipped:
            logger.info("Skipped %d unrecognized command byte(s)", skipped)

        return DecodeResult(
            events=tuple(events),
            ok=ended,
            skipped_opcodes=skipped,
            data_blocks=blocks,
            truncated=truncated,
            capped=capped,
            total_samples=samples,
        )


def decode(
    buffer: Union[bytes, BinaryCursor],
    data_offset: int,
    enable_pcm: bool = True,
    max_events: int = MAX_EVENTS,
) -> DecodeResult:
    """
    Decode a VGM command stream.

    Args:
        buffer: Raw VGM bytes
        data_offset: Absolute offset of the first command
        enable_pcm: Convert PCM data blocks to PcmBlock events
        max_events: Safety cap on emitted events

    Returns:
        DecodeResult
    """
    return VGMCommandDecoder(enable_pcm=enable_pcm, max_events=max_events).decode(
        buffer, data_offset
    )
