"""Data models for VGM songs, decoded events and NES tracks."""

from vgm2nsf.models.song import SongHeader, Gd3Metadata, ParsedSong
from vgm2nsf.models.events import (
    Event,
    EventType,
    ToneEvent,
    NoiseEvent,
    FmWriteEvent,
    PcmBlockEvent,
    EndEvent,
)
from vgm2nsf.models.track import NesChannel, TrackEntry, LoopPoint, TranslatedTrack

__all__ = [
    "SongHeader",
    "Gd3Metadata",
    "ParsedSong",
    "Event",
    "EventType",
    "ToneEvent",
    "NoiseEvent",
    "FmWriteEvent",
    "PcmBlockEvent",
    "EndEvent",
    "NesChannel",
    "TrackEntry",
    "LoopPoint",
    "TranslatedTrack",
]
