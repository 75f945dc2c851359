"""Data models for LMMS projects and MIDI events."""

from lmms2midi.models.project import (
    LMMS_TICKS_PER_BAR,
    TICKS_PER_BEAT,
    InstrumentSettings,
    Note,
    Pattern,
    Project,
    ProjectHead,
    Sf2Player,
    Timeline,
    Track,
    is_instrument_track,
    is_percussion_track,
    is_sf2_track,
)
from lmms2midi.models.event import EventKind, ScheduledEvent, TimedEvent
from lmms2midi.models.diagnostic import Category, Diagnostic, Severity

__all__ = [
    "LMMS_TICKS_PER_BAR",
    "TICKS_PER_BEAT",
    "InstrumentSettings",
    "Note",
    "Pattern",
    "Project",
    "ProjectHead",
    "Sf2Player",
    "Timeline",
    "Track",
    "is_instrument_track",
    "is_percussion_track",
    "is_sf2_track",
    "EventKind",
    "ScheduledEvent",
    "TimedEvent",
    "Category",
    "Diagnostic",
    "Severity",
]
