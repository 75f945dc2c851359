"""
lmms2midi - Export LMMS projects to Standard MIDI Files.

This library provides tools to:
- Read LMMS project files (.mmp, .mmpz)
- Map SF2 player tracks onto General MIDI channels
- Write a single-track MIDI file with optional loop points for game engines

Example usage:
    from lmms2midi import LmmsReader, LmmsToMidiConverter

    project = LmmsReader.read("song.mmpz")
    result = LmmsToMidiConverter().convert(project)
    result.save("song.mid")
"""

__version__ = "0.1.0"
__author__ = "lmms2midi Contributors"

from lmms2midi.formats.lmms.reader import LmmsReader, ProjectLoadError
from lmms2midi.formats.midi.writer import MidiWriter
from lmms2midi.converters.expansion import LoopStyle
from lmms2midi.converters.lmms_to_midi import (
    ConversionOptions,
    ConversionResult,
    LmmsToMidiConverter,
    convert_lmms_to_midi,
)
from lmms2midi.models.project import Project, Track

__all__ = [
    "LmmsReader",
    "ProjectLoadError",
    "MidiWriter",
    "LoopStyle",
    "ConversionOptions",
    "ConversionResult",
    "LmmsToMidiConverter",
    "convert_lmms_to_midi",
    "Project",
    "Track",
]
