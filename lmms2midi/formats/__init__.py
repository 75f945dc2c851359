"""Format handlers for LMMS projects and MIDI files."""

from lmms2midi.formats.lmms import LmmsReader, ProjectLoadError
from lmms2midi.formats.midi import MidiWriter

__all__ = ["LmmsReader", "ProjectLoadError", "MidiWriter"]
