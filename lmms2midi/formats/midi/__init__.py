"""Standard MIDI File format handlers."""

from lmms2midi.formats.midi.writer import MidiWriter

__all__ = ["MidiWriter"]
