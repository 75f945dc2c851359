"""
Project converters for LMMS -> MIDI conversion.

Example:
    from lmms2midi.converters import convert_lmms_to_midi, ConversionOptions, LoopStyle

    options = ConversionOptions(loop_styles=[LoopStyle.MARKER])
    result = convert_lmms_to_midi("song.mmpz", "song.mid", options)
    for diagnostic in result.diagnostics:
        print(diagnostic)
"""

from lmms2midi.converters.channels import ChannelAssignment, ChannelSlot, assign_channels
from lmms2midi.converters.expansion import LoopStyle
from lmms2midi.converters.lmms_to_midi import (
    ConversionOptions,
    ConversionResult,
    LmmsToMidiConverter,
    convert_lmms_to_midi,
)
from lmms2midi.converters.scheduler import SchedulingError, schedule

__all__ = [
    "ChannelAssignment",
    "ChannelSlot",
    "assign_channels",
    "LoopStyle",
    "ConversionOptions",
    "ConversionResult",
    "LmmsToMidiConverter",
    "convert_lmms_to_midi",
    "SchedulingError",
    "schedule",
]
