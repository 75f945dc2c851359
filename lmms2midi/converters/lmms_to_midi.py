"""
LMMS to MIDI converter.

Converts LMMS projects (.mmp/.mmpz) to type 0 Standard MIDI Files.

The conversion process:
1. Assign SF2 tracks to MIDI channels (15 melodic + 1 percussion)
2. Expand header, channel setup, notes and loop points into events
3. Sort all events into playback order and compute delta times
4. Check the result for polyphony and note overlap problems
5. Write the MIDI file
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

import mido

from lmms2midi.analysis.validator import validate_events
from lmms2midi.converters.channels import ChannelAssignment, assign_channels
from lmms2midi.converters.expansion import (
    LoopStyle,
    expand_channel_setup,
    expand_header,
    expand_loop_markers,
    expand_notes,
)
from lmms2midi.converters.scheduler import schedule
from lmms2midi.formats.lmms.reader import LmmsReader
from lmms2midi.formats.midi.writer import MidiWriter
from lmms2midi.models.diagnostic import Diagnostic
from lmms2midi.models.event import EventKind, ScheduledEvent, TimedEvent
from lmms2midi.models.project import TICKS_PER_BEAT, Project

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """
    User options for a conversion.

    Attributes:
        loop_styles: Loop point encodings to write, any combination
        name: Song name meta event
        copyright: Copyright meta event
        comment: Text meta event
    """

    loop_styles: Sequence[LoopStyle] = ()
    name: Optional[str] = None
    copyright: Optional[str] = None
    comment: Optional[str] = None


@dataclass
class ConversionResult:
    """Output of a conversion."""

    scheduled: List[ScheduledEvent]
    assignment: ChannelAssignment
    diagnostics: List[Diagnostic] = field(default_factory=list)
    ticks_per_beat: int = TICKS_PER_BEAT

    @property
    def note_count(self) -> int:
        return sum(1 for item in self.scheduled if item.event.kind == EventKind.NOTE_ON)

    @property
    def length_ticks(self) -> int:
        return sum(item.delta for item in self.scheduled)

    def to_midi_file(self) -> mido.MidiFile:
        """Build the MIDI file in memory."""
        return MidiWriter(self.ticks_per_beat).build(self.scheduled)

    def save(self, filepath: Union[str, Path]) -> mido.MidiFile:
        """Write the MIDI file."""
        return MidiWriter.write(self.scheduled, filepath, self.ticks_per_beat)


class LmmsToMidiConverter:
    """
    Converter from an LMMS Project to a scheduled MIDI event sequence.

    Holds no state between conversions; one instance can convert any
    number of projects.
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()

    def convert(self, project: Project) -> ConversionResult:
        """
        Convert a project.

        Args:
            project: Loaded LMMS project

        Returns:
            ConversionResult with scheduled events and diagnostics

        Raises:
            ValidationError: If the tempo or a patch cannot be written
            InternalConsistencyError: If the converter breaks an invariant
        """
        options = self.options
        diagnostics: List[Diagnostic] = []
        events: List[TimedEvent] = []

        assignment = assign_channels(project.sf2_tracks())
        diagnostics.extend(assignment.diagnostics)

        header, header_diagnostics = expand_header(
            project.head, options.name, options.copyright, options.comment
        )
        events.extend(header)
        diagnostics.extend(header_diagnostics)

        for slot in assignment.slots:
            setup, setup_diagnostics = expand_channel_setup(slot)
            events.extend(setup)
            diagnostics.extend(setup_diagnostics)

        for slot in assignment.slots:
            notes, note_diagnostics = expand_notes(slot, project.head)
            events.extend(notes)
            diagnostics.extend(note_diagnostics)

        events.extend(expand_loop_markers(project.timeline, options.loop_styles))

        scheduled = schedule(events)
        diagnostics.extend(validate_events(scheduled))

        logger.debug(
            "Converted %d channels into %d events with %d diagnostics",
            len(assignment.slots),
            len(scheduled),
            len(diagnostics),
        )
        return ConversionResult(
            scheduled=scheduled,
            assignment=assignment,
            diagnostics=diagnostics,
        )


def convert_lmms_to_midi(
    source_path: Union[str, Path],
    output_path: Union[str, Path],
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    """
    Convert an LMMS project file to a MIDI file.

    Args:
        source_path: Path to .mmp or .mmpz project
        output_path: Path to output .mid file
        options: Conversion options

    Returns:
        ConversionResult of the written file
    """
    project = LmmsReader.read(source_path)
    result = LmmsToMidiConverter(options).convert(project)
    result.save(output_path)
    return result
