"""
Standard MIDI File writer.

Writes a scheduled event sequence as a type 0 MIDI file with mido.
"""

from pathlib import Path
from typing import Iterable, Union

import mido

from lmms2midi.models.event import ScheduledEvent
from lmms2midi.models.project import TICKS_PER_BEAT


class MidiWriter:
    """
    Writer for single-track MIDI files.

    Example:
        MidiWriter.write(result.scheduled, "song.mid")
    """

    MIDI_TYPE = 0

    def __init__(self, ticks_per_beat: int = TICKS_PER_BEAT):
        self.ticks_per_beat = ticks_per_beat

    @classmethod
    def write(
        cls,
        scheduled: Iterable[ScheduledEvent],
        filepath: Union[str, Path],
        ticks_per_beat: int = TICKS_PER_BEAT,
    ) -> mido.MidiFile:
        """
        Write scheduled events to a MIDI file.

        Args:
            scheduled: Delta-timed events in playback order
            filepath: Output .mid path
            ticks_per_beat: MIDI time division

        Returns:
            The written MidiFile
        """
        writer = cls(ticks_per_beat)
        midi = writer.build(scheduled)
        writer.save(midi, filepath)
        return midi

    def build(self, scheduled: Iterable[ScheduledEvent]) -> mido.MidiFile:
        """Build an in-memory MidiFile from scheduled events."""
        midi = mido.MidiFile(type=self.MIDI_TYPE, ticks_per_beat=self.ticks_per_beat)
        track = mido.MidiTrack()
        for item in scheduled:
            track.append(item.to_message())
        midi.tracks.append(track)
        return midi

    def save(self, midi: mido.MidiFile, filepath: Union[str, Path]) -> None:
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        midi.save(str(filepath))
