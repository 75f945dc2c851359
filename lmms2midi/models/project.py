"""
LMMS project data model.

Typed records for the parts of an LMMS project document that matter for
MIDI export: the song head, the instrument tracks with their SF2 player
settings, patterns, notes and the loop timeline.

LMMS tick resolution:

    +-------+-------+
    | ticks | note  |
    +-------+-------+
    |     3 | 1/64  |
    |     6 | 1/32  |
    |    12 | 1/16  |
    |    24 | 1/8   |
    |    48 | 1/4   |
    |    96 | 1/2   |
    |   192 | 1/1   |
    +-------+-------+
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

LMMS_TICKS_PER_BAR = 192

# One LMMS tick maps onto one MIDI tick
TICKS_PER_BEAT = LMMS_TICKS_PER_BAR // 4

# SoundFont bank reserved for drum kits
PERCUSSION_BANK = 128


@dataclass
class ProjectHead:
    """Global song settings from the <head> element."""

    bpm: int = 140
    time_signature_numerator: int = 4
    time_signature_denominator: int = 4
    master_pitch: int = 0  # Semitones, signed
    master_volume: int = 100


@dataclass
class Sf2Player:
    """SoundFont player instrument settings."""

    src: str = ""
    bank: int = 0
    patch: int = 0
    gain: float = 1.0


@dataclass
class InstrumentSettings:
    """
    Per-track instrument and mixer settings (<instrumenttrack>).

    Attributes:
        volume: Track volume, 0-100 (LMMS allows boosting up to 200)
        panning: Track panning, -100 (left) to 100 (right)
        pitch_range: Pitch bend range in semitones
        base_note: Key that plays the sample at its original pitch (57 = A4)
        use_master_pitch: Whether the song master pitch transposes this track
        pitch: Fine pitch in cents
        instrument_name: Plugin name, e.g. "sf2player"
        sf2_player: SF2 player settings, None for other instruments
    """

    volume: float = 100.0
    panning: float = 0.0
    pitch_range: int = 1
    base_note: int = 57
    use_master_pitch: bool = True
    pitch: float = 0.0
    instrument_name: str = ""
    sf2_player: Optional[Sf2Player] = None


@dataclass(frozen=True)
class Note:
    """A note inside a pattern. Positions are relative to the pattern start."""

    position: int
    length: int
    key: int
    volume: int = 100  # 0-200
    panning: int = 0


@dataclass
class Pattern:
    """A clip of notes placed on the song timeline."""

    position: int = 0
    notes: List[Note] = field(default_factory=list)
    name: str = ""
    muted: bool = False
    steps: int = 16


@dataclass
class Track:
    """An instrument track with its settings and patterns."""

    name: str = ""
    instrument: InstrumentSettings = field(default_factory=InstrumentSettings)
    patterns: List[Pattern] = field(default_factory=list)
    muted: bool = False
    solo: bool = False
    track_type: int = 0

    @property
    def sf2_player(self) -> Sf2Player:
        """Get the SF2 player of this track."""
        if self.instrument.sf2_player is None:
            raise ValueError(f"Not an SF2 track: {self.name!r}")
        return self.instrument.sf2_player

    @property
    def is_instrument_track(self) -> bool:
        return is_instrument_track(self)

    @property
    def is_percussion_track(self) -> bool:
        return is_percussion_track(self)

    @property
    def note_count(self) -> int:
        return sum(len(p.notes) for p in self.patterns)


@dataclass
class Timeline:
    """Song editor loop range, in ticks."""

    loop_start: int = 0
    loop_end: int = LMMS_TICKS_PER_BAR
    loop_enabled: bool = False


@dataclass
class Project:
    """A complete LMMS project."""

    head: ProjectHead = field(default_factory=ProjectHead)
    tracks: List[Track] = field(default_factory=list)
    timeline: Optional[Timeline] = None
    creator: str = "LMMS"
    creator_version: str = ""

    def sf2_tracks(self) -> Iterator[Track]:
        """Iterate SF2 player tracks in document order."""
        return (track for track in self.tracks if is_sf2_track(track))

    @property
    def length_ticks(self) -> int:
        """End tick of the last note in the song."""
        end = 0
        for track in self.tracks:
            for pattern in track.patterns:
                for note in pattern.notes:
                    end = max(end, pattern.position + note.position + note.length)
        return end


def is_sf2_track(track: Track) -> bool:
    """Check if a track plays through an SF2 player."""
    return track.instrument.sf2_player is not None


def is_instrument_track(track: Track) -> bool:
    """Check if a track is a melodic SF2 track."""
    return is_sf2_track(track) and track.sf2_player.bank != PERCUSSION_BANK


def is_percussion_track(track: Track) -> bool:
    """Check if a track is an SF2 drum kit track."""
    return is_sf2_track(track) and track.sf2_player.bank == PERCUSSION_BANK
