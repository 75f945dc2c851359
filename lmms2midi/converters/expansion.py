"""
Expansion of LMMS project data into absolute-time MIDI events.

Produces:
1. Header meta events (text, tempo, time signature)
2. One setup block per assigned channel (prefix, name, bank, program,
   volume, panning)
3. A note-on/note-off pair per note
4. Loop boundary events for each requested loop style
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from lmms2midi.converters.channels import ChannelSlot
from lmms2midi.models.diagnostic import Category, Diagnostic
from lmms2midi.models.event import TimedEvent
from lmms2midi.models.project import InstrumentSettings, Note, ProjectHead, Timeline
from lmms2midi.utils.remap import channel_panning, channel_volume, note_velocity
from lmms2midi.utils.validation import (
    is_midi_value,
    sanitize_text,
    validate_midi_value,
    validate_tempo,
)

logger = logging.getLogger(__name__)

# MIDI key of A4, the LMMS default base note plays at this pitch
A4_MIDI_KEY = 69


class CC:
    """Controller numbers."""

    BANK_SELECT_MSB = 0
    BANK_SELECT_LSB = 32
    VOLUME = 7
    PAN = 10

    # Loop point conventions
    LOOP_START = 111  # RPG Maker style, start only
    EMIDI_LOCAL_LOOP_START = 116
    EMIDI_LOCAL_LOOP_END = 117
    EMIDI_GLOBAL_LOOP_START = 118
    EMIDI_GLOBAL_LOOP_END = 119


# EMIDI loop start value 0 means loop forever; loop end is always 127
LOOP_COUNT_INFINITE = 0
LOOP_END_VALUE = 127

LOOP_START_MARKER = "loopStart"
LOOP_END_MARKER = "loopEnd"


class LoopStyle(str, Enum):
    """Loop point encodings understood by game music engines."""

    CC111 = "cc111"
    EMIDI_LOCAL = "emidi-local"
    EMIDI_GLOBAL = "emidi-global"
    MARKER = "marker"


Expansion = Tuple[List[TimedEvent], List[Diagnostic]]


def resolve_pitch(note: Note, settings: InstrumentSettings, head: ProjectHead) -> int:
    """
    Compute the MIDI key of a note.

    The result is not clamped and may fall outside 0-127.
    """
    pitch = note.key + A4_MIDI_KEY - settings.base_note
    if settings.use_master_pitch:
        pitch += head.master_pitch
    return pitch


def _text_meta(
    tick: int, meta_type: str, text: str, what: str, diagnostics: List[Diagnostic]
) -> TimedEvent:
    cleaned, replaced = sanitize_text(text)
    if replaced:
        diagnostics.append(
            Diagnostic(
                Category.NON_ASCII_TEXT,
                f"{what} {text!r} contains non-ASCII characters, written as {cleaned!r}",
            )
        )
    if meta_type in ("track_name", "instrument_name"):
        return TimedEvent.meta(tick, meta_type, name=cleaned)
    return TimedEvent.meta(tick, meta_type, text=cleaned)


def expand_header(
    head: ProjectHead,
    name: Optional[str] = None,
    copyright: Optional[str] = None,
    comment: Optional[str] = None,
) -> Expansion:
    """
    Create the song-wide meta events at tick 0.

    Text events are only written when given. Tempo is truncated to whole
    microseconds per quarter note.
    """
    events: List[TimedEvent] = []
    diagnostics: List[Diagnostic] = []

    if name:
        events.append(_text_meta(0, "track_name", name, "Song name", diagnostics))
    if copyright:
        events.append(_text_meta(0, "copyright", copyright, "Copyright", diagnostics))
    if comment:
        events.append(_text_meta(0, "text", comment, "Comment", diagnostics))

    validate_tempo(head.bpm)
    events.append(TimedEvent.meta(0, "set_tempo", tempo=60_000_000 // head.bpm))
    events.append(
        TimedEvent.meta(
            0,
            "time_signature",
            numerator=head.time_signature_numerator,
            denominator=head.time_signature_denominator,
        )
    )
    return events, diagnostics


def expand_channel_setup(slot: ChannelSlot) -> Expansion:
    """Create the instrument and mixer setup events of one channel at tick 0."""
    channel = slot.channel
    track = slot.track
    player = track.sf2_player
    settings = track.instrument

    events: List[TimedEvent] = []
    diagnostics: List[Diagnostic] = []

    events.append(TimedEvent.meta(0, "channel_prefix", channel=channel))
    if track.name:
        events.append(
            _text_meta(0, "instrument_name", track.name, "Track name", diagnostics)
        )

    validate_midi_value(player.patch, f"Patch of track {track.name!r}")
    bank_msb = (player.bank >> 7) & 0x7F
    bank_lsb = player.bank & 0x7F
    events.append(TimedEvent.control_change(0, channel, CC.BANK_SELECT_MSB, bank_msb))
    events.append(TimedEvent.control_change(0, channel, CC.BANK_SELECT_LSB, bank_lsb))
    events.append(TimedEvent.program_change(0, channel, player.patch))
    events.append(TimedEvent.control_change(0, channel, CC.VOLUME, channel_volume(settings.volume)))
    events.append(TimedEvent.control_change(0, channel, CC.PAN, channel_panning(settings.panning)))

    return events, diagnostics


def expand_notes(slot: ChannelSlot, head: ProjectHead) -> Expansion:
    """
    Create a note-on/note-off pair for every note of the slot's track.

    Notes whose resolved key falls outside 0-127 are skipped and reported
    once for the track.
    """
    channel = slot.channel
    track = slot.track

    events: List[TimedEvent] = []
    diagnostics: List[Diagnostic] = []
    skipped = 0

    for pattern in track.patterns:
        for note in pattern.notes:
            pitch = resolve_pitch(note, track.instrument, head)
            if not is_midi_value(pitch):
                skipped += 1
                continue

            start = pattern.position + note.position
            end = start + note.length
            velocity = note_velocity(note.volume)

            events.append(TimedEvent.note_on(start, channel, pitch, velocity))
            events.append(TimedEvent.note_off(end, channel, pitch, velocity, start_tick=start))

    if skipped:
        diagnostics.append(
            Diagnostic(
                Category.NOTE_OUT_OF_RANGE,
                f"Track {track.name!r}: {skipped} note(s) outside MIDI key range 0-127 skipped",
            )
        )

    logger.debug("Channel %d: %d note events from %r", channel, len(events), track.name)
    return events, diagnostics


def expand_loop_markers(
    timeline: Optional[Timeline], styles: Iterable[LoopStyle]
) -> List[TimedEvent]:
    """
    Create loop boundary events for each requested style.

    Styles are independent and may be combined; a style requested twice is
    emitted once. Nothing is emitted when the project has no timeline.
    """
    if timeline is None:
        return []

    start = timeline.loop_start
    end = timeline.loop_end
    events: List[TimedEvent] = []

    for style in dict.fromkeys(map(LoopStyle, styles)):
        if style is LoopStyle.CC111:
            events.append(TimedEvent.control_change(start, 0, CC.LOOP_START, LOOP_COUNT_INFINITE))
        elif style is LoopStyle.EMIDI_LOCAL:
            events.append(
                TimedEvent.control_change(start, 0, CC.EMIDI_LOCAL_LOOP_START, LOOP_COUNT_INFINITE)
            )
            events.append(
                TimedEvent.control_change(end, 0, CC.EMIDI_LOCAL_LOOP_END, LOOP_END_VALUE)
            )
        elif style is LoopStyle.EMIDI_GLOBAL:
            events.append(
                TimedEvent.control_change(
                    start, 0, CC.EMIDI_GLOBAL_LOOP_START, LOOP_COUNT_INFINITE
                )
            )
            events.append(
                TimedEvent.control_change(end, 0, CC.EMIDI_GLOBAL_LOOP_END, LOOP_END_VALUE)
            )
        elif style is LoopStyle.MARKER:
            events.append(TimedEvent.meta(start, "marker", text=LOOP_START_MARKER))
            events.append(TimedEvent.meta(end, "marker", text=LOOP_END_MARKER))
        else:
            raise ValueError(f"Unknown loop style: {style}")

    return events
