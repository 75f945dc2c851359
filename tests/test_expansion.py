"""Tests for event expansion and value remapping."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_track
from lmms2midi.converters.channels import ChannelSlot
from lmms2midi.converters.expansion import (
    CC,
    LoopStyle,
    expand_channel_setup,
    expand_header,
    expand_loop_markers,
    expand_notes,
    resolve_pitch,
)
from lmms2midi.models.diagnostic import Category
from lmms2midi.models.event import EventKind
from lmms2midi.models.project import InstrumentSettings, Note, Pattern, ProjectHead, Timeline
from lmms2midi.utils.remap import (
    Curve,
    channel_panning,
    channel_volume,
    note_velocity,
    remap,
)
from lmms2midi.utils.validation import ValidationError


class TestRemap:
    """Test cases for range remapping."""

    def test_note_velocity(self):
        assert note_velocity(0) == 0
        assert note_velocity(100) == 63
        assert note_velocity(200) == 127

    def test_input_clamped(self):
        assert remap(-10, 0, 200, 0, 127) == 0
        assert remap(500, 0, 200, 0, 127) == 127

    def test_channel_volume_sqrt_curve(self):
        assert channel_volume(0) == 0
        assert channel_volume(25) == 63
        assert channel_volume(100) == 127
        assert channel_volume(150) == 127
        assert channel_volume(50) > remap(50, 0, 100, 0, 127, Curve.LINEAR)

    def test_channel_panning(self):
        assert channel_panning(-100) == 0
        assert channel_panning(0) == 63
        assert channel_panning(100) == 127

    def test_empty_source_range(self):
        with pytest.raises(ValueError):
            remap(1, 5, 5, 0, 127)


class TestResolvePitch:
    """Test cases for note key transformation."""

    def test_base_note_offset(self):
        settings = InstrumentSettings(base_note=69)
        assert resolve_pitch(Note(0, 48, 60), settings, ProjectHead(master_pitch=0)) == 60

    def test_master_pitch_applied(self):
        settings = InstrumentSettings(base_note=69, use_master_pitch=True)
        assert resolve_pitch(Note(0, 48, 60), settings, ProjectHead(master_pitch=2)) == 62

    def test_master_pitch_ignored(self):
        settings = InstrumentSettings(base_note=69, use_master_pitch=False)
        assert resolve_pitch(Note(0, 48, 60), settings, ProjectHead(master_pitch=2)) == 60

    def test_negative_master_pitch(self):
        settings = InstrumentSettings(base_note=57)
        assert resolve_pitch(Note(0, 48, 57), settings, ProjectHead(master_pitch=-12)) == 57


class TestExpandNotes:
    """Test cases for note event expansion."""

    def test_note_pair(self):
        track = make_track(notes=[Note(24, 48, 60, 100)], pattern_position=192)
        events, diagnostics = expand_notes(ChannelSlot(3, track), ProjectHead())

        assert diagnostics == []
        note_on, note_off = events
        assert note_on.kind == EventKind.NOTE_ON
        assert note_on.tick == 216
        assert note_on.start_tick == 216
        assert note_on.channel == 3
        assert note_on.note == 60
        assert note_on.velocity == 63

        assert note_off.kind == EventKind.NOTE_OFF
        assert note_off.tick == 264
        assert note_off.start_tick == 216
        assert note_off.velocity == 63

    def test_out_of_range_notes_skipped(self):
        track = make_track(
            "Low",
            notes=[Note(0, 10, 5), Note(0, 10, 60), Note(10, 10, 200)],
            base_note=120,
        )
        events, diagnostics = expand_notes(ChannelSlot(0, track), ProjectHead())

        assert len(events) == 2
        assert events[0].note == 9
        assert len(diagnostics) == 1
        assert diagnostics[0].category == Category.NOTE_OUT_OF_RANGE
        assert "2 note(s)" in diagnostics[0].message

    def test_overlapping_patterns(self):
        track = make_track(notes=[Note(0, 96, 60)])
        track.patterns.append(Pattern(position=48, notes=[Note(0, 10, 64)]))
        events, _ = expand_notes(ChannelSlot(0, track), ProjectHead())

        assert [e.tick for e in events] == [0, 96, 48, 58]


class TestChannelSetup:
    """Test cases for the per-channel setup block."""

    def test_setup_block(self):
        track = make_track("Strings", bank=130, patch=48, volume=100, panning=-100)
        events, diagnostics = expand_channel_setup(ChannelSlot(5, track))

        assert diagnostics == []
        assert [e.kind for e in events] == [
            EventKind.META,
            EventKind.META,
            EventKind.CONTROL_CHANGE,
            EventKind.CONTROL_CHANGE,
            EventKind.PROGRAM_CHANGE,
            EventKind.CONTROL_CHANGE,
            EventKind.CONTROL_CHANGE,
        ]
        assert events[0].meta_type == "channel_prefix"
        assert events[0].meta_attrs == {"channel": 5}
        assert events[1].meta_attrs == {"name": "Strings"}
        assert (events[2].data1, events[2].data2) == (CC.BANK_SELECT_MSB, 1)
        assert (events[3].data1, events[3].data2) == (CC.BANK_SELECT_LSB, 2)
        assert events[4].data1 == 48
        assert (events[5].data1, events[5].data2) == (CC.VOLUME, 127)
        assert (events[6].data1, events[6].data2) == (CC.PAN, 0)
        assert all(e.tick == 0 for e in events)
        assert all(e.channel == 5 for e in events[2:])

    def test_unnamed_track_has_no_name_event(self):
        events, _ = expand_channel_setup(ChannelSlot(0, make_track("")))
        assert sum(1 for e in events if e.kind == EventKind.META) == 1

    def test_non_ascii_name_warns(self):
        events, diagnostics = expand_channel_setup(ChannelSlot(0, make_track("Flöte")))

        assert events[1].meta_attrs == {"name": "Fl?te"}
        assert len(diagnostics) == 1
        assert diagnostics[0].category == Category.NON_ASCII_TEXT

    def test_invalid_patch_rejected(self):
        with pytest.raises(ValidationError):
            expand_channel_setup(ChannelSlot(0, make_track(patch=200)))


class TestHeader:
    """Test cases for song-wide meta events."""

    def test_tempo_only(self):
        events, diagnostics = expand_header(ProjectHead(bpm=120))

        assert [e.meta_type for e in events] == ["set_tempo", "time_signature"]
        assert events[0].meta_attrs == {"tempo": 500000}
        assert diagnostics == []

    def test_tempo_truncated(self):
        events, _ = expand_header(ProjectHead(bpm=140))
        assert events[0].meta_attrs["tempo"] == 428571

    def test_text_events(self):
        events, _ = expand_header(ProjectHead(), name="Song", copyright="(c) me", comment="hi")

        assert [e.meta_type for e in events[:3]] == ["track_name", "copyright", "text"]
        assert events[0].meta_attrs == {"name": "Song"}
        assert events[1].meta_attrs == {"text": "(c) me"}

    def test_invalid_tempo(self):
        with pytest.raises(ValidationError):
            expand_header(ProjectHead(bpm=0))


class TestLoopMarkers:
    """Test cases for loop point events."""

    timeline = Timeline(loop_start=192, loop_end=768)

    def test_no_timeline(self):
        assert expand_loop_markers(None, [LoopStyle.MARKER]) == []

    def test_cc111_start_only(self):
        events = expand_loop_markers(self.timeline, [LoopStyle.CC111])

        assert len(events) == 1
        assert (events[0].tick, events[0].data1, events[0].data2) == (192, 111, 0)

    def test_emidi_local(self):
        events = expand_loop_markers(self.timeline, [LoopStyle.EMIDI_LOCAL])
        assert [(e.tick, e.data1, e.data2) for e in events] == [(192, 116, 0), (768, 117, 127)]

    def test_emidi_global(self):
        events = expand_loop_markers(self.timeline, [LoopStyle.EMIDI_GLOBAL])
        assert [(e.tick, e.data1, e.data2) for e in events] == [(192, 118, 0), (768, 119, 127)]

    def test_markers(self):
        events = expand_loop_markers(self.timeline, [LoopStyle.MARKER])

        assert [e.meta_type for e in events] == ["marker", "marker"]
        assert [(e.tick, e.meta_attrs["text"]) for e in events] == [
            (192, "loopStart"),
            (768, "loopEnd"),
        ]

    def test_styles_combine(self):
        events = expand_loop_markers(self.timeline, [LoopStyle.MARKER, LoopStyle.EMIDI_GLOBAL])

        assert len(events) == 4
        assert sorted(e.tick for e in events) == [192, 192, 768, 768]

    def test_string_styles_accepted(self):
        events = expand_loop_markers(self.timeline, ["cc111"])
        assert events[0].data1 == CC.LOOP_START

    def test_repeated_style_emitted_once(self):
        events = expand_loop_markers(
            self.timeline, [LoopStyle.MARKER, "marker", LoopStyle.CC111, LoopStyle.MARKER]
        )

        assert [e.meta_attrs.get("text") for e in events] == ["loopStart", "loopEnd", None]
        assert events[2].data1 == CC.LOOP_START
