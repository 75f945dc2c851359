"""Tests for MIDI channel assignment."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_track
from lmms2midi.converters.channels import (
    MELODIC_CHANNELS,
    PERCUSSION_CHANNEL,
    assign_channels,
)
from lmms2midi.models.diagnostic import Category
from lmms2midi.models.project import is_instrument_track, is_percussion_track, is_sf2_track


class TestTrackPredicates:
    """Test cases for track classification."""

    def test_melodic_track(self):
        track = make_track(bank=0)
        assert is_sf2_track(track)
        assert is_instrument_track(track)
        assert not is_percussion_track(track)

    def test_percussion_track(self):
        track = make_track(bank=128)
        assert is_percussion_track(track)
        assert not is_instrument_track(track)
        assert track.is_percussion_track

    def test_non_sf2_track(self):
        track = make_track(sf2=False)
        assert not is_sf2_track(track)
        assert not is_instrument_track(track)
        assert not is_percussion_track(track)


class TestChannelAssignment:
    """Test cases for assign_channels."""

    def test_pool_excludes_percussion_channel(self):
        assert len(MELODIC_CHANNELS) == 15
        assert PERCUSSION_CHANNEL not in MELODIC_CHANNELS
        assert list(MELODIC_CHANNELS) == sorted(MELODIC_CHANNELS)

    def test_melodic_tracks_fill_pool_in_track_order(self):
        tracks = [make_track(f"T{i}") for i in range(11)]
        assignment = assign_channels(tracks)

        assert assignment.channels == [0, 1, 2, 3, 4, 5, 6, 7, 8, 10, 11]
        assert assignment.track_for(10).name == "T9"
        assert assignment.diagnostics == []

    def test_percussion_gets_reserved_channel(self):
        drums = make_track("Drums", bank=128)
        assignment = assign_channels([drums, make_track("Bass")])

        assert assignment.track_for(PERCUSSION_CHANNEL) is drums
        assert assignment.track_for(0).name == "Bass"

    def test_slots_sorted_by_channel(self):
        tracks = [make_track("Drums", bank=128)] + [make_track(f"T{i}") for i in range(12)]
        assignment = assign_channels(tracks)

        assert assignment.channels == sorted(assignment.channels)
        assert assignment.slots[9].track.name == "Drums"

    def test_capacity_overflow(self):
        """20 melodic + 2 percussion tracks keep 15 + 1 and warn twice."""
        melodic = [make_track(f"M{i}") for i in range(20)]
        percussion = [make_track(f"P{i}", bank=128) for i in range(2)]
        assignment = assign_channels(melodic + percussion)

        assert len(assignment.slots) == 16
        assert [t.name for t in assignment.dropped_instrument] == [f"M{i}" for i in range(15, 20)]
        assert [t.name for t in assignment.dropped_percussion] == ["P1"]
        assert len(assignment.diagnostics) == 2
        assert all(d.category == Category.CHANNEL_OVERFLOW for d in assignment.diagnostics)
        assert "20" in assignment.diagnostics[0].message
        assert "2" in assignment.diagnostics[1].message

    def test_non_sf2_tracks_ignored(self):
        assignment = assign_channels([make_track("Osc", sf2=False), make_track("Keys")])

        assert [slot.track.name for slot in assignment.slots] == ["Keys"]
