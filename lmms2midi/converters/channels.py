"""
MIDI channel assignment for LMMS tracks.

Melodic SF2 tracks take channels from a fixed pool in track order; the
first drum kit track takes the General MIDI percussion channel. Tracks
that do not fit are dropped and reported, never doubled up on a channel.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from lmms2midi.models.diagnostic import Category, Diagnostic
from lmms2midi.models.project import Track, is_instrument_track, is_percussion_track

logger = logging.getLogger(__name__)

PERCUSSION_CHANNEL = 9
MELODIC_CHANNELS = tuple(ch for ch in range(16) if ch != PERCUSSION_CHANNEL)


@dataclass(frozen=True)
class ChannelSlot:
    """A MIDI channel bound to one track."""

    channel: int
    track: Track


@dataclass
class ChannelAssignment:
    """
    Result of assigning tracks to channels.

    Attributes:
        slots: Assigned (channel, track) pairs, ascending by channel
        dropped_instrument: Melodic tracks beyond the channel pool
        dropped_percussion: Percussion tracks beyond the first one
        diagnostics: One warning per overflowing category
    """

    slots: List[ChannelSlot] = field(default_factory=list)
    dropped_instrument: List[Track] = field(default_factory=list)
    dropped_percussion: List[Track] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def channels(self) -> List[int]:
        return [slot.channel for slot in self.slots]

    def track_for(self, channel: int) -> Track:
        """Get the track assigned to a channel."""
        for slot in self.slots:
            if slot.channel == channel:
                return slot.track
        raise KeyError(f"Channel {channel} is not assigned")


def assign_channels(tracks: Iterable[Track]) -> ChannelAssignment:
    """
    Assign SF2 tracks to MIDI channels.

    Args:
        tracks: SF2 tracks in document order

    Returns:
        ChannelAssignment with slots sorted by channel
    """
    tracks = list(tracks)
    instrument_tracks = [t for t in tracks if is_instrument_track(t)]
    percussion_tracks = [t for t in tracks if is_percussion_track(t)]

    result = ChannelAssignment()
    slots = [
        ChannelSlot(channel, track)
        for channel, track in zip(MELODIC_CHANNELS, instrument_tracks)
    ]
    if percussion_tracks:
        slots.append(ChannelSlot(PERCUSSION_CHANNEL, percussion_tracks[0]))

    result.slots = sorted(slots, key=lambda slot: slot.channel)
    result.dropped_instrument = instrument_tracks[len(MELODIC_CHANNELS) :]
    result.dropped_percussion = percussion_tracks[1:]

    if result.dropped_instrument:
        result.diagnostics.append(
            Diagnostic(
                Category.CHANNEL_OVERFLOW,
                f"Too many instrument tracks: {len(instrument_tracks)} found, "
                f"only {len(MELODIC_CHANNELS)} channels available; "
                f"{len(result.dropped_instrument)} dropped",
            )
        )
    if result.dropped_percussion:
        result.diagnostics.append(
            Diagnostic(
                Category.CHANNEL_OVERFLOW,
                f"Too many percussion tracks: {len(percussion_tracks)} found, "
                f"only 1 channel available; {len(result.dropped_percussion)} dropped",
            )
        )

    logger.debug(
        "Assigned %d tracks to channels %s", len(result.slots), result.channels
    )
    return result
