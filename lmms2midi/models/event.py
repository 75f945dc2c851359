"""
Timed MIDI event data models.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional, Union

import mido


class EventKind(IntEnum):
    """Event payload variants."""

    META = 0
    CONTROL_CHANGE = 1
    PROGRAM_CHANGE = 2
    NOTE_ON = 3
    NOTE_OFF = 4


@dataclass
class TimedEvent:
    """
    A MIDI event at an absolute tick.

    Attributes:
        tick: Absolute time in ticks since the start of the song
        kind: Payload variant
        channel: MIDI channel (0-15, channel messages only)
        data1: Note number, CC number or program
        data2: Velocity or CC value
        meta_type: mido meta message type (META only)
        meta_attrs: mido meta message attributes (META only)
        start_tick: Onset of the owning note for NOTE_OFF, else the event tick
    """

    tick: int
    kind: EventKind
    channel: int = 0
    data1: int = 0
    data2: int = 0
    meta_type: Optional[str] = None
    meta_attrs: Dict[str, Any] = field(default_factory=dict)
    start_tick: Optional[int] = None

    def __post_init__(self) -> None:
        if self.start_tick is None:
            self.start_tick = self.tick

    @property
    def note(self) -> int:
        """Get note number for note events."""
        return self.data1

    @property
    def velocity(self) -> int:
        """Get velocity for note events."""
        return self.data2

    def to_message(self, delta: int = 0) -> Union[mido.Message, mido.MetaMessage]:
        """
        Convert to a mido message.

        Args:
            delta: Delta time in ticks

        Returns:
            mido Message or MetaMessage
        """
        if self.kind == EventKind.META:
            return mido.MetaMessage(self.meta_type, time=delta, **self.meta_attrs)
        elif self.kind == EventKind.CONTROL_CHANGE:
            return mido.Message(
                "control_change",
                channel=self.channel,
                control=self.data1,
                value=self.data2,
                time=delta,
            )
        elif self.kind == EventKind.PROGRAM_CHANGE:
            return mido.Message(
                "program_change", channel=self.channel, program=self.data1, time=delta
            )
        elif self.kind == EventKind.NOTE_ON:
            return mido.Message(
                "note_on", channel=self.channel, note=self.data1, velocity=self.data2, time=delta
            )
        elif self.kind == EventKind.NOTE_OFF:
            return mido.Message(
                "note_off", channel=self.channel, note=self.data1, velocity=self.data2, time=delta
            )
        raise ValueError(f"Unknown event kind: {self.kind}")

    @classmethod
    def meta(cls, tick: int, meta_type: str, **attrs: Any) -> "TimedEvent":
        """Create a meta event."""
        return cls(tick=tick, kind=EventKind.META, meta_type=meta_type, meta_attrs=attrs)

    @classmethod
    def control_change(cls, tick: int, channel: int, cc: int, value: int) -> "TimedEvent":
        """Create a control change event."""
        return cls(
            tick=tick, kind=EventKind.CONTROL_CHANGE, channel=channel, data1=cc, data2=value
        )

    @classmethod
    def program_change(cls, tick: int, channel: int, program: int) -> "TimedEvent":
        """Create a program change event."""
        return cls(tick=tick, kind=EventKind.PROGRAM_CHANGE, channel=channel, data1=program)

    @classmethod
    def note_on(cls, tick: int, channel: int, note: int, velocity: int) -> "TimedEvent":
        """Create a note-on event."""
        return cls(tick=tick, kind=EventKind.NOTE_ON, channel=channel, data1=note, data2=velocity)

    @classmethod
    def note_off(
        cls, tick: int, channel: int, note: int, velocity: int, start_tick: int
    ) -> "TimedEvent":
        """Create a note-off event belonging to a note that started at start_tick."""
        return cls(
            tick=tick,
            kind=EventKind.NOTE_OFF,
            channel=channel,
            data1=note,
            data2=velocity,
            start_tick=start_tick,
        )


@dataclass
class ScheduledEvent:
    """An event with its delta time from the previous event."""

    delta: int
    event: TimedEvent

    @property
    def tick(self) -> int:
        return self.event.tick

    def to_message(self) -> Union[mido.Message, mido.MetaMessage]:
        return self.event.to_message(self.delta)
