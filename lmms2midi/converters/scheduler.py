"""
Event scheduling: global ordering and delta time computation.

All events of a song are merged into one sequence ordered by:

1. Absolute tick
2. Start tick of the owning note (note-offs of earlier notes first)
3. Meta events before channel events
4. Controller and program changes before notes
5. Note-on before note-off
6. Emission order

Rule 2 puts a note-off ahead of a note-on of the same key at the same tick,
so back-to-back notes never look doubled to a player. Rules 3 and 4 make
sure a channel is configured before its first note sounds.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from lmms2midi.models.event import EventKind, ScheduledEvent, TimedEvent
from lmms2midi.utils.validation import InternalConsistencyError

logger = logging.getLogger(__name__)


class SchedulingError(InternalConsistencyError):
    """Raised when the sorted sequence goes backwards in time."""

    pass


def priority(kind: EventKind) -> int:
    """Tie-break rank of an event kind at the same tick and start tick."""
    if kind == EventKind.META:
        return 0
    elif kind in (EventKind.CONTROL_CHANGE, EventKind.PROGRAM_CHANGE):
        return 1
    elif kind == EventKind.NOTE_ON:
        return 2
    elif kind == EventKind.NOTE_OFF:
        return 3
    raise ValueError(f"Unknown event kind: {kind}")


def sort_key(event: TimedEvent, index: int = 0) -> Tuple[int, int, int, int]:
    """Total ordering key of an event emitted at position index."""
    return (event.tick, event.start_tick, priority(event.kind), index)


def sort_events(events: Iterable[TimedEvent]) -> List[TimedEvent]:
    """Sort events into playback order."""
    indexed = list(enumerate(events))
    indexed.sort(key=lambda item: sort_key(item[1], item[0]))
    return [event for _, event in indexed]


def compute_deltas(events: Sequence[TimedEvent]) -> List[ScheduledEvent]:
    """
    Compute delta times for events already in playback order.

    The first delta is measured from tick 0.

    Raises:
        SchedulingError: If an event comes before its predecessor
    """
    scheduled = []
    previous = 0
    for index, event in enumerate(events):
        delta = event.tick - previous
        if delta < 0:
            raise SchedulingError(
                f"Event {index} at tick {event.tick} comes after tick {previous}"
            )
        scheduled.append(ScheduledEvent(delta, event))
        previous = event.tick
    return scheduled


def schedule(events: Iterable[TimedEvent]) -> List[ScheduledEvent]:
    """
    Merge, order and delta-time a song's events.

    An end_of_track meta event is appended at the last event's tick.

    Args:
        events: All events in emission order

    Returns:
        Delta-timed events ready for writing
    """
    ordered = sort_events(events)
    end_tick = ordered[-1].tick if ordered else 0
    ordered.append(TimedEvent.meta(end_tick, "end_of_track"))

    scheduled = compute_deltas(ordered)
    logger.debug("Scheduled %d events, song ends at tick %d", len(scheduled), end_tick)
    return scheduled


def absolute_ticks(scheduled: Iterable[ScheduledEvent]) -> List[int]:
    """Rebuild absolute ticks from delta times."""
    ticks = []
    current = 0
    for item in scheduled:
        current += item.delta
        ticks.append(current)
    return ticks
