"""
Playback checks over a scheduled event sequence.

Walks the final event order once and reports what a typical General MIDI
synthesizer would render badly:

- More simultaneous notes than its voice limit
- A key retriggered on a channel before its previous note was released

Both are reported as diagnostics; the events are never changed. Counter
underflow means the converter produced unmatched note events and raises
InternalConsistencyError.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from lmms2midi.models.diagnostic import Category, Diagnostic
from lmms2midi.models.event import EventKind, ScheduledEvent
from lmms2midi.utils.validation import InternalConsistencyError

# Voices of a typical downstream synthesizer
POLYPHONY_LIMIT = 24


class EventValidator:
    """
    Single-pass polyphony and note overlap checker.

    Example:
        diagnostics = EventValidator().validate(result.scheduled)
    """

    def __init__(self, polyphony_limit: int = POLYPHONY_LIMIT):
        self.polyphony_limit = polyphony_limit

    def validate(self, scheduled: Iterable[ScheduledEvent]) -> List[Diagnostic]:
        """
        Check a scheduled sequence.

        Args:
            scheduled: Events in playback order

        Returns:
            Diagnostics in the order they were found

        Raises:
            InternalConsistencyError: If note-offs do not match note-ons
        """
        diagnostics: List[Diagnostic] = []
        polyphony = 0
        over_limit = False
        active: Dict[Tuple[int, int], int] = defaultdict(int)

        for item in scheduled:
            event = item.event
            key = (event.channel, event.note)

            if event.kind == EventKind.NOTE_ON:
                polyphony += 1
                if polyphony > self.polyphony_limit and not over_limit:
                    over_limit = True
                    diagnostics.append(
                        Diagnostic(
                            Category.EXCESSIVE_POLYPHONY,
                            f"Excessive polyphony: more than {self.polyphony_limit} "
                            f"notes playing at once",
                            tick=event.tick,
                        )
                    )

                active[key] += 1
                if active[key] >= 2:
                    diagnostics.append(
                        Diagnostic(
                            Category.NOTE_OVERLAP,
                            f"Note overlap: key {event.note} on channel {event.channel + 1} "
                            f"triggered {active[key]} times without release",
                            tick=event.tick,
                        )
                    )

            elif event.kind == EventKind.NOTE_OFF:
                polyphony -= 1
                if polyphony < 0:
                    raise InternalConsistencyError(
                        f"Polyphony dropped below zero at tick {event.tick}"
                    )
                if polyphony <= self.polyphony_limit:
                    over_limit = False

                if key not in active:
                    raise InternalConsistencyError(
                        f"Note-off for untracked key {event.note} on channel "
                        f"{event.channel + 1} at tick {event.tick}"
                    )
                if active[key] == 0:
                    raise InternalConsistencyError(
                        f"Note-off for released key {event.note} on channel "
                        f"{event.channel + 1} at tick {event.tick}"
                    )
                active[key] -= 1

            elif event.kind in (
                EventKind.META,
                EventKind.CONTROL_CHANGE,
                EventKind.PROGRAM_CHANGE,
            ):
                continue
            else:
                raise ValueError(f"Unknown event kind: {event.kind}")

        return diagnostics


def validate_events(
    scheduled: Iterable[ScheduledEvent], polyphony_limit: int = POLYPHONY_LIMIT
) -> List[Diagnostic]:
    """Check a scheduled sequence with an EventValidator."""
    return EventValidator(polyphony_limit).validate(scheduled)
