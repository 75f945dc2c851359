"""Analysis of converted event sequences."""

from lmms2midi.analysis.validator import POLYPHONY_LIMIT, EventValidator, validate_events

__all__ = ["POLYPHONY_LIMIT", "EventValidator", "validate_events"]
