"""Utility functions for lmms2midi."""

from lmms2midi.utils.remap import Curve, remap, note_velocity, channel_volume, channel_panning
from lmms2midi.utils.validation import (
    InternalConsistencyError,
    ValidationError,
    sanitize_text,
    validate_midi_value,
)

__all__ = [
    "Curve",
    "remap",
    "note_velocity",
    "channel_volume",
    "channel_panning",
    "InternalConsistencyError",
    "ValidationError",
    "sanitize_text",
    "validate_midi_value",
]
