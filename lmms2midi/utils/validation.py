"""
Data validation utilities for MIDI export.
"""

from typing import Tuple


class ValidationError(Exception):
    """Raised when a value cannot be represented in a MIDI file."""

    pass


class InternalConsistencyError(RuntimeError):
    """
    Raised when an engine invariant is broken.

    This indicates a defect in the converter itself, never bad input, and
    always aborts the conversion.
    """

    pass


def is_midi_value(value: int) -> bool:
    """Check that a value is in MIDI data byte range (0-127)."""
    return 0 <= value <= 127


def validate_midi_value(value: int, name: str = "value") -> None:
    """
    Validate that a value is in MIDI range (0-127).

    Args:
        value: The value to validate
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    if not is_midi_value(value):
        raise ValidationError(f"{name} must be 0-127, got {value}")


def validate_tempo(bpm: int) -> None:
    """
    Validate that a tempo fits the 24-bit set_tempo meta event.

    Raises:
        ValidationError: If tempo is not representable
    """
    if bpm <= 0 or 60_000_000 // bpm > 0xFFFFFF:
        raise ValidationError(f"Tempo must be at least 4 BPM, got {bpm}")


def sanitize_text(text: str) -> Tuple[str, bool]:
    """
    Make text safe for a MIDI meta event.

    Args:
        text: Text to store in a meta event

    Returns:
        Tuple of (ASCII text with other characters replaced by '?',
        whether any replacement happened)
    """
    cleaned = text.encode("ascii", errors="replace").decode("ascii")
    return cleaned, cleaned != text
