"""
Conversion diagnostics.

Recoverable conditions found while converting are collected as Diagnostic
records rather than raised, so a conversion always runs to completion and
the caller decides how to report them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    WARNING = "warning"


class Category(str, Enum):
    """Kinds of recoverable conversion issues."""

    CHANNEL_OVERFLOW = "channel-overflow"
    NON_ASCII_TEXT = "non-ascii-text"
    NOTE_OUT_OF_RANGE = "note-out-of-range"
    EXCESSIVE_POLYPHONY = "excessive-polyphony"
    NOTE_OVERLAP = "note-overlap"


@dataclass
class Diagnostic:
    """A single conversion issue."""

    category: Category
    message: str
    tick: Optional[int] = None
    severity: Severity = Severity.WARNING

    def __str__(self) -> str:
        if self.tick is None:
            return f"{self.severity.value}: {self.message}"
        return f"{self.severity.value}: {self.message} (tick {self.tick})"
