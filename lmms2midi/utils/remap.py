"""
Numeric range remapping with transfer curves.

LMMS stores mixer and note values on its own scales (volume 0-100, panning
-100..100, note volume 0-200). These helpers map them onto MIDI 0-127.
"""

import math
from enum import Enum


class Curve(Enum):
    """Transfer curve applied to the normalized value."""

    LINEAR = "linear"
    SQRT = "sqrt"  # Approximates perceived loudness for CC7

    def apply(self, t: float) -> float:
        if self is Curve.LINEAR:
            return t
        elif self is Curve.SQRT:
            return math.sqrt(t)
        raise ValueError(f"Unknown curve: {self}")


def remap(
    value: float,
    src_lo: float,
    src_hi: float,
    dst_lo: int,
    dst_hi: int,
    curve: Curve = Curve.LINEAR,
) -> int:
    """
    Map a value from one range onto another.

    The value is clamped to the source range first and the result is
    truncated toward zero.

    Args:
        value: Value to map
        src_lo: Source range low end
        src_hi: Source range high end
        dst_lo: Target range low end
        dst_hi: Target range high end
        curve: Transfer curve applied between the ranges

    Returns:
        Mapped integer value

    Example:
        >>> remap(100, 0, 200, 0, 127)
        63
    """
    if src_hi == src_lo:
        raise ValueError("Source range must not be empty")

    clamped = min(max(value, src_lo), src_hi)
    t = curve.apply((clamped - src_lo) / (src_hi - src_lo))
    return int(dst_lo + t * (dst_hi - dst_lo))


def note_velocity(volume: int) -> int:
    """Map LMMS note volume (0-200) to MIDI velocity."""
    return remap(volume, 0, 200, 0, 127)


def channel_volume(volume: float) -> int:
    """Map LMMS track volume (0-100) to a CC7 value."""
    return remap(volume, 0, 100, 0, 127, Curve.SQRT)


def channel_panning(panning: float) -> int:
    """Map LMMS track panning (-100..100) to a CC10 value."""
    return remap(panning, -100, 100, 0, 127)
