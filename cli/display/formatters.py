"""
Display formatting utilities for CLI output.

Provides bar graphics and value formatting helpers.
"""

from lmms2midi.models.diagnostic import Category


def value_bar(
    value: int,
    max_value: int = 127,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
    show_percent: bool = True,
) -> str:
    """
    Create a text-based bar graphic with value and percentage.

    Args:
        value: Current value
        max_value: Maximum value (default 127 for MIDI)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value
        show_percent: Show percentage

    Returns:
        Formatted string like "91 [████████░░] 71%"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))

    fill_count = int((clamped / max_value) * width)
    empty_count = width - fill_count

    bar = filled_char * fill_count + empty_char * empty_count
    percent = int((clamped / max_value) * 100)

    parts = []
    if show_value:
        parts.append(f"{value:3d}")
    parts.append(f"[{bar}]")
    if show_percent:
        parts.append(f"{percent:3d}%")

    return " ".join(parts)


def pan_bar(
    pan: float,
    width: int = 11,
    left_char: str = "◀",
    right_char: str = "▶",
    center_char: str = "●",
    empty_char: str = "─",
) -> str:
    """
    Create a centered pan bar graphic for LMMS panning (-100..100).

    Returns:
        Formatted string like "L 50 [──◀──●─────]"
    """
    center = width // 2
    bar = list(empty_char * width)
    bar[center] = center_char

    amount = int(round(max(-100.0, min(100.0, pan))))
    if amount == 0:
        position_str = "  C"
    elif amount < 0:
        pos = center - int((-amount / 100) * center)
        bar[pos] = left_char
        position_str = f"L{-amount:3d}"
    else:
        pos = min(width - 1, center + int((amount / 100) * (width - center - 1)))
        bar[pos] = right_char
        position_str = f"R{amount:3d}"

    return f"{position_str} [{''.join(bar)}]"


def format_ticks(ticks: int, ticks_per_bar: int = 192) -> str:
    """Format a tick position as bar:beat:tick (1-based bar and beat)."""
    ticks_per_beat = ticks_per_bar // 4
    bar, rest = divmod(ticks, ticks_per_bar)
    beat, tick = divmod(rest, ticks_per_beat)
    return f"{bar + 1}:{beat + 1}:{tick:02d}"


def format_channel(channel: int) -> str:
    """Format a zero-based channel index as the 1-based MIDI channel."""
    return f"{channel + 1:2d}"


CATEGORY_STYLES = {
    Category.CHANNEL_OVERFLOW: "red",
    Category.NON_ASCII_TEXT: "yellow",
    Category.NOTE_OUT_OF_RANGE: "red",
    Category.EXCESSIVE_POLYPHONY: "magenta",
    Category.NOTE_OVERLAP: "yellow",
}


def category_label(category: Category) -> str:
    """Rich markup label for a diagnostic category."""
    style = CATEGORY_STYLES.get(category, "white")
    return f"[{style}]{category.value}[/{style}]"
