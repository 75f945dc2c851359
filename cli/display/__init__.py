"""
CLI display modules.
"""

from cli.display.tables import (
    display_project_info,
    display_tracks,
    display_channel_map,
    display_diagnostics,
    display_conversion_summary,
)

__all__ = [
    "display_project_info",
    "display_tracks",
    "display_channel_map",
    "display_diagnostics",
    "display_conversion_summary",
]
