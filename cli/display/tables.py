"""
Rich table displays for project and conversion information.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import (
    category_label,
    format_channel,
    format_ticks,
    pan_bar,
    value_bar,
)
from lmms2midi.converters.channels import ChannelAssignment
from lmms2midi.converters.lmms_to_midi import ConversionResult
from lmms2midi.models.diagnostic import Diagnostic
from lmms2midi.models.project import Project, Track, is_percussion_track, is_sf2_track
from lmms2midi.utils.remap import channel_volume

console = Console()


def track_kind(track: Track) -> str:
    """Short description of how a track is exported."""
    if not is_sf2_track(track):
        return "[dim]not SF2[/dim]"
    if is_percussion_track(track):
        return "[magenta]Drums[/magenta]"
    return "[cyan]Melodic[/cyan]"


def display_project_info(project: Project, filepath: Optional[str] = None) -> None:
    """Display project header, timeline and track list."""
    head = project.head

    header_content = f"""[bold]File:[/bold] {filepath or "N/A"}
[bold]Creator:[/bold] {project.creator} {project.creator_version}
[bold]Tempo:[/bold] {head.bpm} BPM
[bold]Time Signature:[/bold] {head.time_signature_numerator}/{head.time_signature_denominator}
[bold]Master Pitch:[/bold] {head.master_pitch:+d} semitones
[bold]Master Volume:[/bold] {head.master_volume}%
[bold]Length:[/bold] {format_ticks(project.length_ticks)}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]LMMS Project Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if project.timeline is not None:
        timeline = project.timeline
        state = "[green]On[/green]" if timeline.loop_enabled else "[dim]Off[/dim]"
        console.print(
            Panel(
                f"[bold]Loop:[/bold] {state}  "
                f"{format_ticks(timeline.loop_start)} - {format_ticks(timeline.loop_end)} "
                f"[dim](ticks {timeline.loop_start}-{timeline.loop_end})[/dim]",
                title="[bold cyan]Timeline[/bold cyan]",
                border_style="cyan",
                expand=False,
            )
        )

    display_tracks(project.tracks)


def display_tracks(tracks: List[Track]) -> None:
    """Display the track list with instrument and mixer settings."""
    table = Table(title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold green")
    table.add_column("#", style="dim", width=3)
    table.add_column("Name", style="cyan", width=20)
    table.add_column("Kind", width=9)
    table.add_column("Bank:Patch", width=10)
    table.add_column("Volume", width=22)
    table.add_column("Pan", width=17)
    table.add_column("Patterns", justify="right", width=8)
    table.add_column("Notes", justify="right", width=6)
    table.add_column("Status", width=8)

    for index, track in enumerate(tracks, start=1):
        settings = track.instrument
        program = "-"
        if is_sf2_track(track):
            program = f"{track.sf2_player.bank}:{track.sf2_player.patch}"

        if track.muted:
            status = "[dim]Muted[/dim]"
        elif track.solo:
            status = "[yellow]Solo[/yellow]"
        else:
            status = "[green]On[/green]"

        table.add_row(
            str(index),
            track.name,
            track_kind(track),
            program,
            value_bar(channel_volume(settings.volume)),
            pan_bar(settings.panning),
            str(len(track.patterns)),
            str(track.note_count),
            status,
        )

    console.print(table)


def display_channel_map(assignment: ChannelAssignment) -> None:
    """Display which track plays on which MIDI channel."""
    table = Table(
        title="MIDI Channels", box=box.ROUNDED, show_header=True, header_style="bold magenta"
    )
    table.add_column("Ch", width=3)
    table.add_column("Track", style="cyan", width=20)
    table.add_column("Bank:Patch", width=10)
    table.add_column("Notes", justify="right", width=6)

    for slot in assignment.slots:
        player = slot.track.sf2_player
        table.add_row(
            format_channel(slot.channel),
            slot.track.name,
            f"{player.bank}:{player.patch}",
            str(slot.track.note_count),
        )

    for track in assignment.dropped_instrument + assignment.dropped_percussion:
        table.add_row("[red]--[/red]", f"[red]{track.name}[/red]", "[dim]dropped[/dim]", "")

    console.print(table)


def display_diagnostics(diagnostics: List[Diagnostic], limit: int = 50) -> None:
    """Display conversion warnings."""
    if not diagnostics:
        console.print("[green]No issues found[/green]")
        return

    table = Table(
        title=f"Warnings ({len(diagnostics)})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold yellow",
    )
    table.add_column("Position", width=10)
    table.add_column("Category", width=20)
    table.add_column("Message")

    for diagnostic in diagnostics[:limit]:
        position = format_ticks(diagnostic.tick) if diagnostic.tick is not None else "-"
        table.add_row(position, category_label(diagnostic.category), diagnostic.message)

    console.print(table)
    if len(diagnostics) > limit:
        console.print(f"[dim]... {len(diagnostics) - limit} more[/dim]")


def display_conversion_summary(result: ConversionResult) -> None:
    """Display event statistics of a conversion."""
    table = Table(title="Conversion", box=box.SIMPLE, show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Channels", str(len(result.assignment.slots)))
    table.add_row("Events", str(len(result.scheduled)))
    table.add_row("Notes", str(result.note_count))
    table.add_row("Ticks per beat", str(result.ticks_per_beat))
    table.add_row("Length", format_ticks(result.length_ticks))

    console.print(table)
