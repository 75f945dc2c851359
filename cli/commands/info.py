"""
Info command - display LMMS project information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_channel_map, display_project_info

console = Console()
app = typer.Typer()


@app.command()
def info(
    source: Path = typer.Argument(..., help="LMMS project (.mmp or .mmpz)"),
    channels: bool = typer.Option(
        False, "--channels", "-c", help="Show the MIDI channel each track would get"
    ),
) -> None:
    """
    Display project tempo, timeline and tracks.

    Examples:

        lmms2midi info song.mmpz

        lmms2midi info song.mmpz --channels
    """
    if not source.exists():
        console.print(f"[red]Error: File not found: {source}[/red]")
        raise typer.Exit(1)

    from lmms2midi.converters.channels import assign_channels
    from lmms2midi.formats.lmms.reader import LmmsReader, ProjectLoadError

    try:
        project = LmmsReader.read(source)
    except ProjectLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    display_project_info(project, str(source))

    if channels:
        display_channel_map(assign_channels(project.sf2_tracks()))


if __name__ == "__main__":
    app()
