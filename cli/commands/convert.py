"""
Convert command - export an LMMS project to a MIDI file.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cli.display.tables import display_channel_map, display_conversion_summary, display_diagnostics
from lmms2midi.converters.expansion import LoopStyle

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source project (.mmp or .mmpz)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output MIDI file path"),
    loop: List[LoopStyle] = typer.Option(
        [], "--loop", "-l", help="Loop point style to write (repeatable)"
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Song name meta event"),
    copyright: Optional[str] = typer.Option(None, "--copyright", help="Copyright meta event"),
    comment: Optional[str] = typer.Option(None, "--comment", help="Comment text meta event"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Convert an LMMS project to a type 0 Standard MIDI File.

    Only SF2 player tracks are exported. Melodic tracks get channels
    1-9 and 11-16 in track order, the first drum kit (bank 128) gets
    channel 10.

    Loop styles (combine freely):

    - [cyan]cc111[/cyan]: CC111 at loop start (RPG Maker)
    - [cyan]emidi-local[/cyan]: CC116/CC117 track loop (EMIDI)
    - [cyan]emidi-global[/cyan]: CC118/CC119 song loop (EMIDI)
    - [cyan]marker[/cyan]: loopStart/loopEnd marker events

    Examples:

        lmms2midi convert song.mmpz

        lmms2midi convert song.mmp -o out/song.mid -l marker -l cc111
    """
    if not source.exists():
        console.print(f"[red]Error: Source file not found: {source}[/red]")
        raise typer.Exit(1)

    from lmms2midi.converters.lmms_to_midi import ConversionOptions, LmmsToMidiConverter
    from lmms2midi.formats.lmms.reader import LmmsReader

    output_path = output or source.with_suffix(".mid")
    options = ConversionOptions(
        loop_styles=loop, name=name, copyright=copyright, comment=comment
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Converting LMMS project to MIDI...", total=None)

        try:
            project = LmmsReader.read(source)
            result = LmmsToMidiConverter(options).convert(project)
            result.save(output_path)
            progress.update(task, description="Done!")

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(
        f"[dim]{len(result.assignment.slots)} channels, {result.note_count} notes, "
        f"{len(result.scheduled)} events[/dim]"
    )

    if verbose:
        display_channel_map(result.assignment)
        display_conversion_summary(result)

    if result.diagnostics:
        console.print()
        display_diagnostics(result.diagnostics)


if __name__ == "__main__":
    app()
