"""
Check command - report what a MIDI export of a project would get wrong.
"""

from collections import Counter
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import category_label
from cli.display.tables import display_diagnostics

console = Console()
app = typer.Typer()


@app.command()
def check(
    source: Path = typer.Argument(..., help="LMMS project (.mmp or .mmpz)"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 1 on any warning"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum warnings to list"),
) -> None:
    """
    Convert in memory and list channel, polyphony and overlap warnings.

    No file is written. Warnings never stop a conversion; use --strict
    to turn them into a failing exit code.

    Examples:

        lmms2midi check song.mmpz

        lmms2midi check song.mmpz --strict
    """
    if not source.exists():
        console.print(f"[red]Error: File not found: {source}[/red]")
        raise typer.Exit(1)

    from lmms2midi.converters.lmms_to_midi import LmmsToMidiConverter
    from lmms2midi.formats.lmms.reader import LmmsReader

    try:
        project = LmmsReader.read(source)
        result = LmmsToMidiConverter().convert(project)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    diagnostics = result.diagnostics
    status = "[green]Clean[/green]" if not diagnostics else "[yellow]Warnings[/yellow]"
    console.print(
        Panel(
            f"[bold]File:[/bold] {source}\n[bold]Status:[/bold] {status}",
            title="[bold blue]Export Check[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if diagnostics:
        counts = Counter(d.category for d in diagnostics)
        summary = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        summary.add_column("Category")
        summary.add_column("Count", justify="right")
        for category, count in counts.most_common():
            summary.add_row(category_label(category), str(count))
        console.print(summary)

    display_diagnostics(diagnostics, limit=limit)

    if strict and diagnostics:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
